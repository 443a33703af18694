from pathlib import Path

from .logger import set_log_level, setup_logger

# プロジェクトルートのlogsフォルダを使用
# src/backend/logging/__init__.py → 3つ上がプロジェクトルート
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_LOGS_DIR = _PROJECT_ROOT / "logs"

# アプリケーション全体で共通のロガー設定
launcher_logger = setup_logger(
    "backend.launcher", log_file=str(_LOGS_DIR / "launcher.log")
)
db_logger = setup_logger("backend.db", log_file=str(_LOGS_DIR / "db.log"))
enrich_logger = setup_logger(
    "backend.enricher", log_file=str(_LOGS_DIR / "backend.log"), level=20
)  # INFO
api_logger = setup_logger("api", log_file=str(_LOGS_DIR / "api.log"), level=20)  # INFO

__all__ = [
    "setup_logger",
    "set_log_level",
    "launcher_logger",
    "db_logger",
    "enrich_logger",
    "api_logger",
]
