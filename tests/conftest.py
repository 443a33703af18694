"""pytest設定とフィクスチャ"""

import os
import sys
from pathlib import Path
import shutil

import pytest

# srcディレクトリとプロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
sys.path.insert(0, str(src_dir))
sys.path.insert(0, str(project_root))

# テスト実行前に.envファイルを準備(.env.exampleからコピー)
env_file = project_root / ".env"
env_example = project_root / ".env.example"
if not env_file.exists() and env_example.exists():
    shutil.copy(env_example, env_file)

# テスト用環境変数を設定 (MySQLの代わりにインメモリSQLite)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["POLISHING_EQUIPMENT_ID"] = "7"
os.environ["POLISHING_PRODUCT_ID"] = "1"

# 本番DBと同じテーブル構成 (ストアドプロシージャはSQLiteでは再現しない)
SCHEMA = [
    "CREATE TABLE equipment (equipment_id INTEGER PRIMARY KEY, title TEXT NOT NULL)",
    """CREATE TABLE equipment_failures (
        failure_id INTEGER PRIMARY KEY,
        equipment_id INTEGER NOT NULL,
        process_name TEXT NOT NULL,
        failure_reason TEXT NOT NULL,
        failure_date TEXT NOT NULL,
        restore_date TEXT
    )""",
    """CREATE TABLE finished_products (
        product_id INTEGER PRIMARY KEY,
        title TEXT NOT NULL,
        batch_number TEXT NOT NULL
    )""",
    "CREATE TABLE number_of_defects (product_id INTEGER PRIMARY KEY, value INTEGER)",
    """CREATE TABLE production_logs (
        log_id INTEGER PRIMARY KEY,
        product_id INTEGER NOT NULL,
        log_message TEXT NOT NULL,
        log_time TEXT NOT NULL
    )""",
]

SEED = [
    "INSERT INTO equipment VALUES (1, 'Фильтр'), (3, 'Пресс'), (7, 'Полировщик')",
    """INSERT INTO equipment_failures VALUES
        (1, 1, 'Фильтрация', 'Засор', '2025-11-10T08:00:00', '2025-11-10T12:00:00'),
        (2, 7, 'Полировка', 'Перегрев', '2025-11-12T10:30:00', NULL)""",
    """INSERT INTO finished_products VALUES
        (1, 'Линза А', 'B-001'), (2, 'Линза Б', 'B-002'), (3, 'Линза В', 'B-003')""",
    "INSERT INTO number_of_defects VALUES (1, 3), (2, 0), (3, 0)",
    """INSERT INTO production_logs VALUES
        (1, 1, 'Брак превышен на оборудовании 3', '2025-11-12T11:00:00'),
        (2, 1, 'Оборудование 7: температура выше нормы', '2025-11-12T10:00:00'),
        (3, 1, 'Оборудование 7 OK', '2025-11-12T08:00:00'),
        (4, 2, 'Давление на оборудовании 1 снижено', '2025-11-12T07:00:00')""",
]


@pytest.fixture
def project_root_path():
    """プロジェクトルートのパスを返す"""
    return Path(__file__).parent.parent


@pytest.fixture
def sqlite_engine():
    """テーブルとサンプルデータを投入済みのインメモリSQLiteエンジン"""
    from sqlalchemy import text

    from backend.db import create_db_engine

    engine = create_db_engine("sqlite://")
    with engine.begin() as conn:
        for statement in SCHEMA + SEED:
            conn.execute(text(statement))
    yield engine
    engine.dispose()


@pytest.fixture
def repository(sqlite_engine):
    """SQLiteに接続したProductionRepository"""
    from backend.db import ProductionRepository

    return ProductionRepository(sqlite_engine)


@pytest.fixture(autouse=True)
def reset_db_service():
    """DatabaseServiceの接続状態をテストごとにリセット

    ルートはモジュールレベルの db_service を参照するため、
    インスタンスは作り直さず接続だけを破棄する。
    """
    yield
    try:
        from api.services.db_service import db_service

        db_service.shutdown()
    except ImportError:
        pass  # インポートできない場合はスキップ
