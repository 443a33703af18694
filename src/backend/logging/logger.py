import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: int | str = logging.DEBUG,
    console: bool = True,
    file_encoding: str = "utf-8",
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    ロガーをセットアップする

    Args:
        name: ロガー名（通常は __name__ を渡す）
        log_file: ログファイルのパス（Noneの場合はファイル出力なし）
        level: ログレベル（数値または "INFO" などのレベル名）
        console: コンソール出力するかどうか
        file_encoding: ログファイルのエンコーディング
        max_bytes: ローテーションするファイルサイズ
        backup_count: 保持する世代数

    Returns:
        設定済みのロガーインスタンス
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 既存のハンドラをクリア（重複防止）
    if logger.handlers:
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding=file_encoding,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def set_log_level(level: int | str, *loggers: logging.Logger) -> None:
    """
    既存ロガーのログレベルをまとめて変更する

    Settings.LOG_LEVEL をAPI起動時に反映するために使う。

    Args:
        level: ログレベル
        *loggers: 対象ロガー
    """
    for logger in loggers:
        logger.setLevel(level)
