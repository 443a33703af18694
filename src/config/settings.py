import os
from enum import Enum
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Any


class LogLevel(str, Enum):
    """ログレベル

    Attributes:
        DEBUG: デバッグ情報
        INFO: 通常情報
        WARNING: 警告
        ERROR: エラー
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    """アプリケーション設定 (Pydantic Settings)

    .envファイルから環境変数を読み込み、型安全な設定管理を提供する。

    Attributes:
        DATABASE_URL: SQLAlchemy接続URL (本番はMySQL + PyMySQL)
        DB_POOL_RECYCLE: コネクション再生成間隔(秒) - MySQLのwait_timeout対策
        DB_CONNECT_TIMEOUT: DB接続タイムアウト(秒)
        API_HOST: APIサーバーホスト (デフォルト: 127.0.0.1)
        API_PORT: APIサーバーポート (デフォルト: 8080)
        API_STARTUP_TIMEOUT: ランチャーがAPI起動を待つ最大秒数
        LOG_LEVEL: ログレベル (LogLevel Enum)
        STATIC_DIR: フロントエンド静的ファイルのディレクトリ
        POLISHING_EQUIPMENT_ID: 研磨設備の設備ID
        POLISHING_PRODUCT_ID: 研磨チェック対象の製品ID
    """

    DATABASE_URL: str = "mysql+pymysql://root@localhost:3306/lesha?charset=utf8mb4"
    DB_POOL_RECYCLE: int = Field(default=3600, ge=60, le=28800)
    DB_CONNECT_TIMEOUT: int = Field(default=10, ge=1, le=60)

    API_HOST: str = "127.0.0.1"
    API_PORT: int = Field(default=8080, gt=0, le=65535)
    API_STARTUP_TIMEOUT: int = Field(default=30, ge=5, le=120)

    LOG_LEVEL: LogLevel = LogLevel.INFO
    STATIC_DIR: str = "static"

    # 研磨工程チェック (/api/polishing)
    POLISHING_EQUIPMENT_ID: int = Field(default=7, gt=0)
    POLISHING_PRODUCT_ID: int = Field(default=1, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self: Any, **kwargs: Any) -> None:
        # 環境変数プレセット: DEBUG_LOG が真なら LOG_LEVEL を DEBUG にする
        # ユーザーが明示的に LOG_LEVEL を設定している場合は上書きしない
        if "LOG_LEVEL" not in kwargs and os.getenv("LOG_LEVEL") is None:
            debug_env = os.getenv("DEBUG_LOG")
            if isinstance(debug_env, str) and debug_env.lower() in (
                "1",
                "true",
                "yes",
                "on",
            ):
                kwargs.setdefault("LOG_LEVEL", LogLevel.DEBUG)

        # .envファイルの存在チェック
        if not os.path.exists(".env") and not kwargs:
            raise FileNotFoundError(
                "\n❌ .env file not found.\n"
                "Please copy .env.example to .env and configure it:\n"
                "  cp .env.example .env  (Linux/Mac)\n"
                "  Copy-Item .env.example .env  (Windows)\n"
            )

        super().__init__(**kwargs)
