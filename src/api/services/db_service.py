"""DBサービス

SQLAlchemyエンジンとProductionRepositoryをAPIサーバー内で一元管理する
シングルトンサービス。MessageEnricherもここでリポジトリに結び付ける。

ライフサイクル:
- initialize(): エンジン生成 → 疎通確認 → リポジトリ/エンリッチャー生成
- shutdown(): コネクションプールを破棄
"""

import threading
from datetime import datetime
from typing import Any

from sqlalchemy import make_url
from sqlalchemy.engine import Engine

from backend.config_helpers import get_database_url, get_db_pool_options
from backend.db import BaseProductionRepository, ProductionRepository, create_db_engine
from backend.enricher import MessageEnricher
from backend.logging import api_logger as logger


class DatabaseUnavailableError(Exception):
    """DBに接続できない"""

    pass


class DatabaseNotInitializedError(RuntimeError):
    """initialize() 前にDBへアクセスしようとした"""

    pass


class DatabaseService:
    """DBサービス (シングルトン)

    APIサーバー内でDB接続を一元管理。
    リクエストごとの状態は持たず、各リクエストはリポジトリ経由で
    プールからコネクションを取得する。
    """

    _instance: "DatabaseService | None" = None
    _lock = threading.Lock()
    _initialized: bool = False

    def __new__(cls) -> "DatabaseService":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return
        self._initialized = True

        self._database_url = get_database_url()
        self._engine: Engine | None = None
        self._repository: BaseProductionRepository | None = None
        self._enricher: MessageEnricher | None = None
        self._started_at: datetime | None = None

        logger.info(f"DatabaseService created (url={self._masked_url()})")

    def _masked_url(self) -> str:
        """ログ出力用にパスワードを伏せたURL"""
        return make_url(self._database_url).render_as_string(hide_password=True)

    def initialize(
        self,
        engine: Engine | None = None,
        repository: BaseProductionRepository | None = None,
    ) -> None:
        """DB接続を初期化

        Args:
            engine: 使用するエンジン (Noneの場合は設定から生成)
            repository: 使用するリポジトリ (テスト用。指定時はengineより優先)

        Raises:
            DatabaseUnavailableError: 疎通確認に失敗した場合
        """
        if repository is None:
            if engine is None:
                pool_recycle, connect_timeout = get_db_pool_options()
                engine = create_db_engine(
                    self._database_url,
                    pool_recycle=pool_recycle,
                    connect_timeout=connect_timeout,
                )
            repository = ProductionRepository(engine)

        if not repository.ping():
            if engine is not None:
                engine.dispose()
            raise DatabaseUnavailableError(
                f"Cannot connect to DB: {self._masked_url()}"
            )

        self._engine = engine
        self._repository = repository
        self._enricher = MessageEnricher(repository.fetch_equipment_titles)
        self._started_at = datetime.now()
        logger.info("Database connection initialized")

    def shutdown(self) -> None:
        """コネクションプールを破棄"""
        if self._engine is not None:
            try:
                self._engine.dispose()
                logger.info("Database connections closed")
            except Exception as e:
                logger.warning(f"Error during engine dispose: {e}")
        self._engine = None
        self._repository = None
        self._enricher = None
        self._started_at = None

    @property
    def repository(self) -> BaseProductionRepository:
        if self._repository is None:
            raise DatabaseNotInitializedError(
                "DatabaseService not initialized. Call initialize() first."
            )
        return self._repository

    @property
    def enricher(self) -> MessageEnricher:
        if self._enricher is None:
            raise DatabaseNotInitializedError(
                "DatabaseService not initialized. Call initialize() first."
            )
        return self._enricher

    def enrich(self, message: str) -> str:
        """メッセージ中の設備ID参照を設備名付きにする (失敗しない)"""
        return self.enricher.enrich(message)

    def is_ready(self) -> bool:
        return self._repository is not None

    def ping_db(self) -> bool:
        """DB疎通確認 (未初期化ならFalse)"""
        if self._repository is None:
            return False
        return self._repository.ping()

    def get_status(self) -> dict[str, Any]:
        """サービス状態を取得

        Returns:
            dict: 状態情報
        """
        return {
            "db_service_ready": self.is_ready(),
            "database": self._masked_url(),
            "started_at": (
                self._started_at.isoformat() if self._started_at else None
            ),
        }


# シングルトンインスタンス
db_service = DatabaseService()
