"""FastAPI メインアプリケーション

レンズ製造モニタリングのバックエンドAPI。
生産DB (MySQL) へのアクセスを一元管理し、フロントエンドにRESTful APIを提供。

起動方法:
    uvicorn src.api.main:app --host 127.0.0.1 --port 8080
"""

import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from dotenv import load_dotenv

# プロジェクトルートをパスに追加
sys.path.insert(0, str(Path(__file__).parent.parent))

# .envファイルを読み込む
load_dotenv()

from api.routes import options, production
from api.services.db_service import DatabaseNotInitializedError, db_service
from backend.config_helpers import get_log_level, get_static_dir
from backend.logging import api_logger as logger
from backend.logging import db_logger, enrich_logger, set_log_level


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """アプリケーションのライフサイクル管理

    起動時: DB接続を初期化 (接続できなければ起動失敗)
    終了時: コネクションプールを破棄
    """
    set_log_level(get_log_level().value, logger, db_logger, enrich_logger)
    logger.info("API Server starting...")
    db_service.initialize()

    yield

    logger.info("API Server shutting down...")
    db_service.shutdown()
    logger.info("API Server shutdown complete")


app = FastAPI(
    title="Lens Production API",
    description="レンズ製造モニタリング バックエンドAPI",
    version="1.0.0",
    lifespan=lifespan,
)

# ルーター登録
app.include_router(production.router, prefix="/api", tags=["production"])
app.include_router(options.router, prefix="/api", tags=["options"])


def mount_frontend(target: FastAPI, static_dir: Path) -> bool:
    """フロントエンド静的ファイルを /static にマウント

    Args:
        target: マウント先のアプリケーション
        static_dir: 静的ファイルのディレクトリ

    Returns:
        bool: マウントした場合True (ディレクトリがなければ何もしない)
    """
    if not static_dir.is_dir():
        logger.info(f"Static directory not found, frontend disabled: {static_dir}")
        return False
    target.mount(
        "/static", StaticFiles(directory=static_dir, html=True), name="static"
    )
    return True


_frontend_mounted = mount_frontend(app, Path(get_static_dir()))


@app.exception_handler(RequestValidationError)
async def bad_request_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """不正なリクエストボディは 400 Bad request を返す"""
    logger.warning(f"Bad request on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": "Bad request"})


@app.exception_handler(DatabaseNotInitializedError)
async def db_not_ready_handler(
    request: Request, exc: DatabaseNotInitializedError
) -> JSONResponse:
    """DB未初期化時は 503 を返す"""
    logger.error(f"Request before DB initialization: {request.url.path}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """ルートパス

    APIサーバーの情報を返す。
    フロントエンドは "/" ではなく "/static/" 以下で配信する。
    静的ファイルをマウントしていなければ frontend は空文字。
    """
    return {
        "name": "Lens Production API",
        "docs": "/docs",
        "health": "/health",
        "frontend": "/static/" if _frontend_mounted else "",
    }


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str | int]:
    """ヘルスチェック (軽量)

    DB通信は行わず、APIプロセスの生存確認のみを行う。

    Returns:
        {"status": "ok", "pid": <プロセスID>}
    """
    return {"status": "ok", "pid": os.getpid()}


@app.get("/ready", tags=["health"])
def readiness_check() -> dict[str, str | int | bool | None]:
    """レディネスチェック

    DBサービスの初期化状態と SELECT 1 による疎通を確認する。

    Returns:
        {"status": "ok" | "unhealthy", "pid": <PID>, "db_service_ready",
         "db_alive", "database": <接続先 (パスワード伏せ字)>, "started_at"}
    """
    status = db_service.get_status()
    db_alive = db_service.ping_db()

    return {
        "status": "ok" if status["db_service_ready"] and db_alive else "unhealthy",
        "pid": os.getpid(),
        **status,
        "db_alive": db_alive,
    }
