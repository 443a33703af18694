#!/usr/bin/env python3
"""レンズ製造モニタリング ランチャー

FastAPI (バックエンド) をuvicornで起動し、/health で起動を確認した後、
プロセスを監視する。Ctrl+C / SIGTERM で安全に停止する。

使い方:
    python main.py
    または
    uv run python main.py
"""

import atexit
import signal
import subprocess
import sys
import time
from pathlib import Path
from typing import Optional
from logging import Logger

import httpx

# プロジェクトルートをPythonパスに追加（インポートパス解決のため）
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))


# --------------------------
#  プロセス管理
# --------------------------
class ProcessManager:
    """APIサーバープロセスのライフサイクルを管理"""

    def __init__(self, logger: Logger) -> None:
        self.logger = logger
        self.api_process: Optional[subprocess.Popen] = None

    def cleanup(self) -> None:
        """APIサーバーを安全に停止 (SIGTERM → lifespanでDBプール破棄)"""
        if self.api_process and self.api_process.poll() is None:
            self.logger.info("APIサーバーを停止中...")
            self.api_process.terminate()
            try:
                self.api_process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                self.logger.warning("APIサーバーの停止がタイムアウト、強制終了します")
                self.api_process.kill()
                self.api_process.wait()
            self.logger.info("シャットダウン完了")


def start_api_server(logger: Logger, host: str, port: int) -> subprocess.Popen:
    """FastAPI サーバーを起動

    Returns:
        subprocess.Popen: APIサーバープロセス
    """
    logger.info(f"APIサーバーを起動中... ({host}:{port})")

    return subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "src.api.main:app",
            "--host",
            host,
            "--port",
            str(port),
        ],
        cwd=project_root,
    )


def wait_for_api_ready(
    logger: Logger, process: subprocess.Popen, host: str, port: int, timeout: int
) -> bool:
    """APIサーバーの起動を待機

    DBに接続できない場合はlifespanで起動失敗し、プロセスが終了する。

    Returns:
        bool: 起動成功ならTrue
    """
    logger.info("APIサーバーの起動を待機中...")

    for _ in range(timeout):
        if process.poll() is not None:
            logger.error(f"APIサーバーが終了しました (exit={process.returncode})")
            return False
        try:
            response = httpx.get(f"http://{host}:{port}/health", timeout=2.0)
            if response.status_code == 200:
                logger.info("✓ APIサーバー正常起動")
                return True
        except httpx.HTTPError:
            pass
        time.sleep(1)

    logger.error("APIサーバーの起動がタイムアウトしました")
    return False


def main() -> None:
    """メインエントリーポイント"""
    from backend.logging import launcher_logger as logger
    from backend.config_helpers import get_api_address, get_api_startup_timeout

    host, port = get_api_address()

    manager = ProcessManager(logger)

    def signal_handler(signum: int, frame: object) -> None:
        manager.cleanup()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)
    atexit.register(manager.cleanup)

    try:
        manager.api_process = start_api_server(logger, host, port)

        if not wait_for_api_ready(
            logger, manager.api_process, host, port, get_api_startup_timeout()
        ):
            logger.error("APIサーバーの起動に失敗しました")
            manager.cleanup()
            sys.exit(1)

        print()
        print(f"  API:   http://{host}:{port}")
        print(f"  Docs:  http://{host}:{port}/docs")
        print()
        print("Ctrl+C で終了")
        print()

        while manager.api_process.poll() is None:
            time.sleep(2)
        logger.error("APIサーバーが予期せず停止しました")

    except KeyboardInterrupt:
        logger.info("ユーザーによる停止")

    finally:
        manager.cleanup()
        sys.exit(0)


if __name__ == "__main__":
    main()
