"""設定取得ヘルパー関数

環境変数やPydantic Settingsから各種設定値を取得する関数群。
モジュールレベルでSettingsをシングルトン化し、効率的にアクセス。
"""

from config.settings import LogLevel, Settings

# 設定のシングルトンインスタンス（モジュールレベルで1回だけ初期化）
_settings = Settings()


def get_database_url() -> str:
    """DATABASE_URL設定を取得

    Returns:
        str: SQLAlchemy接続URL
    """
    return _settings.DATABASE_URL


def get_db_pool_options() -> tuple[int, int]:
    """DBコネクションプールの設定を取得

    Returns:
        tuple[int, int]: (DB_POOL_RECYCLE, DB_CONNECT_TIMEOUT) いずれも秒
    """
    return _settings.DB_POOL_RECYCLE, _settings.DB_CONNECT_TIMEOUT


def get_log_level() -> LogLevel:
    """ログレベルを取得

    Returns:
        LogLevel: ログレベル (Enum)
    """
    return _settings.LOG_LEVEL


def get_api_address() -> tuple[str, int]:
    """APIサーバーのホストとポートを取得

    Returns:
        tuple[str, int]: (API_HOST, API_PORT)
    """
    return _settings.API_HOST, _settings.API_PORT


def get_api_startup_timeout() -> int:
    return _settings.API_STARTUP_TIMEOUT


def get_static_dir() -> str:
    """フロントエンド静的ファイルのディレクトリを取得

    Returns:
        str: STATIC_DIR (相対パスはカレントディレクトリ基準)
    """
    return _settings.STATIC_DIR


def get_polishing_target() -> tuple[int, int]:
    """研磨チェック対象の設備IDと製品IDを取得

    Returns:
        tuple[int, int]: (設備ID, 製品ID)

    Examples:
        >>> equipment_id, product_id = get_polishing_target()
        >>> print(equipment_id)  # 7
    """
    return _settings.POLISHING_EQUIPMENT_ID, _settings.POLISHING_PRODUCT_ID
