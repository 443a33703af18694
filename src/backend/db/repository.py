"""生産DBアクセス (SQLAlchemy Core)

テーブル・ストアドプロシージャはDB側で定義済みの前提。
ここでは text() によるSQL発行と結果の詰め替えのみを行う。

使用テーブル:
- equipment (equipment_id, title)
- equipment_failures (equipment_id, process_name, failure_reason,
  failure_date, restore_date)
- finished_products (product_id, title, batch_number)
- number_of_defects (product_id, value)
- production_logs (product_id, log_message, log_time)
"""

from sqlalchemy import create_engine, make_url, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from backend.db.base import BaseProductionRepository
from backend.logging import db_logger as logger
from schemas import FailureRecord, LensOrder

_SELECT_EQUIPMENT = text("SELECT equipment_id, title FROM equipment")

_SELECT_FAILURES = text(
    """
    SELECT e.title, ef.process_name, ef.failure_reason, ef.failure_date, ef.restore_date
    FROM equipment_failures ef
    JOIN equipment e ON ef.equipment_id = e.equipment_id
    ORDER BY ef.failure_date DESC
    """
)

_CALL_PROCESS_LENS_ORDER = text(
    "CALL process_lens_order(:lens_name, :opt_power, :base_curve, :diameter, "
    ":thickness, :equipment_id, :speed, :pressure, :temperature)"
)

_SELECT_CALC_OUTPUT = text("SELECT calc_output(:speed, :pressure, :temperature)")

_UPDATE_DEFECTS = text(
    "UPDATE number_of_defects SET value = :value WHERE product_id = :product_id"
)

_SELECT_LATEST_LOG = text(
    "SELECT log_message FROM production_logs WHERE product_id = :product_id "
    "ORDER BY log_time DESC LIMIT 1"
)

_SELECT_LATEST_LOG_WITH_PREFIX = text(
    "SELECT log_message FROM production_logs WHERE product_id = :product_id "
    "AND log_message LIKE :pattern ORDER BY log_time DESC LIMIT 1"
)

_CALL_CHECK_EQUIPMENT_PARAMETERS = text(
    "CALL check_equipment_parameters(:equipment_id, :product_id)"
)

_SELECT_PRODUCTS = text(
    "SELECT product_id, title, batch_number FROM finished_products"
)


def create_db_engine(
    url: str, pool_recycle: int = 3600, connect_timeout: int = 10
) -> Engine:
    """SQLAlchemyエンジンを生成する

    Args:
        url: 接続URL (例: mysql+pymysql://root@localhost:3306/lesha)
        pool_recycle: コネクション再生成間隔(秒)
        connect_timeout: 接続タイムアウト(秒)

    Returns:
        Engine: SQLAlchemyエンジン

    Note:
        SQLiteのインメモリDBはコネクションごとに別DBになるため、
        StaticPoolで1本のコネクションを共有する (テスト用)。
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        if parsed.database in (None, "", ":memory:"):
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=pool_recycle,
        connect_args={"connect_timeout": connect_timeout},
    )


def describe_db_error(exc: BaseException) -> str:
    """DBエラーから利用者向けのメッセージを取り出す

    MySQLのSIGNALで送出されたメッセージは、ドライバ例外の
    args = (エラーコード, メッセージ) に入っている。
    それ以外は "Error 1644 (45000): ..." のような技術的な接頭辞を
    最初の ": " まで取り除く。

    Args:
        exc: SQLAlchemyの例外 (DBAPIError) またはドライバの例外

    Returns:
        str: 接頭辞を除いたメッセージ
    """
    orig = getattr(exc, "orig", None) or exc
    args = getattr(orig, "args", ())
    if len(args) >= 2 and isinstance(args[0], int) and isinstance(args[1], str):
        return args[1]

    message = str(orig)
    _, sep, rest = message.partition(": ")
    return rest if sep else message


class ProductionRepository(BaseProductionRepository):
    """生産DBアクセスクラス

    メソッドごとにコネクションを取得し、終わったら返却する。
    更新系はトランザクション (engine.begin) で実行する。

    使用例:
        >>> repo = ProductionRepository(create_db_engine(url))
        >>> repo.fetch_equipment_titles()
        {'1': 'Фильтр', '7': 'Полировщик'}
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def fetch_equipment_titles(self) -> dict[str, str]:
        titles: dict[str, str] = {}
        with self._engine.connect() as conn:
            for equipment_id, title in conn.execute(_SELECT_EQUIPMENT):
                try:
                    titles[str(int(equipment_id))] = title
                except (TypeError, ValueError):
                    # 読めない行は読み飛ばす
                    logger.debug(f"Skipping equipment row: {equipment_id!r}")
        return titles

    def list_failures(self) -> list[FailureRecord]:
        with self._engine.connect() as conn:
            rows = conn.execute(_SELECT_FAILURES).all()
        return [
            FailureRecord(
                equipment=title,
                process=process_name,
                reason=failure_reason,
                failure_date=failure_date,
                restore_date=restore_date,
            )
            for title, process_name, failure_reason, failure_date, restore_date in rows
        ]

    def process_lens_order(self, order: LensOrder) -> None:
        logger.info(
            f"process_lens_order: lens={order.lens_name}, "
            f"equipment={order.equipment_id}"
        )
        with self._engine.begin() as conn:
            conn.execute(_CALL_PROCESS_LENS_ORDER, order.procedure_params())

    def calc_output(self, speed: float, pressure: float, temperature: float) -> int:
        with self._engine.connect() as conn:
            value = conn.execute(
                _SELECT_CALC_OUTPUT,
                {"speed": speed, "pressure": pressure, "temperature": temperature},
            ).scalar_one()
        return int(value)

    def update_defects(self, product_id: int, value: int) -> int:
        with self._engine.begin() as conn:
            result = conn.execute(
                _UPDATE_DEFECTS, {"value": value, "product_id": product_id}
            )
        logger.info(
            f"Defects updated: product_id={product_id}, value={value}, "
            f"rows={result.rowcount}"
        )
        return result.rowcount

    def latest_log_message(
        self, product_id: int, prefix: str | None = None
    ) -> str | None:
        with self._engine.connect() as conn:
            if prefix is None:
                return conn.execute(
                    _SELECT_LATEST_LOG, {"product_id": product_id}
                ).scalar_one_or_none()
            return conn.execute(
                _SELECT_LATEST_LOG_WITH_PREFIX,
                {"product_id": product_id, "pattern": f"{prefix}%"},
            ).scalar_one_or_none()

    def check_equipment_parameters(self, equipment_id: int, product_id: int) -> None:
        logger.info(
            f"check_equipment_parameters: equipment={equipment_id}, "
            f"product={product_id}"
        )
        with self._engine.begin() as conn:
            conn.execute(
                _CALL_CHECK_EQUIPMENT_PARAMETERS,
                {"equipment_id": equipment_id, "product_id": product_id},
            )

    def list_products(self) -> list[tuple[int, str, str]]:
        with self._engine.connect() as conn:
            return [
                (int(product_id), title, batch_number)
                for product_id, title, batch_number in conn.execute(_SELECT_PRODUCTS)
            ]

    def list_equipment(self) -> list[tuple[int, str]]:
        with self._engine.connect() as conn:
            return [
                (int(equipment_id), title)
                for equipment_id, title in conn.execute(_SELECT_EQUIPMENT)
            ]

    def ping(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"DB ping failed: {e}")
            return False
