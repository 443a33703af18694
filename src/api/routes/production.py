"""生産管理エンドポイント

/api/failures  - 設備故障履歴
/api/order     - レンズ製造オーダー登録
/api/defects   - 不良数更新と推奨対応
/api/polishing - 研磨設備のパラメータチェック

DBアクセスは同期処理のため、エンドポイントは def で定義し
FastAPIのスレッドプールで実行する。
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from api.services.db_service import db_service
from backend.config_helpers import get_polishing_target
from backend.db import describe_db_error
from backend.logging import api_logger as logger
from schemas import FailureRecord, LensOrder

router = APIRouter()

ORDER_ACCEPTED_MESSAGE = "Параметры приняты. Нормы соблюдены."
DEFECTS_NORMAL_MESSAGE = "В пределах нормы."
DEFECTS_AUTO_CORRECTED_MESSAGE = (
    "Параметры скорректированы автоматически или находятся в норме."
)
POLISHING_NORMAL_MESSAGE = "Параметры полировки в норме."
POLISHING_ALERT_PREFIX = "ВНИМАНИЕ: "

# 生産ログにこれらが含まれていれば自動補正済み/正常とみなす
AUTO_CORRECTED_MARKERS = ("OK", "снижено")


class OrderResponse(BaseModel):
    """オーダー登録レスポンス"""

    message: str
    predicted_output: int
    status: str


class DefectRequest(BaseModel):
    """不良数更新リクエスト"""

    product_id: int
    new_value: int = Field(ge=0)


class DefectResponse(BaseModel):
    """不良数更新レスポンス"""

    recommendation: str
    action_required: bool


class PolishingResponse(BaseModel):
    """研磨チェックレスポンス"""

    status: str
    critical: bool


@router.get("/failures", response_model=list[FailureRecord])
def get_failures() -> list[FailureRecord]:
    """設備故障履歴を新しい順に取得

    Returns:
        list[FailureRecord]: 故障履歴 (0件なら空リスト)

    Raises:
        HTTPException: DBエラー時 (500)
    """
    try:
        return db_service.repository.list_failures()
    except SQLAlchemyError as e:
        logger.error(f"Failed to get failures: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/order", response_model=OrderResponse)
def create_order(order: LensOrder) -> OrderResponse:
    """レンズ製造オーダーを登録

    ストアドプロシージャが規格外としてオーダーを拒否した場合も
    HTTP 200 で status="error" を返す。エラー文は設備名を補完して返す。

    Returns:
        OrderResponse: 登録結果と予測生産数
    """
    repository = db_service.repository
    try:
        repository.process_lens_order(order)
    except SQLAlchemyError as e:
        logger.warning(f"Lens order rejected: {e}")
        message = db_service.enrich(describe_db_error(e))
        return OrderResponse(status="error", message=message, predicted_output=0)

    try:
        predicted = repository.calc_output(
            order.speed, order.pressure, order.temperature
        )
    except SQLAlchemyError as e:
        logger.warning(f"Failed to calculate predicted output: {e}")
        predicted = 0

    return OrderResponse(
        status="success",
        message=ORDER_ACCEPTED_MESSAGE,
        predicted_output=predicted,
    )


@router.post("/defects", response_model=DefectResponse)
def update_defects(request: DefectRequest) -> DefectResponse:
    """不良数を更新し、最新の生産ログから推奨対応を返す

    Returns:
        DefectResponse: 推奨対応

    Raises:
        HTTPException: 更新失敗時 (500)
    """
    repository = db_service.repository
    try:
        repository.update_defects(request.product_id, request.new_value)
    except SQLAlchemyError as e:
        logger.error(f"Failed to update defects: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    try:
        log_message = repository.latest_log_message(request.product_id)
    except SQLAlchemyError as e:
        logger.warning(f"Failed to read production log: {e}")
        log_message = None

    if log_message is None:
        return DefectResponse(
            recommendation=DEFECTS_NORMAL_MESSAGE, action_required=False
        )

    recommendation = db_service.enrich(log_message)
    if any(marker in log_message for marker in AUTO_CORRECTED_MARKERS):
        recommendation = DEFECTS_AUTO_CORRECTED_MESSAGE

    return DefectResponse(recommendation=recommendation, action_required=True)


@router.get("/polishing", response_model=PolishingResponse)
def check_polishing() -> PolishingResponse:
    """研磨設備のパラメータをチェック

    check_equipment_parameters 実行後、対象設備のログが出ていれば警告を返す。

    Returns:
        PolishingResponse: 状態メッセージと警告フラグ

    Raises:
        HTTPException: プロシージャ実行失敗時 (500)
    """
    equipment_id, product_id = get_polishing_target()
    repository = db_service.repository
    try:
        repository.check_equipment_parameters(equipment_id, product_id)
    except SQLAlchemyError as e:
        logger.error(f"Polishing check failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    try:
        log_message = repository.latest_log_message(
            product_id, prefix=f"Оборудование {equipment_id}"
        )
    except SQLAlchemyError as e:
        logger.warning(f"Failed to read polishing log: {e}")
        log_message = None

    if not log_message:
        return PolishingResponse(status=POLISHING_NORMAL_MESSAGE, critical=False)

    logger.info(f"Polishing alert: {log_message}")
    return PolishingResponse(
        status=POLISHING_ALERT_PREFIX + db_service.enrich(log_message),
        critical=True,
    )
