"""プルダウン選択肢エンドポイント

/api/options - 製品・設備の選択肢
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from api.services.db_service import db_service
from backend.logging import api_logger as logger
from schemas import OptionItem

router = APIRouter()


class OptionsResponse(BaseModel):
    """選択肢レスポンス"""

    products: list[OptionItem]
    equipment: list[OptionItem]


@router.get("/options", response_model=OptionsResponse)
def get_options() -> OptionsResponse:
    """製品と設備の選択肢を取得

    Returns:
        OptionsResponse: 製品 (ラベルにバッチ番号付き) と設備の一覧

    Raises:
        HTTPException: DBエラー時 (500)
    """
    repository = db_service.repository
    try:
        products = [
            OptionItem.product(product_id, title, batch_number)
            for product_id, title, batch_number in repository.list_products()
        ]
        equipment = [
            OptionItem(id=equipment_id, label=title)
            for equipment_id, title in repository.list_equipment()
        ]
    except SQLAlchemyError as e:
        logger.error(f"Failed to get options: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return OptionsResponse(products=products, equipment=equipment)
