from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict


class FailureRecord(BaseModel):
    """設備故障履歴のスキーマ

    equipment_failures と equipment を結合した1行分。

    Attributes:
        equipment: 設備名
        process: 工程名
        reason: 故障原因
        failure_date: 故障日時
        restore_date: 復旧日時 (未復旧ならNone)
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "equipment": "Полировальный станок",
                "process": "Полировка",
                "reason": "Перегрев шпинделя",
                "failure_date": "2025-11-12T10:30:00",
                "restore_date": None,
            }
        }
    )

    equipment: str = Field(..., description="設備名")
    process: str = Field(..., description="工程名")
    reason: str = Field(..., description="故障原因")
    failure_date: datetime = Field(..., description="故障日時")
    restore_date: datetime | None = Field(default=None, description="復旧日時")


class OptionItem(BaseModel):
    """プルダウン選択肢"""

    id: int = Field(..., description="ID")
    label: str = Field(..., description="表示ラベル")

    @classmethod
    def product(cls, product_id: int, title: str, batch_number: str) -> "OptionItem":
        """製品の選択肢を作る (ラベルにバッチ番号を含める)

        Args:
            product_id: 製品ID
            title: 製品名
            batch_number: バッチ番号

        Returns:
            OptionItem: 例 label="Линза А (Партия: B-01)"
        """
        return cls(id=product_id, label=f"{title} (Партия: {batch_number})")
