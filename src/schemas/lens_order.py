from pydantic import BaseModel, Field, ConfigDict


class LensOrder(BaseModel):
    """レンズ製造オーダーのスキーマ

    フロントエンドから送られるJSON (camelCase) をそのまま受け取る。
    値の妥当性 (規格・設備条件) はストアドプロシージャ
    process_lens_order 側で検証する。

    Attributes:
        lens_name: レンズ名 (lensName)
        opt_power: 光学パワー (optPower)
        base_curve: ベースカーブ (baseCurve)
        diameter: 直径
        thickness: 厚み
        equipment_id: 使用設備ID (equipID)
        speed: 研磨速度
        pressure: 研磨圧力
        temperature: 温度

    Examples:
        >>> order = LensOrder.model_validate({
        ...     "lensName": "Линза А", "optPower": -2.5, "baseCurve": 8.6,
        ...     "diameter": 14.2, "thickness": 0.08, "equipID": 7,
        ...     "speed": 120, "pressure": 2.5, "temperature": 40
        ... })
    """

    model_config = ConfigDict(populate_by_name=True)

    lens_name: str = Field(..., alias="lensName", description="レンズ名")
    opt_power: float = Field(..., alias="optPower", description="光学パワー")
    base_curve: float = Field(..., alias="baseCurve", description="ベースカーブ")
    diameter: float = Field(..., description="直径")
    thickness: float = Field(..., description="厚み")
    equipment_id: int = Field(..., alias="equipID", description="設備ID")
    speed: float = Field(..., description="研磨速度")
    pressure: float = Field(..., description="研磨圧力")
    temperature: float = Field(..., description="温度")

    def procedure_params(self) -> dict[str, object]:
        """process_lens_order のバインドパラメータを返す"""
        return {
            "lens_name": self.lens_name,
            "opt_power": self.opt_power,
            "base_curve": self.base_curve,
            "diameter": self.diameter,
            "thickness": self.thickness,
            "equipment_id": self.equipment_id,
            "speed": self.speed,
            "pressure": self.pressure,
            "temperature": self.temperature,
        }
