from abc import ABC, abstractmethod

from schemas import FailureRecord, LensOrder


class BaseProductionRepository(ABC):
    """生産DBアクセスの抽象基底クラス

    APIルートとMessageEnricherはこのインターフェースにのみ依存する。
    現在の実装: ProductionRepository (SQLAlchemy Core, MySQL)
    """

    @abstractmethod
    def fetch_equipment_titles(self) -> dict[str, str]:
        """設備マスタを取得する

        Returns:
            dict[str, str]: 設備ID(10進文字列, 先頭ゼロなし) → 設備名
        """
        ...

    @abstractmethod
    def list_failures(self) -> list[FailureRecord]:
        """故障履歴を新しい順に取得する"""
        ...

    @abstractmethod
    def process_lens_order(self, order: LensOrder) -> None:
        """ストアドプロシージャ process_lens_order を実行する

        Raises:
            SQLAlchemyError: プロシージャがオーダーを拒否した場合
        """
        ...

    @abstractmethod
    def calc_output(self, speed: float, pressure: float, temperature: float) -> int:
        """DB関数 calc_output で予測生産数を計算する"""
        ...

    @abstractmethod
    def update_defects(self, product_id: int, value: int) -> int:
        """不良数を更新する

        Returns:
            int: 更新行数
        """
        ...

    @abstractmethod
    def latest_log_message(
        self, product_id: int, prefix: str | None = None
    ) -> str | None:
        """製品の最新生産ログを取得する

        Args:
            product_id: 製品ID
            prefix: 指定時はこの文字列で始まるログのみ対象

        Returns:
            str | None: ログメッセージ (該当なしはNone)
        """
        ...

    @abstractmethod
    def check_equipment_parameters(self, equipment_id: int, product_id: int) -> None:
        """ストアドプロシージャ check_equipment_parameters を実行する"""
        ...

    @abstractmethod
    def list_products(self) -> list[tuple[int, str, str]]:
        """完成品一覧 (ID, 製品名, バッチ番号) を取得する"""
        ...

    @abstractmethod
    def list_equipment(self) -> list[tuple[int, str]]:
        """設備一覧 (ID, 設備名) を取得する"""
        ...

    @abstractmethod
    def ping(self) -> bool:
        """DB疎通確認

        Returns:
            bool: 応答があればTrue
        """
        ...
