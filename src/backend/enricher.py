"""ログ/エラーメッセージの設備名補完

DBが出力するメッセージ中の「оборудование 7」のような設備ID参照を、
設備マスタの名称付き表記「оборудование "Полировщик" (ID 7)」へ書き換える。

責務:
- 設備マスタ (ID → 名称) の取得は呼び出し元から注入された関数に委譲
- 取得に失敗した場合は元のメッセージをそのまま返す (例外は送出しない)
- 呼び出しごとにマスタを取り直す (キャッシュなし)
"""

import re
from typing import Callable, Mapping

from backend.logging import enrich_logger as logger

# 設備マスタ取得関数の型: 設備ID(10進文字列) → 設備名
EquipmentTitleFetcher = Callable[[], Mapping[str, str]]

# 「оборудовани」+ 語尾 (格変化) + 空白 + 設備ID
# 空白と数字はASCIIに限定 (全角数字などはIDとして扱わない)
EQUIPMENT_REFERENCE = re.compile(
    r"(оборудовани[а-я]*)[\t\n\f\r ]+([0-9]+)", re.IGNORECASE
)


def format_reference(word: str, title: str, equipment_id: str) -> str:
    """設備参照の置換後表記を作る

    Args:
        word: メッセージ中の単語 (大文字小文字・語尾はそのまま)
        title: 設備名
        equipment_id: 設備ID

    Returns:
        str: 例 'оборудования "Фильтр" (ID 1)'
    """
    return f'{word} "{title}" (ID {equipment_id})'


class MessageEnricher:
    """設備ID参照を設備名付きに書き換えるクラス

    使用例:
        >>> enricher = MessageEnricher(lambda: {"1": "Фильтр"})
        >>> enricher.enrich("Оборудование 1 неисправно")
        'Оборудование "Фильтр" (ID 1) неисправно'
    """

    def __init__(self, fetch_titles: EquipmentTitleFetcher) -> None:
        self._fetch_titles = fetch_titles

    def enrich(self, message: str) -> str:
        """メッセージ中の設備ID参照を設備名付きに置換

        Args:
            message: 元のメッセージ (空文字可)

        Returns:
            str: 置換後のメッセージ。マスタ取得失敗時は元のまま

        Note:
            IDは文字列のまま照合する。"007" はキー "7" とは一致しない。
        """
        if not message:
            return ""

        try:
            titles = self._fetch_titles()
        except Exception as e:
            logger.warning(
                f"Equipment directory unavailable, message left as is: {e}"
            )
            return message

        def _replace(match: "re.Match[str]") -> str:
            word, equipment_id = match.group(1), match.group(2)
            title = titles.get(equipment_id)
            if title is None:
                return match.group(0)
            return format_reference(word, title, equipment_id)

        return EQUIPMENT_REFERENCE.sub(_replace, message)
