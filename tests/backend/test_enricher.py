"""backend.enricherのテスト"""

from unittest.mock import MagicMock, patch

import pytest

from backend.enricher import EQUIPMENT_REFERENCE, MessageEnricher, format_reference

DIRECTORY = {"1": "Filter", "7": "Polisher"}


@pytest.fixture
def fetch_titles():
    """設備マスタ取得関数のモック"""
    return MagicMock(return_value=DIRECTORY)


@pytest.fixture
def enricher(fetch_titles):
    return MessageEnricher(fetch_titles)


class TestMessageEnricher:
    """MessageEnricher.enrichのテスト"""

    def test_empty_message_skips_lookup(self, enricher, fetch_titles):
        """空文字はそのまま返し、マスタを取得しない"""
        assert enricher.enrich("") == ""
        fetch_titles.assert_not_called()

    def test_message_without_reference_is_unchanged(self, enricher):
        """設備参照がなければ変更しない"""
        msg = "Партия принята без замечаний"
        assert enricher.enrich(msg) == msg

    def test_single_reference_is_enriched(self, enricher):
        """設備IDが設備名付きに置換される"""
        assert (
            enricher.enrich("Оборудование 1 failed")
            == 'Оборудование "Filter" (ID 1) failed'
        )

    def test_unknown_id_is_left_unchanged(self, enricher):
        """マスタにないIDはそのまま残る"""
        assert (
            enricher.enrich("оборудования 7 и оборудование 99")
            == 'оборудования "Polisher" (ID 7) и оборудование 99'
        )

    def test_inflections_are_preserved(self, enricher):
        """語尾 (格変化) は入力のまま保持される"""
        result = enricher.enrich("на оборудовании 1, с оборудованием 7")
        assert result == (
            'на оборудовании "Filter" (ID 1), с оборудованием "Polisher" (ID 7)'
        )

    def test_case_insensitive_match_keeps_original_casing(self, enricher):
        """大文字小文字を区別せずに照合し、表記は入力のまま"""
        assert enricher.enrich("ОБОРУДОВАНИЕ 1") == 'ОБОРУДОВАНИЕ "Filter" (ID 1)'
        assert enricher.enrich("оборудование 1") == 'оборудование "Filter" (ID 1)'

    def test_multiple_whitespace_between_word_and_id(self, enricher):
        """単語とIDの間の空白は複数でもよい (置換後は空白1つ)"""
        assert (
            enricher.enrich("Оборудование \t 7 остановлено")
            == 'Оборудование "Polisher" (ID 7) остановлено'
        )

    def test_already_enriched_message_is_not_rewritten(self, enricher):
        """置換済みのメッセージを再度処理しても変化しない"""
        once = enricher.enrich("Оборудование 1 и оборудование 7")
        assert enricher.enrich(once) == once

    def test_leading_zero_id_is_looked_up_literally(self, enricher):
        """先頭ゼロ付きIDは文字列のまま照合するため一致しない"""
        assert enricher.enrich("Оборудование 007") == "Оборудование 007"

    def test_id_must_follow_stem_word(self, enricher):
        """設備語の直後でない数字は対象外"""
        msg = "Деталь 1 отправлена, оборудование исправно 7"
        assert enricher.enrich(msg) == msg

    def test_fetch_failure_returns_message_unchanged(self):
        """マスタ取得に失敗したら元のメッセージを返す"""
        fetch = MagicMock(side_effect=ConnectionError("DB down"))
        enricher = MessageEnricher(fetch)

        with patch("backend.enricher.logger") as mock_logger:
            assert enricher.enrich("Оборудование 1 failed") == "Оборудование 1 failed"
            mock_logger.warning.assert_called_once()

    def test_directory_is_fetched_on_every_call(self, enricher, fetch_titles):
        """マスタは呼び出しごとに取り直す (キャッシュしない)"""
        enricher.enrich("Оборудование 1")
        enricher.enrich("Оборудование 7")
        assert fetch_titles.call_count == 2

    def test_directory_changes_are_picked_up(self):
        """マスタの更新が次の呼び出しに反映される"""
        directory = {"1": "Filter"}
        enricher = MessageEnricher(lambda: directory)

        assert enricher.enrich("Оборудование 1") == 'Оборудование "Filter" (ID 1)'
        directory["1"] = "Фильтр тонкой очистки"
        assert (
            enricher.enrich("Оборудование 1")
            == 'Оборудование "Фильтр тонкой очистки" (ID 1)'
        )


class TestEquipmentReferencePattern:
    """設備参照の正規表現のテスト"""

    def test_non_ascii_digits_are_not_ids(self):
        """全角数字などはIDとして扱わない"""
        assert EQUIPMENT_REFERENCE.search("оборудование ７") is None

    def test_captures_word_and_id(self):
        match = EQUIPMENT_REFERENCE.search("Ошибка: Оборудования 12 перегрето")
        assert match is not None
        assert match.group(1) == "Оборудования"
        assert match.group(2) == "12"

    def test_format_reference(self):
        assert format_reference("оборудования", "Пресс", "3") == (
            'оборудования "Пресс" (ID 3)'
        )
