"""backend.loggingのテスト"""

import logging

from backend.logging import set_log_level, setup_logger


class TestSetupLogger:
    def test_file_handler_writes_utf8(self, tmp_path):
        """ログファイルはUTF-8で書き出される"""
        log_file = tmp_path / "logs" / "test.log"
        logger = setup_logger("test.file", log_file=str(log_file), console=False)

        logger.info("Оборудование 7 перегрето")
        for handler in logger.handlers:
            handler.flush()

        assert "Оборудование 7 перегрето" in log_file.read_text(encoding="utf-8")

    def test_handlers_are_not_duplicated(self, tmp_path):
        """同名で再セットアップしてもハンドラは増えない"""
        log_file = str(tmp_path / "dup.log")
        setup_logger("test.dup", log_file=log_file)
        logger = setup_logger("test.dup", log_file=log_file)

        assert len(logger.handlers) == 2

    def test_set_log_level(self):
        a = setup_logger("test.level.a", console=False)
        b = setup_logger("test.level.b", console=False)

        set_log_level("WARNING", a, b)

        assert a.level == logging.WARNING
        assert b.level == logging.WARNING
