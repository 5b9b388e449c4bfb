"""
Unit tests for logging setup
"""

import logging

from trello_cli.logging_config import setup_logging


class TestSetupLogging:
    def test_messages_go_to_stderr(self, capsys):
        logger = setup_logging("INFO")

        logger.info("Showing 2 of 4 cards")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "INFO: Showing 2 of 4 cards\n"

    def test_level_is_case_insensitive(self):
        assert setup_logging("debug").level == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self):
        assert setup_logging("chatty").level == logging.WARNING

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_log_file_gets_timestamped_records(self, tmp_path):
        log_file = tmp_path / "trello.log"
        logger = setup_logging("WARNING", str(log_file))

        logger.warning("Both --assigned and --all flags specified. Using --all.")
        for handler in logger.handlers:
            handler.flush()

        line = log_file.read_text()
        assert " - trello_cli - WARNING - Both --assigned" in line


class TestCredentialRedaction:
    def test_key_and_token_values_are_masked(self, capsys):
        logger = setup_logging("DEBUG")

        logger.error("GET https://api.trello.com/1/members/me?key=abc123&token=s3cret failed")

        err = capsys.readouterr().err
        assert "abc123" not in err
        assert "s3cret" not in err
        assert "?key=***&token=***" in err

    def test_masks_values_passed_as_format_args(self, capsys):
        logger = setup_logging("DEBUG")

        logger.debug("retrying %s", "url?token=s3cret")

        err = capsys.readouterr().err
        assert "s3cret" not in err
        assert "url?token=***" in err

    def test_other_messages_are_untouched(self, capsys):
        logger = setup_logging("DEBUG")

        logger.debug("GET /boards/board-1/cards {'members': 'true'}")

        assert capsys.readouterr().err == "DEBUG: GET /boards/board-1/cards {'members': 'true'}\n"
