import logging
from unittest.mock import patch

from gitea.logging import REDACTED, DefaultLogger, Logger, redact


class TestLogger:
    """Test the Logger class."""

    def test_logger_initialization(self):
        logger = Logger(name="test-logger")
        assert logger.logger.name == "test-logger"
        assert logger.level == logging.INFO
        assert len(logger.logger.handlers) > 0

    def test_logger_levels(self):
        logger = Logger(name="test-logger", level=logging.DEBUG)
        assert logger.level == logging.DEBUG
        assert logger.is_enabled_for(logging.DEBUG)

        logger = Logger(name="test-logger", level=logging.WARNING)
        assert logger.level == logging.WARNING
        assert not logger.is_enabled_for(logging.INFO)

    def test_recreating_logger_does_not_stack_handlers(self):
        Logger(name="test-logger")
        logger = Logger(name="test-logger")
        assert len(logger.logger.handlers) == 1

    def test_log_methods(self):
        logger = Logger(name="test-logger")

        with patch.object(logger.logger, "log") as mock_log:
            logger.debug("Debug message")
            mock_log.assert_called_with(logging.DEBUG, "Debug message")

            logger.info("Info message")
            mock_log.assert_called_with(logging.INFO, "Info message")

            logger.warning("Warning message")
            mock_log.assert_called_with(logging.WARNING, "Warning message")

            logger.error("Error message")
            mock_log.assert_called_with(logging.ERROR, "Error message")

            logger.critical("Critical message")
            mock_log.assert_called_with(logging.CRITICAL, "Critical message")

    def test_log_with_context(self):
        logger = Logger(name="test-logger")

        with patch.object(logger.logger, "log") as mock_log:
            logger.info("Request completed", status=200, path="repos/owner/project")
            mock_log.assert_called_with(
                logging.INFO, "Request completed - status=200 path=repos/owner/project"
            )

    def test_tokens_are_redacted_from_context(self):
        logger = Logger(name="test-logger")

        with patch.object(logger.logger, "log") as mock_log:
            logger.info(
                "Sending GET",
                params={"access_token": "secret", "limit": "5"},
                headers={"Authorization": "token secret", "Accept": "application/json"},
            )

        message = mock_log.call_args.args[1]
        assert "secret" not in message
        assert "'limit': '5'" in message
        assert "'Accept': 'application/json'" in message

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "gitea.log"
        logger = Logger(name="test-file-logger", log_to_console=False, log_file=str(log_file))

        logger.info("Written to file", token="secret")
        for handler in logger.logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "Written to file" in content
        assert "secret" not in content


class TestRedact:
    def test_sensitive_keys(self):
        assert redact("abc", "Authorization") == REDACTED
        assert redact("abc", "access_token") == REDACTED
        assert redact("abc", "password") == REDACTED

    def test_plain_values_pass(self):
        assert redact("abc", "Accept") == "abc"
        assert redact(5) == 5

    def test_nested_mappings(self):
        assert redact({"headers": {"Authorization": "token x", "Accept": "*/*"}}) == {
            "headers": {"Authorization": REDACTED, "Accept": "*/*"}
        }


class TestDefaultLogger:
    def test_default_logger_initialization(self):
        logger = DefaultLogger()
        assert logger.logger.name == "gitea-api-client"
        assert logger.level == logging.INFO
        assert len(logger.logger.handlers) > 0

    def test_default_logger_output(self, capsys):
        logger = DefaultLogger(level=logging.DEBUG)
        logger.debug("Test debug message")
        logger.info("Test info message")

        output = capsys.readouterr().out
        assert "[DEBUG]" in output
        assert "[INFO]" in output
        assert "[gitea-api-client]" in output
        assert "Test debug message" in output
        assert "Test info message" in output
