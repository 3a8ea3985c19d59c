"""Tests for logging setup."""

import logging
from unittest.mock import patch

import pytest

from simtrader.config.logging import (
    _parse_file_size,
    get_logger,
    log_error,
    setup_logging,
)
from simtrader.utils.config import initialize_application


@pytest.fixture
def restore_root_handlers():
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    for handler in root.handlers:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()


class TestLogging:
    """Test structlog configuration helpers."""

    @pytest.mark.parametrize(
        "size,expected",
        [("10MB", 10 * 1024 * 1024), ("512KB", 512 * 1024), ("1GB", 1024**3), ("42", 42)],
    )
    def test_parse_file_size(self, size, expected):
        assert _parse_file_size(size) == expected

    def test_file_logging_creates_directory(self, tmp_path, restore_root_handlers):
        log_file = tmp_path / "logs" / "simtrader.log"

        setup_logging(level="DEBUG", file_enabled=True, file_path=str(log_file))

        assert log_file.parent.exists()

    def test_plain_format_logger_works(self, restore_root_handlers):
        setup_logging(level="INFO", format_type="plain")

        get_logger("test").info("Plain log line", value=1)

    def test_log_error_does_not_raise(self, restore_root_handlers):
        setup_logging(level="INFO")

        try:
            raise ValueError("boom")
        except ValueError as e:
            log_error(e, operation="test")

    @patch("simtrader.utils.config.setup_logging")
    def test_initialize_application_uses_settings(self, mock_setup, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        initialize_application()

        mock_setup.assert_called_once()
        assert mock_setup.call_args.kwargs["level"] == "WARNING"
