"""Tests for structured logging functionality."""

from __future__ import annotations

from logging import root
from pathlib import Path
from unittest.mock import patch

from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer

from blogdoc.monitoring.logging import (
    bind_post,
    clear_context,
    configure_logging,
    get_bound_post,
    get_processors,
    sanitize_event_dict,
    sanitize_log_message,
)


class TestSanitizeLogMessage:
    """Tests for log message sanitization."""

    def test_newlines_escaped(self) -> None:
        """Newlines should be escaped to prevent log injection."""
        result = sanitize_log_message("Line1\nLine2\rLine3")
        assert result == "Line1\\nLine2\\rLine3"

    def test_null_removed(self) -> None:
        """Null bytes should be dropped."""
        assert sanitize_log_message("a\x00b") == "ab"

    def test_non_string_converted(self) -> None:
        """Non-string values should be converted to string."""
        assert sanitize_log_message(123) == "123"


class TestSanitizeEventDict:
    """Tests for the sanitizing processor."""

    def test_string_values_sanitized(self) -> None:
        """Every string value is escaped; other values are untouched."""
        event = {"event": "Block\nupdated", "text": "a\tb", "position": 3}
        result = sanitize_event_dict(None, "info", event)
        assert result == {"event": "Block\\nupdated", "text": "a\\tb", "position": 3}


class TestProcessors:
    """Tests for environment-dependent rendering."""

    def test_development_uses_console(self) -> None:
        """Development renders for humans."""
        with patch("blogdoc.monitoring.logging.settings") as mock_settings:
            mock_settings.ENVIRONMENT = "development"
            assert isinstance(get_processors()[-1], ConsoleRenderer)

    def test_production_uses_json(self) -> None:
        """Other environments render JSON."""
        with patch("blogdoc.monitoring.logging.settings") as mock_settings:
            mock_settings.ENVIRONMENT = "production"
            assert isinstance(get_processors()[-1], JSONRenderer)


class TestConfigureLogging:
    """Tests for handler wiring."""

    def test_file_handler_added(self, tmp_path: Path) -> None:
        """A file handler is attached when LOG_TO_FILE is set."""
        log_file = tmp_path / "logs" / "blogdoc.log"
        saved = list(root.handlers)
        try:
            with patch("blogdoc.monitoring.logging.settings") as mock_settings:
                mock_settings.ENVIRONMENT = "production"
                mock_settings.LOG_LEVEL = "info"
                mock_settings.LOG_TO_FILE = True
                mock_settings.LOG_FILE = str(log_file)
                configure_logging()
            assert len(root.handlers) == 2
            assert log_file.parent.exists()
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved


class TestContext:
    """Tests for post ID context binding."""

    def test_bind_and_clear(self) -> None:
        """The post ID is bound and cleared."""
        bind_post("post-1")
        assert get_bound_post() == "post-1"
        clear_context()
        assert get_bound_post() is None

    def test_unsaved_post(self) -> None:
        """Unsaved posts are tagged explicitly."""
        bind_post(None)
        assert get_bound_post() == "unsaved"
        clear_context()
