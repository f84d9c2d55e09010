# tests/test_logging.py
"""
Tests for structured logging and Sentry event filtering.
"""

import json
import logging
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
import app.core.logging_config as logging_config
from app.core.logging_config import ColoredFormatter, JSONFormatter
from app.core.sentry_config import before_send_hook


def make_record(message="Loaded rules", level=logging.INFO, **extra):
    record = logging.LogRecord("app.core.rules_provider", level, __file__, 42, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "app.core.rules_provider"
        assert data["message"] == "Loaded rules"
        assert data["timestamp"].endswith("Z")

    def test_extra_fields_and_request_context(self):
        record = make_record(
            extra_fields={
                "client_name": "Acme",
                "path": "Umbrella Report Config/Acme/ot_rules.xlsx",
                "request_id": "abc",
                "duration_ms": 12.5,
            },
        )
        data = json.loads(JSONFormatter().format(record))

        assert data["client_name"] == "Acme"
        assert data["request_id"] == "abc"
        assert data["duration_ms"] == 12.5

    def test_colored_formatter_leaves_record_untouched(self):
        record = make_record(level=logging.WARNING)
        output = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert "\033[33m" in output
        assert record.levelname == "WARNING"

    def test_exception_is_included(self):
        try:
            raise ValueError("bad cell")
        except ValueError:
            record = make_record(level=logging.ERROR, exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad cell" in data["exception"]


class TestSetupLogging:
    def test_development_handlers_write_under_log_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(logging_config, "LOG_DIR", tmp_path / "logs")
        monkeypatch.setattr(logging_config, "APP_LOG_FILE", tmp_path / "logs" / "app.log")
        monkeypatch.setattr(logging_config, "IS_PRODUCTION", False)
        root_logger = logging.getLogger()
        saved_handlers, saved_level = list(root_logger.handlers), root_logger.level

        try:
            logging_config.setup_logging()

            assert root_logger.level == logging.DEBUG
            assert any(isinstance(h.formatter, ColoredFormatter) for h in root_logger.handlers)
            assert (tmp_path / "logs" / "app.log").exists()
        finally:
            for handler in root_logger.handlers:
                handler.close()
            root_logger.handlers[:] = saved_handlers
            root_logger.setLevel(saved_level)


class TestBeforeSendHook:
    def test_filters_sensitive_headers(self):
        event = {"request": {"headers": {"Authorization": "Bearer x", "Accept": "application/json"}}}

        filtered = before_send_hook(event, None)

        assert filtered["request"]["headers"]["Authorization"] == "[Filtered]"
        assert filtered["request"]["headers"]["Accept"] == "application/json"

    def test_filters_token_query_string(self):
        event = {"request": {"query_string": "clientName=Acme&token=secret"}}
        assert before_send_hook(event, None)["request"]["query_string"] == "[Filtered]"

    def test_event_without_request_passes_through(self):
        event = {"message": "boom"}
        assert before_send_hook(event, None) == {"message": "boom"}
