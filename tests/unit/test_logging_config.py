"""
Unit tests for logging configuration.
"""

import json
import logging

import pytest

from tft_client import logging_config
from tft_client.logging_config import (
    ApiKeyRedactor,
    ColoredFormatter,
    JsonFormatter,
    generate_correlation_id,
    get_correlation_id,
    get_logger,
    redact_api_keys,
    set_correlation_id,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_correlation_id():
    set_correlation_id(None)
    yield
    set_correlation_id(None)


def make_record(msg="hello", **extra):
    record = logging.LogRecord("tft_client.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    """Tests for JSON output"""

    def test_basic_fields(self):
        data = json.loads(JsonFormatter().format(make_record()))
        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["logger"] == "tft_client.test"

    def test_extra_fields_included(self):
        data = json.loads(JsonFormatter().format(make_record(match_id="NA1_1", url=object())))
        assert data["match_id"] == "NA1_1"
        assert isinstance(data["url"], str)

    def test_correlation_id(self):
        corr_id = generate_correlation_id()
        data = json.loads(JsonFormatter().format(make_record()))
        assert data["correlation_id"] == corr_id


class TestColoredFormatter:
    """Tests for console output"""

    def test_does_not_modify_record(self):
        set_correlation_id("abcdef1234567890")
        record = make_record()
        output = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert "[abcdef12] hello" in output
        assert record.levelname == "INFO"
        assert record.msg == "hello"

    def test_operation_tag(self):
        record = make_record(operation="Match")
        output = ColoredFormatter("%(message)s").format(record)
        assert output == "<Match> hello"


class TestApiKeyRedactor:
    """Tests for API key masking"""

    def test_redact_api_keys(self):
        text = redact_api_keys("key RGAPI-0123abcd-ef45-6789 rejected")
        assert text == "key RGAPI-******** rejected"

    def test_masks_message_args(self):
        record = make_record("using %s")
        record.args = ("RGAPI-secret-key",)
        assert ApiKeyRedactor().filter(record) is True
        assert record.getMessage() == "using RGAPI-********"

    def test_masks_string_extras(self):
        record = make_record(header="RGAPI-secret-key", status_code=403)
        ApiKeyRedactor().filter(record)
        assert record.header == "RGAPI-********"
        assert record.status_code == 403

    def test_leaves_clean_records_alone(self):
        record = make_record("fetched %d ids")
        record.args = (3,)
        ApiKeyRedactor().filter(record)
        assert record.msg == "fetched %d ids"
        assert record.args == (3,)


class TestContextualAdapter:
    """Tests for the logger adapter"""

    def test_adds_correlation_id(self):
        set_correlation_id("corr-1")
        msg, kwargs = get_logger("x").process("m", {"extra": {"a": 1}})
        assert kwargs["extra"] == {"a": 1, "correlation_id": "corr-1"}

    def test_without_correlation_id(self):
        msg, kwargs = get_logger("x").process("m", {})
        assert kwargs["extra"] == {}
        assert get_correlation_id() is None


class TestSetupLogging:
    """Tests for root logger setup"""

    def test_configures_once(self, monkeypatch):
        monkeypatch.setattr(logging_config, "_configured", False)
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(level="WARNING")
            assert root.level == logging.WARNING
            assert logging.getLogger("httpx").level == logging.WARNING

            setup_logging(level="DEBUG")
            assert root.level == logging.WARNING

            setup_logging(level="DEBUG", force=True)
            assert root.level == logging.DEBUG
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_log_file_uses_json(self, monkeypatch, tmp_path):
        monkeypatch.setattr(logging_config, "_configured", False)
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        log_file = tmp_path / "client.log"
        try:
            setup_logging(level="INFO", log_file=str(log_file))
            file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
            assert len(file_handlers) == 1
            assert isinstance(file_handlers[0].formatter, JsonFormatter)
            assert all(
                any(isinstance(f, ApiKeyRedactor) for f in handler.filters) for handler in root.handlers
            )
        finally:
            for handler in root.handlers:
                if isinstance(handler, logging.FileHandler):
                    handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
