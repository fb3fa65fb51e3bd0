"""
Structured Logging Configuration

Console output is colored in development and JSON in production; log files
are always JSON. Every record carries the correlation id of the lookup that
produced it, so the requests of one match history scan can be grouped.
Riot API keys are masked in everything that reaches a handler.
"""

import re
import sys
import json
import uuid
import logging
from datetime import datetime, timezone
from typing import Any, Optional
from contextvars import ContextVar


correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

API_KEY_PATTERN = re.compile(r"RGAPI-[0-9A-Za-z-]+")
REDACTED_KEY = "RGAPI-********"

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Attributes every LogRecord has; anything else was passed through `extra`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "taskName"}


def redact_api_keys(text: str) -> str:
    return API_KEY_PATTERN.sub(REDACTED_KEY, text)


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class ApiKeyRedactor(logging.Filter):
    """Masks Riot API keys in the message, its arguments and string extras"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if API_KEY_PATTERN.search(message):
            record.msg = redact_api_keys(message)
            record.args = None

        for key, value in _record_extras(record).items():
            if isinstance(value, str) and API_KEY_PATTERN.search(value):
                setattr(record, key, redact_api_keys(value))
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line; `extra` fields become top-level keys"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        corr_id = correlation_id.get()
        if corr_id:
            log_data["correlation_id"] = corr_id

        if record.exc_info:
            log_data["exception"] = redact_api_keys(self.formatException(record.exc_info))

        for key, value in _record_extras(record).items():
            if key in log_data:
                continue
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data)


class ColoredFormatter(logging.Formatter):
    """
    Level-colored console output for development.

    Records logged for an API call are tagged with the call's operation name
    (SummonerByName, League, Matches, Match).
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # format a copy, handlers share the record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"

        prefix = ""
        corr_id = correlation_id.get()
        if corr_id:
            prefix += f"[{corr_id[:8]}] "
        operation = getattr(record, "operation", None)
        if operation:
            prefix += f"<{operation}> "
        if prefix:
            record.msg = prefix + record.getMessage()
            record.args = None

        return super().format(record)


class ContextualAdapter(logging.LoggerAdapter):
    """Adds the current correlation id to every record's extras"""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra = dict(kwargs.get("extra") or {})

        corr_id = correlation_id.get()
        if corr_id:
            extra["correlation_id"] = corr_id

        kwargs["extra"] = extra
        return msg, kwargs


def _console_handler(json_format: bool, fmt: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S"))
    handler.addFilter(ApiKeyRedactor())
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(JsonFormatter())
    handler.addFilter(ApiKeyRedactor())
    return handler


_configured = False


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None,
    fmt: str = CONSOLE_FORMAT,
    force: bool = False
) -> None:
    """
    Configure root logging once at startup.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: JSON console output instead of colored text
        log_file: Optional path of an additional JSON log file
        fmt: Console format when not using JSON
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()
    root_logger.addHandler(_console_handler(json_format, fmt))

    if log_file:
        try:
            root_logger.addHandler(_file_handler(log_file))
        except OSError as e:
            root_logger.warning(f"Could not create log file {log_file}: {e}")

    # httpx logs every request URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _configured = True

    root_logger.debug(f"Logging configured: level={level}, json={json_format}")


def get_logger(name: str) -> ContextualAdapter:
    """
    Usage:
        logger = get_logger(__name__)
        logger.info("Fetched match", extra={"match_id": "NA1_123"})
    """
    return ContextualAdapter(logging.getLogger(name), {})


def set_correlation_id(corr_id: Optional[str]) -> None:
    correlation_id.set(corr_id)


def get_correlation_id() -> Optional[str]:
    return correlation_id.get()


def generate_correlation_id() -> str:
    """Start a new correlation id for the current context and return it"""
    corr_id = str(uuid.uuid4())
    set_correlation_id(corr_id)
    return corr_id
