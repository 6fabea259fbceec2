"""Centralized logging configuration.

stdout carries the MCP stdio stream, so every log record goes to stderr.

Guarantees:
- A single named stderr handler on the root logger (repeat calls reconfigure it)
- Human-readable lines by default, one JSON object per line when requested
- httpx/httpcore request chatter is hidden unless DEBUG is requested
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

_HANDLER_NAME = "maven_deps_stderr"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_NOISY_LOGGERS = ("httpx", "httpcore")

# Attributes every LogRecord carries; anything else arrived via extra=
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonLogFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Always present: timestamp (ISO8601 UTC), level, logger, message. Fields
    passed through ``extra=`` are copied verbatim when JSON-serializable and
    stringified otherwise.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name or "root",
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = _json_safe(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


def _make_formatter(json_logs: bool) -> logging.Formatter:
    if json_logs:
        return JsonLogFormatter()
    return logging.Formatter(fmt=_TEXT_FORMAT, datefmt=_DATE_FORMAT)


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName((log_level or "").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configure application-wide logging.

    Parameters
    ----------
    log_level: str
        Root log level name; unknown names fall back to INFO.
    json_logs: bool
        If True, emit one-line JSON per record.
    """

    level = _resolve_level(log_level)
    root = logging.getLogger()

    handler = next((h for h in root.handlers if h.name == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.name = _HANDLER_NAME
        # Drop stdout stream handlers; they would corrupt the protocol stream
        root.handlers = [
            h
            for h in root.handlers
            if not (isinstance(h, logging.StreamHandler) and h.stream is sys.stdout)
        ]
        root.addHandler(handler)
    handler.setFormatter(_make_formatter(json_logs))
    root.setLevel(level)

    noisy_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


__all__ = ["configure_logging", "JsonLogFormatter"]
