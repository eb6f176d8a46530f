"""Structured JSON logging for tablecmd.

Records are rendered as one JSON object per line. Anything passed through
``extra=`` becomes a top-level key, the ``ContextFilter`` adds the request
context, and the active OpenTelemetry span (if any) supplies trace ids.
Configuration is declarative via ``logging.config.dictConfig``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from opentelemetry import trace

PACKAGE_LOGGER = "tablecmd"


def _build_reserved_keys() -> Set[str]:
    """Collect standard ``LogRecord`` attributes so only extras are emitted."""
    probe = logging.LogRecord(
        name="tablecmd.probe",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    reserved = set(probe.__dict__.keys())
    reserved.update({"asctime", "message"})
    return reserved


_RESERVED_LOG_RECORD_KEYS = _build_reserved_keys()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _trace_ids(record: logging.LogRecord) -> Dict[str, str]:
    # Prefer ids injected by an OpenTelemetry logging instrumentation.
    if hasattr(record, "otelTraceID"):
        return {"trace_id": record.otelTraceID, "span_id": getattr(record, "otelSpanID", "")}

    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": format(span_context.trace_id, "032x"),
        "span_id": format(span_context.span_id, "016x"),
    }


class CustomJsonFormatter(logging.Formatter):
    """JSON formatter that adds command context and trace ids."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_KEYS and not key.startswith("otel")
        }

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()
        log_record.update(_trace_ids(record))

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def setup_logging(level: Optional[str] = None, *, root: bool = False) -> None:
    """Configure JSON logging for the ``tablecmd`` loggers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to ``TABLECMD_LOG_LEVEL`` from settings.
        root: Also route every other logger of the process through the
            JSON handler.
    """
    if level is None:
        from tablecmd.settings import get_settings
        level = get_settings().log_level
    level = level.upper()

    handler_config: Dict[str, Any] = {
        "level": level,
        "handlers": ["console"],
    }
    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "tablecmd_json": {
                "()": "tablecmd.logging.logger.CustomJsonFormatter",
            }
        },
        "filters": {
            "tablecmd_context": {
                "()": "tablecmd.logging.filters.ContextFilter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "tablecmd_json",
                "filters": ["tablecmd_context"],
                "stream": "ext://sys.stdout",
            }
        },
    }
    if root:
        config_dict["root"] = handler_config
    else:
        config_dict["loggers"] = {PACKAGE_LOGGER: {**handler_config, "propagate": False}}

    logging.config.dictConfig(config_dict)
