import json
import logging

from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from tablecmd.logging import ContextFilter, CustomJsonFormatter, setup_logging
from tablecmd.logging.filters import clear_request_context, set_request_context


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="sample",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_context_filter_uses_request_context():
    set_request_context(request_id="req-1", user_id="user-7", command="tablecmd.load_data")
    try:
        record = _record()
        assert ContextFilter().filter(record)
        assert record.request_id == "req-1"
        assert record.user_id == "user-7"
        assert record.command == "tablecmd.load_data"
        assert record.sdk_name == "tablecmd"
    finally:
        clear_request_context()


def test_context_filter_no_context_is_graceful():
    clear_request_context()
    record = _record()
    assert ContextFilter().filter(record)
    assert record.request_id is None
    assert record.command is None


def test_json_formatter_includes_extras():
    record = _record(command_type="SHOW_TABLES", table="default.orders")
    ContextFilter().filter(record)

    payload = json.loads(CustomJsonFormatter().format(record))

    assert payload["message"] == "sample"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["command_type"] == "SHOW_TABLES"
    assert payload["table"] == "default.orders"
    assert "pathname" not in payload


def test_json_formatter_uses_active_span_ids():
    span_context = SpanContext(
        trace_id=0x1234,
        span_id=0x56,
        is_remote=False,
        trace_flags=TraceFlags(TraceFlags.SAMPLED),
    )

    with trace.use_span(NonRecordingSpan(span_context)):
        payload = json.loads(CustomJsonFormatter().format(_record()))

    assert payload["trace_id"] == format(0x1234, "032x")
    assert payload["span_id"] == format(0x56, "016x")


def test_json_formatter_without_span_has_no_trace_ids():
    payload = json.loads(CustomJsonFormatter().format(_record()))

    assert "trace_id" not in payload


def test_setup_logging_configures_package_logger():
    package_logger = logging.getLogger("tablecmd")
    saved = (package_logger.level, package_logger.propagate, list(package_logger.handlers))
    try:
        setup_logging("debug")

        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False
        (handler,) = package_logger.handlers
        assert isinstance(handler.formatter, CustomJsonFormatter)
        assert any(isinstance(f, ContextFilter) for f in handler.filters)
    finally:
        package_logger.setLevel(saved[0])
        package_logger.propagate = saved[1]
        package_logger.handlers[:] = saved[2]
