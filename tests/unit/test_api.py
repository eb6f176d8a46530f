"""Tests for the execute() entry point and its tracing scope."""

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from tablecmd import execute
from tablecmd.common.exceptions import CommandValidationError, FailureReason
from tablecmd.logging.filters import request_id_var
from tablecmd.observability import ExecutionRequestContext, resolve_request_context
from tablecmd.operations import LoadData, ShowTables
from tablecmd.settings import _reload_settings
from tablecmd.types import TableIdentifier

_EXPORTER = InMemorySpanExporter()


@pytest.fixture(scope="module", autouse=True)
def tracer_provider():
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(_EXPORTER))
    trace.set_tracer_provider(provider)
    yield provider


@pytest.fixture
def spans():
    _EXPORTER.clear()
    yield _EXPORTER
    _EXPORTER.clear()


class TestExecute:

    def test_returns_command_result(self, catalog, clean_settings):
        result = execute(ShowTables(table_identifier_pattern="orders"), catalog)

        assert result.rows == [("orders", False)]

    def test_settings_drive_path_resolution(self, catalog, clean_settings):
        clean_settings.setenv("TABLECMD_FS_DEFAULT_NAME", "hdfs://warehouse:8020")
        _reload_settings()

        execute(LoadData(table=TableIdentifier(table="orders"), path="in/orders"), catalog, user_name="etl")

        assert catalog.loads[0]["path"] == "hdfs://warehouse:8020/user/etl/in/orders"

    def test_request_context_is_cleared(self, catalog, clean_settings):
        execute(ShowTables(), catalog, ctx="req-42")

        assert request_id_var.get() is None

    def test_spans(self, catalog, clean_settings, spans):
        ctx = ExecutionRequestContext(request_id="req-7", user_id="analyst")

        execute(ShowTables(), catalog, ctx=ctx)

        finished = {span.name: span for span in spans.get_finished_spans()}
        assert set(finished) == {"tablecmd.show_tables", "tablecmd.command.show_tables"}
        outer = finished["tablecmd.show_tables"]
        assert outer.attributes["tablecmd.request_id"] == "req-7"
        assert outer.attributes["tablecmd.user_id"] == "analyst"
        assert outer.attributes["tablecmd.command.type"] == "SHOW_TABLES"
        assert finished["tablecmd.command.show_tables"].parent.span_id == outer.context.span_id

    def test_validation_failure_marks_span_as_error(self, catalog, clean_settings, spans):
        with pytest.raises(CommandValidationError) as exc_info:
            execute(LoadData(table=TableIdentifier(table="tmp_orders"), path="/x"), catalog, ctx="req-9")

        assert exc_info.value.reason == FailureReason.TARGET_IS_TEMPORARY
        (span,) = spans.get_finished_spans()
        assert span.name == "tablecmd.load_data"
        assert span.status.status_code == StatusCode.ERROR


class TestResolveRequestContext:

    def test_generates_request_id(self):
        ctx = resolve_request_context(None)

        assert ctx.request_id

    def test_string_is_a_request_id(self):
        assert resolve_request_context("req-1").request_id == "req-1"

    def test_mapping(self):
        ctx = resolve_request_context({"id": 12, "user_id": "u", "attributes": "batch"})

        assert ctx.request_id == "12"
        assert ctx.user_id == "u"
        assert ctx.attributes == {"value": "batch"}
        assert ctx.to_telemetry_dict() == {"request_id": "12", "user_id": "u", "ctx.value": "batch"}

    def test_context_is_passed_through(self):
        ctx = ExecutionRequestContext.generate(user_id="u")

        assert resolve_request_context(ctx) is ctx
