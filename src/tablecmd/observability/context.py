"""Request-scoped logging and tracing context for command execution."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from opentelemetry.trace import Status, StatusCode
from pydantic import ConfigDict, Field

from tablecmd.logging import get_logger
from tablecmd.logging.filters import clear_request_context, set_request_context
from tablecmd.telemetry import get_tracer
from tablecmd.types.base import TableCmdBaseModel

ATTRIBUTE_PREFIX = "tablecmd"
DEFAULT_SCOPE_NAME = "tablecmd.request"

ContextLike = Union["ExecutionRequestContext", str, Mapping[str, Any], None]


class ExecutionRequestContext(TableCmdBaseModel):
    """Identity of one caller request, attached to its logs and spans."""
    model_config = ConfigDict(frozen=False)

    request_id: str
    user_id: Optional[str] = None
    correlation_id: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def generate(cls, **kwargs: Any) -> "ExecutionRequestContext":
        """Generate a new context with a unique request id."""
        return cls(request_id=str(uuid.uuid4()), **kwargs)

    def to_telemetry_dict(self) -> Dict[str, str]:
        payload: Dict[str, str] = {"request_id": self.request_id}
        if self.user_id:
            payload["user_id"] = self.user_id
        if self.correlation_id:
            payload["correlation_id"] = self.correlation_id
        for key, value in (self.attributes or {}).items():
            if value is not None:
                payload[f"ctx.{key}"] = str(value)
        return payload

    def span_attributes(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Telemetry fields plus ``extra``, namespaced for span attributes."""
        merged = {**self.to_telemetry_dict(), **(extra or {})}
        return {f"{ATTRIBUTE_PREFIX}.{key}": value for key, value in merged.items()}


@contextmanager
def execution_request_scope(
    ctx: ExecutionRequestContext,
    *,
    operation: Optional[str] = None,
    attributes: Optional[Mapping[str, str]] = None,
) -> Iterator[None]:
    """Tag logs with ``ctx`` and run the body inside one span named ``operation``.

    A failure is recorded on the span, logged and re-raised. The request
    context is cleared on exit either way.
    """
    name = operation or DEFAULT_SCOPE_NAME
    set_request_context(request_id=ctx.request_id, user_id=ctx.user_id, command=operation)

    span_attributes = ctx.span_attributes(attributes)
    span_attributes[f"{ATTRIBUTE_PREFIX}.operation.name"] = name

    try:
        with get_tracer(ATTRIBUTE_PREFIX).start_as_current_span(name) as span:
            for key, value in span_attributes.items():
                span.set_attribute(key, value)
            try:
                yield
            except Exception as exc:
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                get_logger(__name__).error(
                    "Command execution failed",
                    extra={**ctx.to_telemetry_dict(), "operation.name": name},
                    exc_info=True,
                )
                raise
    finally:
        clear_request_context()


def resolve_request_context(ctx: ContextLike) -> ExecutionRequestContext:
    """Normalize what a caller passed as ``ctx`` into an ExecutionRequestContext.

    Accepts an existing context, a bare request id, a mapping with
    ``request_id`` (or ``id``), ``user_id``, ``correlation_id`` and
    ``attributes`` keys, or None for a freshly generated id.
    """
    if isinstance(ctx, ExecutionRequestContext):
        return ctx
    if ctx is None:
        return ExecutionRequestContext.generate()
    if isinstance(ctx, str):
        return ExecutionRequestContext(request_id=ctx)

    data = dict(ctx)
    request_id = data.get("request_id") or data.get("id")
    attributes = data.get("attributes") or {}
    if not isinstance(attributes, Mapping):
        attributes = {"value": str(attributes)}

    return ExecutionRequestContext(
        request_id=str(request_id) if request_id else str(uuid.uuid4()),
        user_id=data.get("user_id"),
        correlation_id=data.get("correlation_id"),
        attributes=dict(attributes),
    )
