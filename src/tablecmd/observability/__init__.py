"""Request-scoped logging and tracing context."""

from tablecmd.observability.context import (
    ExecutionRequestContext,
    execution_request_scope,
    resolve_request_context,
)

__all__ = [
    "ExecutionRequestContext",
    "execution_request_scope",
    "resolve_request_context",
]
