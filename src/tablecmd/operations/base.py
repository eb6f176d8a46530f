"""Base command definitions.

This module defines the base class that all table commands inherit from.
Commands are data structures that describe which catalog action should be
performed, independent of how it is validated and executed.
"""

from typing import Any, Dict, Optional

from pydantic import Field

from tablecmd.constants.sql import CommandType
from tablecmd.types.base import TableCmdBaseModel
from tablecmd.types.catalog import TableIdentifier
from tablecmd.types.results import ResultSchema


def _stringify(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


class BaseCommand(TableCmdBaseModel):
    """Base class for all table commands.

    Commands are immutable and hold nothing beyond their constructor
    arguments. They are produced by a parser (or ``CommandBuilder``),
    executed exactly once by ``CommandExecutor`` and then discarded.

    Attributes:
        command_type: The type of command
        logging_context: Optional key/values attached to logs and spans
    """
    command_type: CommandType
    logging_context: Dict[str, Any] = Field(
        default_factory=dict,
        description="Optional key/values for logging/tracking"
    )

    @property
    def output(self) -> Optional[ResultSchema]:
        """Result schema of the command, or None when it returns no rows."""
        return None

    @property
    def target(self) -> Optional[TableIdentifier]:
        """Table the command acts on, when there is a single one."""
        return None

    def telemetry_fields(self) -> Dict[str, str]:
        """Return flattened telemetry fields describing this command."""
        payload: Dict[str, str] = {
            "command.type": self.command_type.value,
        }
        if self.target is not None:
            payload["command.table"] = self.target.unquoted
        for key, value in (self.logging_context or {}).items():
            sanitized = _stringify(value)
            if sanitized is not None:
                payload[f"command.ctx.{key}"] = sanitized
        return payload

    def observability_attributes(self) -> Dict[str, str]:
        """Return key attributes useful for logging/metrics."""
        attrs: Dict[str, str] = {
            "command_type": self.command_type.value,
        }
        if self.target is not None:
            attrs["table"] = self.target.unquoted
        for key, value in (self.logging_context or {}).items():
            sanitized = _stringify(value)
            if sanitized is not None:
                attrs[f"context_{key}"] = sanitized
        return attrs
