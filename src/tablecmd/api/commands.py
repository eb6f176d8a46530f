from typing import Optional

from tablecmd.execution import CommandExecutor
from tablecmd.observability.context import ContextLike, execution_request_scope, resolve_request_context
from tablecmd.operations import Command
from tablecmd.protocols.catalog import CatalogGateway
from tablecmd.settings import get_settings
from tablecmd.types.results import CommandResult


def execute(
    command: Command,
    catalog: CatalogGateway,
    *,
    user_name: Optional[str] = None,
    ctx: ContextLike = None,
) -> CommandResult:
    """Validate and execute one table command against ``catalog``.

    Runs inside a request scope that tags logs with the request id and
    opens a tracing span named after the command.
    """
    context = resolve_request_context(ctx)
    operation = f"tablecmd.{command.command_type.value.lower()}"
    with execution_request_scope(context, operation=operation, attributes=command.telemetry_fields()):
        executor = CommandExecutor(catalog, get_settings(), user_name=user_name)
        return executor.execute(command)
