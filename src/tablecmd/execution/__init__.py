"""Command execution."""

from tablecmd.execution.executor import CommandExecutor

__all__ = [
    "CommandExecutor",
]
