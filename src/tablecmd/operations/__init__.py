"""Table command module.

This module provides data structures that describe table commands
independent of how they are executed. Commands are pure data that can be:
- Validated against catalog state and executed by the CommandExecutor
- Built from a CommandType with the CommandBuilder
- Serialized with ``to_dict()`` and restored

The set of commands is closed: ``Command`` is the tagged union of every
command class, discriminated by ``command_type``.
"""

from typing import Annotated, Union

from pydantic import Field

# Base command
from tablecmd.operations.base import BaseCommand

# DDL commands
from tablecmd.operations.ddl import (
    AlterTableRename,
    CreateTable,
    CreateTableLike,
)

# DML commands
from tablecmd.operations.dml import LoadData

# Inspection commands
from tablecmd.operations.show import (
    DescribeTable,
    ShowTableProperties,
    ShowTables,
)

# Builder
from tablecmd.operations.builder import CommandBuilder

Command = Annotated[
    Union[
        CreateTable,
        CreateTableLike,
        AlterTableRename,
        LoadData,
        DescribeTable,
        ShowTables,
        ShowTableProperties,
    ],
    Field(discriminator="command_type"),
]

__all__ = [
    # Base
    "BaseCommand",
    "Command",
    # DDL
    "CreateTable",
    "CreateTableLike",
    "AlterTableRename",
    # DML
    "LoadData",
    # Inspection
    "DescribeTable",
    "ShowTables",
    "ShowTableProperties",
    # Builder
    "CommandBuilder",
]
