"""Command builder for creating table commands.

This module provides a builder class for creating command instances
based on CommandType. It implements a registry-based builder pattern
so callers (parsers, serialized requests) never branch on command type.
"""

from typing import Any, Dict, Type

from tablecmd.constants.sql import CommandType
from tablecmd.logging import get_logger
from tablecmd.operations.base import BaseCommand
from tablecmd.operations.ddl import AlterTableRename, CreateTable, CreateTableLike
from tablecmd.operations.dml import LoadData
from tablecmd.operations.show import DescribeTable, ShowTableProperties, ShowTables

logger = get_logger(__name__)


class CommandBuilder:
    """Builder for creating command instances based on CommandType.

    Example:
        >>> command = CommandBuilder.create_command(
        ...     CommandType.SHOW_TABLES,
        ...     database_name="sales",
        ...     table_identifier_pattern="fact_*",
        ... )
    """

    # Registry mapping CommandType to command class
    _registry: Dict[CommandType, Type[BaseCommand]] = {
        CommandType.CREATE_TABLE: CreateTable,
        CommandType.CREATE_TABLE_LIKE: CreateTableLike,
        CommandType.ALTER_TABLE_RENAME: AlterTableRename,
        CommandType.LOAD_DATA: LoadData,
        CommandType.DESCRIBE_TABLE: DescribeTable,
        CommandType.SHOW_TABLES: ShowTables,
        CommandType.SHOW_TABLE_PROPERTIES: ShowTableProperties,
    }

    @classmethod
    def command_class(cls, command_type: CommandType) -> Type[BaseCommand]:
        """Return the command class registered for ``command_type``.

        Raises:
            ValueError: If no command is registered for the type
        """
        command_class = cls._registry.get(command_type)
        if command_class is None:
            raise ValueError(f"No command registered for CommandType.{command_type.value}")
        return command_class

    @classmethod
    def create_command(cls, command_type: CommandType, **kwargs: Any) -> BaseCommand:
        """Create a command instance from CommandType and parameters.

        Args:
            command_type: The type of command to create
            **kwargs: Command-specific fields

        Returns:
            Configured command instance

        Raises:
            ValueError: If parameters are invalid for the command type
        """
        command_class = cls.command_class(command_type)

        try:
            return command_class(**kwargs)
        except Exception as e:
            logger.error(f"Failed to create {command_class.__name__}: {e}")
            raise ValueError(f"Cannot create command {command_type.value}: {e}") from e

    @classmethod
    def create_command_from_dict(cls, command_dict: Dict[str, Any]) -> BaseCommand:
        """Create command instance from dictionary.

        Deserializes commands that were serialized with ``to_dict()``.

        Args:
            command_dict: Serialized command

        Returns:
            BaseCommand instance

        Raises:
            ValueError: If the command type is missing or unknown, or data is invalid
        """
        command_type_value = command_dict.get("command_type")
        if not command_type_value:
            raise ValueError("command_type is required in command dictionary")

        if isinstance(command_type_value, str):
            try:
                command_type = CommandType(command_type_value)
            except ValueError as e:
                raise ValueError(f"Invalid command_type: {command_type_value}") from e
        else:
            command_type = command_type_value

        command_class = cls.command_class(command_type)

        try:
            return command_class.model_validate({**command_dict, "command_type": command_type})
        except Exception as e:
            logger.error(f"Failed to create {command_class.__name__} from dict: {e}")
            raise ValueError(f"Invalid command data for {command_type.value}: {e}") from e
