"""Command execution.

``CommandExecutor`` runs one command against an injected catalog:

1. Preconditions are checked in order; the first violation is raised as a
   ``CommandValidationError`` before any catalog mutation.
2. LOAD DATA resolves its path.
3. The catalog is queried or mutated.
4. Returned rows are framed by the command's result schema.

Catalog failures propagate unchanged; nothing is retried.
"""

import time
from typing import Callable, Dict, List, Optional

from tablecmd.common.exceptions import validation_error
from tablecmd.constants import PARTITION_INFO_HEADER, CommandType, TableType
from tablecmd.logging import get_logger
from tablecmd.operations import Command
from tablecmd.operations.base import BaseCommand
from tablecmd.operations.ddl import AlterTableRename, CreateTable, CreateTableLike
from tablecmd.operations.dml import LoadData
from tablecmd.operations.show import DescribeTable, ShowTableProperties, ShowTables
from tablecmd.paths.resolver import resolve_load_path
from tablecmd.protocols.catalog import CatalogGateway
from tablecmd.settings import get_settings
from tablecmd.settings.main import _Settings
from tablecmd.types.catalog import CatalogTable
from tablecmd.types.relations import CatalogRelation, Relation
from tablecmd.types.results import CommandResult, Row
from tablecmd.utils.decorators import traced
from tablecmd.validation.preconditions import CatalogSnapshot, validate_command

logger = get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _command_attributes(self: "CommandExecutor", command: BaseCommand, *args) -> Dict[str, str]:
    return command.telemetry_fields()


class CommandExecutor:
    """Validates and executes table commands against a catalog.

    The executor is stateless apart from its collaborators and can run any
    number of commands, one at a time.

    Args:
        catalog: Catalog gateway used for every read and mutation
        settings: Settings instance; defaults to ``get_settings()``
        user_name: Home directory owner for relative non-local LOAD DATA
            paths; defaults to ``settings.load_user_name``, then to the
            user running the process
        clock: Returns the current time in epoch milliseconds

    Example:
        >>> executor = CommandExecutor(catalog)
        >>> result = executor.execute(ShowTables(database_name="sales"))
        >>> result.rows
        [('orders', False)]
    """

    def __init__(
        self,
        catalog: CatalogGateway,
        settings: Optional[_Settings] = None,
        *,
        user_name: Optional[str] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.catalog = catalog
        self.settings = settings or get_settings()
        self.user_name = user_name or self.settings.load_user_name
        self._clock = clock or _now_ms
        self._handlers: Dict[CommandType, Callable[[BaseCommand, CatalogSnapshot], CommandResult]] = {
            CommandType.CREATE_TABLE: self._create_table,
            CommandType.CREATE_TABLE_LIKE: self._create_table_like,
            CommandType.ALTER_TABLE_RENAME: self._alter_table_rename,
            CommandType.LOAD_DATA: self._load_data,
            CommandType.DESCRIBE_TABLE: self._describe_table,
            CommandType.SHOW_TABLES: self._show_tables,
            CommandType.SHOW_TABLE_PROPERTIES: self._show_table_properties,
        }

    def execute(self, command: Command) -> CommandResult:
        """Validate and run ``command``.

        Returns:
            CommandResult framed by ``command.output`` (no schema for DDL/LOAD)

        Raises:
            CommandValidationError: A precondition was violated; no mutation happened
            Exception: Whatever the catalog raised, unchanged
        """
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise validation_error(
                f"Unsupported command type: {command.command_type}",
                field="command_type",
                value=command.command_type,
            )

        attrs = command.observability_attributes()
        logger.info("Executing command", extra=attrs)

        snapshot = CatalogSnapshot(self.catalog)
        failure = validate_command(command, snapshot, self.settings.datasource_provider_property)
        if failure is not None:
            logger.warning(
                "Command precondition failed",
                extra={**attrs, "reason": failure.reason.value},
            )
            raise failure.to_error(command.command_type.value)

        result = handler(command, snapshot)
        logger.info("Command completed", extra={**attrs, "row_count": len(result.rows)})
        return result

    # DDL

    @traced("tablecmd.command.create_table", attribute_getter=_command_attributes)
    def _create_table(self, command: CreateTable, snapshot: CatalogSnapshot) -> CommandResult:
        self.catalog.create_table(command.table, command.if_not_exists)
        return CommandResult.empty()

    @traced("tablecmd.command.create_table_like", attribute_getter=_command_attributes)
    def _create_table_like(self, command: CreateTableLike, snapshot: CatalogSnapshot) -> CommandResult:
        source = self.catalog.get_table_metadata(command.source_table)
        table_to_create = self._clone_definition(source, command)
        self.catalog.create_table(table_to_create, command.if_not_exists)
        return CommandResult.empty()

    def _clone_definition(self, source: CatalogTable, command: CreateTableLike) -> CatalogTable:
        """Copy ``source`` as a new managed table named ``command.target_table``."""
        return source.model_copy(update={
            "identifier": command.target_table,
            "table_type": TableType.MANAGED,
            "create_time": self._clock(),
            "last_access_time": -1,
        }).with_new_storage(location_uri=None)

    @traced("tablecmd.command.alter_table_rename", attribute_getter=_command_attributes)
    def _alter_table_rename(self, command: AlterTableRename, snapshot: CatalogSnapshot) -> CommandResult:
        self.catalog.invalidate_table(command.old_name)
        self.catalog.rename_table(command.old_name, command.new_name)
        return CommandResult.empty()

    # DML

    @traced("tablecmd.command.load_data", attribute_getter=_command_attributes)
    def _load_data(self, command: LoadData, snapshot: CatalogSnapshot) -> CommandResult:
        target_table = snapshot.metadata_option(command.table)
        load_path = resolve_load_path(
            command.path,
            command.is_local,
            self.settings.filesystem.default_name,
            user_name=self.user_name,
        )

        if command.partition is not None:
            self.catalog.load_partition(
                target_table.identifier,
                load_path.uri,
                dict(command.partition),
                command.is_overwrite,
                inherit_table_specs=True,
            )
        else:
            self.catalog.load_table(
                target_table.identifier,
                load_path.uri,
                command.is_overwrite,
            )
        return CommandResult.empty()

    # Inspection

    @traced("tablecmd.command.describe_table", attribute_getter=_command_attributes)
    def _describe_table(self, command: DescribeTable, snapshot: CatalogSnapshot) -> CommandResult:
        relation = self.catalog.lookup_relation(command.table)
        return CommandResult(result_schema=command.output, rows=self._describe_rows(relation, command))

    def _describe_rows(self, relation: Relation, command: DescribeTable) -> List[Row]:
        rows: List[Row] = []
        if isinstance(relation, CatalogRelation):
            table = relation.catalog_table
            for column in table.columns:
                rows.append((column.name, column.data_type, column.comment))

            if table.is_partitioned:
                names = command.output.names
                rows.append((PARTITION_INFO_HEADER, "", ""))
                rows.append((f"# {names[0]}", names[1], names[2]))
                for column in table.partition_columns:
                    rows.append((column.name, column.data_type, column.comment))
        else:
            for field in relation.fields:
                comment = field.metadata.get("comment")
                rows.append((field.name, field.data_type, "" if comment is None else str(comment)))
        return rows

    @traced("tablecmd.command.show_tables", attribute_getter=_command_attributes)
    def _show_tables(self, command: ShowTables, snapshot: CatalogSnapshot) -> CommandResult:
        database = command.database_name or self.catalog.get_current_database()
        if command.table_identifier_pattern is not None:
            tables = self.catalog.list_tables(database, command.table_identifier_pattern)
        else:
            tables = self.catalog.list_tables(database)

        rows: List[Row] = [(t.table, t.database is None) for t in tables]
        return CommandResult(result_schema=command.output, rows=rows)

    @traced("tablecmd.command.show_table_properties", attribute_getter=_command_attributes)
    def _show_table_properties(self, command: ShowTableProperties, snapshot: CatalogSnapshot) -> CommandResult:
        if snapshot.is_temporary(command.table):
            return CommandResult.empty(command.output)

        table = self.catalog.get_table_metadata(command.table)
        if command.property_key is not None:
            value = table.properties.get(
                command.property_key,
                f"Table {table.qualified_name} does not have property: {command.property_key}",
            )
            rows: List[Row] = [(value,)]
        else:
            rows = [(key, value) for key, value in table.properties.items()]
        return CommandResult(result_schema=command.output, rows=rows)
