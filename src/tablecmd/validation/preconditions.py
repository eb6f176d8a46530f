"""Command precondition checks.

Every command type has an ordered list of checks. A check is a plain
function of a ``CatalogSnapshot`` that returns a ``ValidationFailure``
describing the violated rule, or None. Checks never raise for a violated
rule; ``first_failure`` evaluates them in order and stops at the first
failure, so later checks never query the catalog once one has failed.
"""

from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Optional

from tablecmd.common.exceptions import CommandValidationError, FailureReason
from tablecmd.constants import CommandType, TableType
from tablecmd.logging import get_logger
from tablecmd.operations.base import BaseCommand
from tablecmd.operations.ddl import AlterTableRename, CreateTableLike
from tablecmd.operations.dml import LoadData
from tablecmd.protocols.catalog import CatalogGateway
from tablecmd.types.catalog import CatalogTable, PartitionSpec, TableIdentifier

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidationFailure:
    """A violated precondition.

    Attributes:
        reason: Which rule was violated
        message: Human-readable description
        details: Structured context (table, column, ...)
    """

    reason: FailureReason
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_error(self, command: Optional[str] = None) -> CommandValidationError:
        return CommandValidationError(
            self.message,
            reason=self.reason,
            command=command,
            details=self.details,
        )


class CatalogSnapshot:
    """Catalog facts read during validation, each fetched at most once.

    The snapshot is advisory: the catalog may change between validation and
    the mutation that follows, and the mutation reports its own failure.
    """

    def __init__(self, catalog: CatalogGateway):
        self.catalog = catalog
        self._exists: Dict[TableIdentifier, bool] = {}
        self._temporary: Dict[TableIdentifier, bool] = {}
        self._metadata: Dict[TableIdentifier, Optional[CatalogTable]] = {}

    def table_exists(self, identifier: TableIdentifier) -> bool:
        if identifier not in self._exists:
            self._exists[identifier] = self.catalog.table_exists(identifier)
        return self._exists[identifier]

    def is_temporary(self, identifier: TableIdentifier) -> bool:
        if identifier not in self._temporary:
            self._temporary[identifier] = self.catalog.is_temporary_table(identifier)
        return self._temporary[identifier]

    def metadata_option(self, identifier: TableIdentifier) -> Optional[CatalogTable]:
        if identifier not in self._metadata:
            self._metadata[identifier] = self.catalog.get_table_metadata_option(identifier)
        return self._metadata[identifier]


Check = Callable[[CatalogSnapshot], Optional[ValidationFailure]]


def first_failure(checks: Iterable[Check], snapshot: CatalogSnapshot) -> Optional[ValidationFailure]:
    """Run ``checks`` in order and return the first failure, if any."""
    for check in checks:
        failure = check(snapshot)
        if failure is not None:
            return failure
        logger.debug("Precondition passed", extra={"check": getattr(check, "func", check).__name__})
    return None


# Existence and temporariness

def check_source_exists(source: TableIdentifier, snapshot: CatalogSnapshot) -> Optional[ValidationFailure]:
    if snapshot.table_exists(source):
        return None
    return ValidationFailure(
        FailureReason.SOURCE_NOT_FOUND,
        f"Source table in CREATE TABLE LIKE does not exist: '{source}'",
        {"table": source.unquoted},
    )


def check_source_not_temporary(source: TableIdentifier, snapshot: CatalogSnapshot) -> Optional[ValidationFailure]:
    if not snapshot.is_temporary(source):
        return None
    return ValidationFailure(
        FailureReason.SOURCE_IS_TEMPORARY,
        f"Source table in CREATE TABLE LIKE cannot be temporary: '{source}'",
        {"table": source.unquoted},
    )


def check_target_exists(target: TableIdentifier, snapshot: CatalogSnapshot) -> Optional[ValidationFailure]:
    if snapshot.table_exists(target):
        return None
    return ValidationFailure(
        FailureReason.TARGET_NOT_FOUND,
        f"Table in LOAD DATA does not exist: '{target}'",
        {"table": target.unquoted},
    )


def check_target_not_temporary(target: TableIdentifier, snapshot: CatalogSnapshot) -> Optional[ValidationFailure]:
    # Temporary tables never resolve through the persistent metadata lookup.
    if snapshot.metadata_option(target) is not None:
        return None
    return ValidationFailure(
        FailureReason.TARGET_IS_TEMPORARY,
        f"Table in LOAD DATA cannot be temporary: '{target}'",
        {"table": target.unquoted},
    )


# Kind compatibility

def check_alter_kind(
    name: TableIdentifier,
    is_view: bool,
    snapshot: CatalogSnapshot,
) -> Optional[ValidationFailure]:
    """ALTER TABLE must not target a view and ALTER VIEW must not target a table.

    Temporary tables and names unknown to the catalog are not checked here.
    """
    if snapshot.is_temporary(name):
        return None
    table = snapshot.metadata_option(name)
    if table is None:
        return None

    if table.table_type == TableType.VIEW and not is_view:
        return ValidationFailure(
            FailureReason.KIND_MISMATCH,
            "Cannot alter a view with ALTER TABLE. Please use ALTER VIEW instead",
            {"table": name.unquoted, "table_type": table.table_type.value},
        )
    if table.table_type != TableType.VIEW and is_view:
        return ValidationFailure(
            FailureReason.KIND_MISMATCH,
            "Cannot alter a table with ALTER VIEW. Please use ALTER TABLE instead",
            {"table": name.unquoted, "table_type": table.table_type.value},
        )
    return None


def check_not_datasource_table(
    target: TableIdentifier,
    provider_property: str,
    snapshot: CatalogSnapshot,
) -> Optional[ValidationFailure]:
    table = snapshot.metadata_option(target)
    if table is None or not table.is_datasource_table(provider_property):
        return None
    return ValidationFailure(
        FailureReason.UNSUPPORTED_TABLE_KIND_FOR_LOAD,
        f"LOAD DATA is not supported for datasource tables: '{target}'",
        {"table": target.unquoted, "provider": table.properties.get(provider_property)},
    )


# Partition completeness

def partition_spec_failure(
    table: CatalogTable,
    spec: Optional[PartitionSpec],
) -> Optional[ValidationFailure]:
    """Check a LOAD DATA partition spec against the table's partition columns.

    Unknown keys are reported first, naming the first offending key. A
    partitioned table then needs a spec covering every partition column;
    an unpartitioned table must not be given one.
    """
    declared = table.partition_column_names
    if not declared:
        if spec is not None:
            return ValidationFailure(
                FailureReason.PARTITION_SPEC_UNEXPECTED,
                "LOAD DATA to non-partitioned table cannot specify partition.",
                {"table": table.qualified_name},
            )
        return None

    for column in (spec or {}):
        if column not in declared:
            return ValidationFailure(
                FailureReason.UNKNOWN_PARTITION_COLUMN,
                f"LOAD DATA to partitioned table specifies a non-existing partition column: '{column}'",
                {"table": table.qualified_name, "column": column},
            )

    if spec is None or len(spec) != len(declared):
        return ValidationFailure(
            FailureReason.PARTITION_SPEC_INCOMPLETE,
            "LOAD DATA to partitioned table must specify a specific partition of "
            "the table by specifying values for all of the partitioning columns.",
            {
                "table": table.qualified_name,
                "partition_columns": list(declared),
                "given": sorted(spec or {}),
            },
        )
    return None


def check_partition_spec(
    target: TableIdentifier,
    spec: Optional[PartitionSpec],
    snapshot: CatalogSnapshot,
) -> Optional[ValidationFailure]:
    table = snapshot.metadata_option(target)
    if table is None:
        return None
    return partition_spec_failure(table, spec)


# Per-command check lists

def _create_table_like_checks(command: CreateTableLike, provider_property: str) -> List[Check]:
    return [
        partial(check_source_exists, command.source_table),
        partial(check_source_not_temporary, command.source_table),
    ]


def _alter_table_rename_checks(command: AlterTableRename, provider_property: str) -> List[Check]:
    return [
        partial(check_alter_kind, command.old_name, command.is_view),
    ]


def _load_data_checks(command: LoadData, provider_property: str) -> List[Check]:
    return [
        partial(check_target_exists, command.table),
        partial(check_target_not_temporary, command.table),
        partial(check_not_datasource_table, command.table, provider_property),
        partial(check_partition_spec, command.table, command.partition),
    ]


_CHECK_BUILDERS: Dict[CommandType, Callable[[Any, str], List[Check]]] = {
    CommandType.CREATE_TABLE_LIKE: _create_table_like_checks,
    CommandType.ALTER_TABLE_RENAME: _alter_table_rename_checks,
    CommandType.LOAD_DATA: _load_data_checks,
}


def checks_for(command: BaseCommand, provider_property: str) -> List[Check]:
    """Return the ordered checks for ``command``; empty when it has none."""
    builder = _CHECK_BUILDERS.get(command.command_type)
    if builder is None:
        return []
    return builder(command, provider_property)


def validate_command(
    command: BaseCommand,
    snapshot: CatalogSnapshot,
    provider_property: str,
) -> Optional[ValidationFailure]:
    """Return the first violated precondition of ``command``, or None."""
    return first_failure(checks_for(command, provider_property), snapshot)
