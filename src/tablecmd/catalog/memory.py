"""In-memory catalog for testing and development.

This module provides the InMemoryCatalog class which implements the
CatalogGateway protocol without a real metastore. Persistent tables live
in named databases; temporary tables are session-local and have no
database. Name lookups are case-insensitive.
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple, Union

from tablecmd.common.exceptions import CatalogError, ErrorCode, resource_not_found_error
from tablecmd.logging import get_logger
from tablecmd.types.catalog import CatalogTable, PartitionSpec, TableIdentifier
from tablecmd.types.relations import CatalogRelation, Relation

logger = get_logger(__name__)

DEFAULT_DATABASE = "default"


def filter_pattern(names: Iterable[str], pattern: str) -> List[str]:
    """Filter ``names`` with a SHOW TABLES wildcard pattern.

    ``*`` matches any sequence of characters and ``|`` separates
    alternatives. Matching is case-insensitive and covers the whole name.
    Alternatives that are not valid expressions are ignored.

    Returns:
        Matching names, sorted and without duplicates
    """
    candidates = list(names)
    matched = set()
    for sub_pattern in pattern.strip().split("|"):
        try:
            regex = re.compile(sub_pattern.replace("*", ".*"), re.IGNORECASE)
        except re.error:
            logger.debug("Ignoring invalid table pattern", extra={"pattern": sub_pattern})
            continue
        matched.update(name for name in candidates if regex.fullmatch(name))
    return sorted(matched)


class InMemoryCatalog:
    """Catalog gateway backed by dictionaries.

    Every mutation is appended to ``calls`` as ``(method, *args)`` so tests
    can assert which catalog calls a command made.

    Attributes:
        calls: Mutation call log
        loads: Arguments of every load_table / load_partition call
        invalidated: Identifiers passed to invalidate_table
    """

    def __init__(self, current_database: str = DEFAULT_DATABASE):
        self._databases: Dict[str, Dict[str, CatalogTable]] = {}
        self._temporary: Dict[str, Relation] = {}
        self.calls: List[Tuple] = []
        self.loads: List[Dict[str, object]] = []
        self.invalidated: List[TableIdentifier] = []
        self.create_database(current_database)
        self._current_database = current_database

    # Setup helpers (not part of the gateway protocol, not recorded)

    def create_database(self, name: str, ignore_if_exists: bool = True) -> None:
        key = name.lower()
        if key in self._databases:
            if ignore_if_exists:
                return
            raise CatalogError(
                f"Database '{name}' already exists",
                error_code=ErrorCode.CATALOG_ERROR,
                details={"database": name},
            )
        self._databases[key] = {}

    def set_current_database(self, name: str) -> None:
        self._database_tables(name)
        self._current_database = name

    def add_table(self, table: CatalogTable) -> CatalogTable:
        """Register a persistent table, creating its database if needed."""
        database = table.identifier.database or self._current_database
        self.create_database(database)
        stored = self._qualify(table, database)
        self._databases[database.lower()][table.identifier.table.lower()] = stored
        return stored

    def register_temporary_table(self, name: str, relation: Union[Relation, CatalogTable]) -> None:
        """Register a session-local temporary table under ``name``."""
        if isinstance(relation, CatalogTable):
            relation = CatalogRelation(catalog_table=relation)
        self._temporary[name.lower()] = relation

    def reset_calls(self) -> None:
        self.calls.clear()
        self.loads.clear()
        self.invalidated.clear()

    @property
    def mutation_count(self) -> int:
        return len(self.calls)

    # Internal helpers

    def _database_tables(self, name: str) -> Dict[str, CatalogTable]:
        tables = self._databases.get(name.lower())
        if tables is None:
            raise resource_not_found_error(
                f"Database '{name}' not found",
                resource_type="database",
                resource_name=name,
                error_code=ErrorCode.DATABASE_NOT_FOUND,
            )
        return tables

    def _is_temporary(self, identifier: TableIdentifier) -> bool:
        return identifier.database is None and identifier.table.lower() in self._temporary

    def _persistent(self, identifier: TableIdentifier) -> Optional[CatalogTable]:
        database = identifier.database or self._current_database
        tables = self._databases.get(database.lower(), {})
        return tables.get(identifier.table.lower())

    def _table_not_found(self, identifier: TableIdentifier) -> CatalogError:
        return resource_not_found_error(
            f"Table or view '{identifier.unquoted}' not found in database "
            f"'{identifier.database or self._current_database}'",
            resource_type="table",
            resource_name=identifier.unquoted,
            error_code=ErrorCode.TABLE_NOT_FOUND,
        )

    @staticmethod
    def _qualify(table: CatalogTable, database: str) -> CatalogTable:
        if table.identifier.database == database:
            return table
        identifier = TableIdentifier(table=table.identifier.table, database=database)
        return table.model_copy(update={"identifier": identifier})

    # CatalogGateway

    def table_exists(self, identifier: TableIdentifier) -> bool:
        return self._is_temporary(identifier) or self._persistent(identifier) is not None

    def is_temporary_table(self, identifier: TableIdentifier) -> bool:
        return self._is_temporary(identifier)

    def get_table_metadata(self, identifier: TableIdentifier) -> CatalogTable:
        table = self._persistent(identifier)
        if table is None:
            raise self._table_not_found(identifier)
        return table

    def get_table_metadata_option(self, identifier: TableIdentifier) -> Optional[CatalogTable]:
        if self._is_temporary(identifier):
            return None
        return self._persistent(identifier)

    def create_table(self, table: CatalogTable, if_not_exists: bool) -> None:
        database = table.identifier.database or self._current_database
        tables = self._database_tables(database)
        key = table.identifier.table.lower()
        self.calls.append(("create_table", table.identifier, if_not_exists))

        if key in tables:
            if if_not_exists:
                logger.debug("Table already exists, skipping create", extra={"table": table.qualified_name})
                return
            raise CatalogError(
                f"Table '{table.identifier.table}' already exists in database '{database}'",
                error_code=ErrorCode.TABLE_ALREADY_EXISTS,
                details={"table": table.identifier.table, "database": database},
            )
        tables[key] = self._qualify(table, database)

    def rename_table(self, old_name: TableIdentifier, new_name: TableIdentifier) -> None:
        self.calls.append(("rename_table", old_name, new_name))

        if self._is_temporary(old_name):
            if new_name.database is not None:
                raise CatalogError(
                    f"Cannot rename temporary table '{old_name.unquoted}' into database "
                    f"'{new_name.database}'",
                    error_code=ErrorCode.TABLE_OPERATION_ERROR,
                )
            if new_name.table.lower() in self._temporary:
                raise CatalogError(
                    f"Temporary table '{new_name.table}' already exists",
                    error_code=ErrorCode.TABLE_ALREADY_EXISTS,
                )
            self._temporary[new_name.table.lower()] = self._temporary.pop(old_name.table.lower())
            return

        database = old_name.database or self._current_database
        new_database = new_name.database or database
        if new_database.lower() != database.lower():
            raise CatalogError(
                f"RENAME TABLE source and destination databases do not match: "
                f"'{database}' != '{new_database}'",
                error_code=ErrorCode.TABLE_OPERATION_ERROR,
            )

        tables = self._database_tables(database)
        table = tables.get(old_name.table.lower())
        if table is None:
            raise self._table_not_found(old_name)
        if new_name.table.lower() in tables:
            raise CatalogError(
                f"Table '{new_name.table}' already exists in database '{database}'",
                error_code=ErrorCode.TABLE_ALREADY_EXISTS,
            )

        del tables[old_name.table.lower()]
        renamed = TableIdentifier(table=new_name.table, database=table.identifier.database)
        tables[new_name.table.lower()] = table.model_copy(update={"identifier": renamed})

    def invalidate_table(self, identifier: TableIdentifier) -> None:
        self.calls.append(("invalidate_table", identifier))
        self.invalidated.append(identifier)

    def load_table(self, identifier: TableIdentifier, path: str, overwrite: bool) -> None:
        self.get_table_metadata(identifier)
        self.calls.append(("load_table", identifier, path, overwrite))
        self.loads.append({"table": identifier, "path": path, "overwrite": overwrite})

    def load_partition(
        self,
        identifier: TableIdentifier,
        path: str,
        spec: PartitionSpec,
        overwrite: bool,
        inherit_table_specs: bool,
    ) -> None:
        self.get_table_metadata(identifier)
        self.calls.append(("load_partition", identifier, path, dict(spec), overwrite, inherit_table_specs))
        self.loads.append({
            "table": identifier,
            "path": path,
            "partition": dict(spec),
            "overwrite": overwrite,
            "inherit_table_specs": inherit_table_specs,
        })

    def list_tables(self, database: str, pattern: Optional[str] = None) -> List[TableIdentifier]:
        tables = self._database_tables(database)
        persistent = {t.identifier.table: t.identifier for t in tables.values()}
        temporary = {name: TableIdentifier(table=name) for name in self._temporary}

        names = list(persistent) + [n for n in temporary if n not in persistent]
        if pattern is not None:
            names = filter_pattern(names, pattern)
        else:
            names = sorted(names)

        out: List[TableIdentifier] = []
        for name in names:
            if name in temporary:
                out.append(temporary[name])
            if name in persistent:
                out.append(persistent[name])
        return out

    def lookup_relation(self, identifier: TableIdentifier) -> Relation:
        if self._is_temporary(identifier):
            return self._temporary[identifier.table.lower()]
        table = self._persistent(identifier)
        if table is None:
            raise self._table_not_found(identifier)
        return CatalogRelation(catalog_table=table)

    def get_current_database(self) -> str:
        return self._current_database
