"""Catalog gateway protocol.

The catalog service holds persistent table metadata and performs the
actual mutations. tablecmd consumes it through this interface and never
implements storage itself; ``tablecmd.catalog.memory.InMemoryCatalog`` is
the implementation used for tests and local runs.
"""

from typing import List, Optional, Protocol, runtime_checkable

from tablecmd.types.catalog import CatalogTable, PartitionSpec, TableIdentifier
from tablecmd.types.relations import Relation


@runtime_checkable
class CatalogGateway(Protocol):
    """Protocol defining the catalog surface used by the command executor.

    Failures raised by an implementation propagate through the executor
    unchanged.

    Descriptors returned by an implementation list partition columns in
    ``CatalogTable.columns`` as well as in ``partition_column_names``. A
    metastore that keeps partition keys apart from the data columns must
    append them to ``columns`` when building the descriptor.
    """

    def table_exists(self, identifier: TableIdentifier) -> bool:
        """Return True if a temporary or persistent table resolves from ``identifier``."""
        ...

    def is_temporary_table(self, identifier: TableIdentifier) -> bool:
        """Return True if ``identifier`` resolves to a session-local temporary table."""
        ...

    def get_table_metadata(self, identifier: TableIdentifier) -> CatalogTable:
        """Return the persistent table descriptor.

        Raises:
            Exception: If no persistent table exists under ``identifier``
        """
        ...

    def get_table_metadata_option(self, identifier: TableIdentifier) -> Optional[CatalogTable]:
        """Return the persistent table descriptor, or None (also for temporary tables)."""
        ...

    def create_table(self, table: CatalogTable, if_not_exists: bool) -> None:
        """Create a table; an existing table is an error unless ``if_not_exists``."""
        ...

    def rename_table(self, old_name: TableIdentifier, new_name: TableIdentifier) -> None:
        """Rename a table or view."""
        ...

    def invalidate_table(self, identifier: TableIdentifier) -> None:
        """Drop any cached plan or metadata for ``identifier``."""
        ...

    def load_table(self, identifier: TableIdentifier, path: str, overwrite: bool) -> None:
        """Move the data at ``path`` into an unpartitioned table."""
        ...

    def load_partition(
        self,
        identifier: TableIdentifier,
        path: str,
        spec: PartitionSpec,
        overwrite: bool,
        inherit_table_specs: bool,
    ) -> None:
        """Move the data at ``path`` into one partition of a partitioned table."""
        ...

    def list_tables(self, database: str, pattern: Optional[str] = None) -> List[TableIdentifier]:
        """List tables in ``database`` plus temporary tables, optionally filtered.

        Temporary tables are returned without a database.
        """
        ...

    def lookup_relation(self, identifier: TableIdentifier) -> Relation:
        """Resolve ``identifier`` to a relation; fails when nothing resolves."""
        ...

    def get_current_database(self) -> str:
        """Return the session's current database name."""
        ...
