"""Catalog metadata types.

These models describe what the catalog knows about a table. They are
snapshots: the executor reads them, derives new ones (CREATE TABLE LIKE)
and hands them back to the catalog, but never persists them itself.
"""

import time
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator, model_validator

from tablecmd.constants import DATASOURCE_PROVIDER_PROPERTY, TableType
from tablecmd.types.base import TableCmdBaseModel

PartitionSpec = Dict[str, str]


def _now_ms() -> int:
    return int(time.time() * 1000)


class TableIdentifier(TableCmdBaseModel):
    """Optional database name plus table name.

    An identifier without a database refers to a session-local temporary
    table when one with that name exists, otherwise to a table in the
    catalog's current database.
    """
    table: str = Field(..., min_length=1)
    database: Optional[str] = Field(default=None)

    @field_validator("database")
    @classmethod
    def validate_database(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v:
            raise ValueError("database cannot be empty; omit it instead")
        return v

    @classmethod
    def parse(cls, name: str) -> "TableIdentifier":
        """Build an identifier from ``table`` or ``database.table``."""
        parts = name.strip().split(".")
        if len(parts) == 1:
            return cls(table=parts[0])
        if len(parts) == 2:
            return cls(database=parts[0], table=parts[1])
        raise ValueError(f"Table name must be `table` or `database.table`, got: '{name}'")

    @property
    def unquoted(self) -> str:
        if self.database:
            return f"{self.database}.{self.table}"
        return self.table

    @property
    def quoted(self) -> str:
        if self.database:
            return f"`{self.database}`.`{self.table}`"
        return f"`{self.table}`"

    def __str__(self) -> str:
        return self.quoted


class CatalogColumn(TableCmdBaseModel):
    """A column in a catalog table schema."""
    name: str = Field(..., min_length=1)
    data_type: str = Field(..., min_length=1)
    comment: Optional[str] = Field(default=None)


class CatalogStorageFormat(TableCmdBaseModel):
    """Physical storage description of a table."""
    location_uri: Optional[str] = Field(default=None)
    input_format: Optional[str] = Field(default=None)
    output_format: Optional[str] = Field(default=None)
    serde: Optional[str] = Field(default=None)
    serde_properties: Dict[str, str] = Field(default_factory=dict)


class CatalogTable(TableCmdBaseModel):
    """Catalog descriptor for a table or view.

    Attributes:
        identifier: Table identity in the catalog
        table_type: MANAGED, EXTERNAL, VIEW or TEMPORARY
        columns: Ordered schema, partition columns included
        partition_column_names: Ordered names of the partition columns
        storage: Storage descriptor
        properties: Table properties (TBLPROPERTIES)
        create_time: Creation time in epoch milliseconds
        last_access_time: Last access time in epoch milliseconds, -1 when unknown
    """
    identifier: TableIdentifier
    table_type: TableType
    columns: List[CatalogColumn] = Field(default_factory=list)
    partition_column_names: List[str] = Field(default_factory=list)
    storage: CatalogStorageFormat = Field(default_factory=CatalogStorageFormat)
    properties: Dict[str, str] = Field(default_factory=dict)
    create_time: int = Field(default_factory=_now_ms)
    last_access_time: int = Field(default=-1)
    comment: Optional[str] = Field(default=None)

    @model_validator(mode="after")
    def validate_partition_columns(self):
        """Partition columns must be unique and declared in the schema."""
        seen = set()
        for name in self.partition_column_names:
            if name in seen:
                raise ValueError(f"Duplicate partition column: '{name}'")
            seen.add(name)

        column_names = {c.name for c in self.columns}
        missing = [n for n in self.partition_column_names if n not in column_names]
        if missing:
            raise ValueError(
                f"Partition columns {missing} are not defined in the schema of "
                f"'{self.identifier.unquoted}'"
            )
        return self

    @property
    def qualified_name(self) -> str:
        return self.identifier.unquoted

    @property
    def is_partitioned(self) -> bool:
        return bool(self.partition_column_names)

    @property
    def partition_columns(self) -> List[CatalogColumn]:
        """Schema entries of the partition columns, in partition order."""
        by_name = {c.name: c for c in self.columns}
        return [by_name[name] for name in self.partition_column_names]

    def is_datasource_table(self, provider_property: str = DATASOURCE_PROVIDER_PROPERTY) -> bool:
        """True when the table is backed by a generic datasource format."""
        return provider_property in self.properties

    def with_new_storage(self, **changes: Any) -> "CatalogTable":
        """Return a copy whose storage descriptor has ``changes`` applied."""
        return self.model_copy(update={"storage": self.storage.model_copy(update=changes)})
