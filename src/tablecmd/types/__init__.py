"""Type definitions shared across tablecmd."""

from tablecmd.types.base import TableCmdBaseModel
from tablecmd.types.catalog import (
    CatalogColumn,
    CatalogStorageFormat,
    CatalogTable,
    PartitionSpec,
    TableIdentifier,
)
from tablecmd.types.paths import ResolvedPath
from tablecmd.types.relations import CatalogRelation, GenericRelation, Relation, StructField
from tablecmd.types.results import CommandResult, ResultColumn, ResultSchema, Row

__all__ = [
    "TableCmdBaseModel",
    # Catalog
    "TableIdentifier",
    "CatalogColumn",
    "CatalogStorageFormat",
    "CatalogTable",
    "PartitionSpec",
    # Relations
    "Relation",
    "CatalogRelation",
    "GenericRelation",
    "StructField",
    # Paths
    "ResolvedPath",
    # Results
    "ResultColumn",
    "ResultSchema",
    "CommandResult",
    "Row",
]
