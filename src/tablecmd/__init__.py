from tablecmd.__version__ import __version__

from tablecmd.api import execute
from tablecmd.catalog import InMemoryCatalog
from tablecmd.common.exceptions import (
    CatalogError,
    CommandValidationError,
    ErrorCode,
    FailureReason,
    TableCmdError,
)
from tablecmd.constants import CommandType, TableType
from tablecmd.execution import CommandExecutor
from tablecmd.operations import (
    AlterTableRename,
    BaseCommand,
    Command,
    CommandBuilder,
    CreateTable,
    CreateTableLike,
    DescribeTable,
    LoadData,
    ShowTableProperties,
    ShowTables,
)
from tablecmd.paths import resolve_load_path
from tablecmd.protocols import CatalogGateway
from tablecmd.types import (
    CatalogColumn,
    CatalogRelation,
    CatalogStorageFormat,
    CatalogTable,
    CommandResult,
    GenericRelation,
    ResolvedPath,
    ResultColumn,
    ResultSchema,
    StructField,
    TableIdentifier,
)

__all__ = [
    "__version__",

    # api
    "execute",
    "CommandExecutor",

    # Commands
    "BaseCommand",
    "Command",
    "CommandBuilder",
    "CommandType",
    "CreateTable",
    "CreateTableLike",
    "AlterTableRename",
    "LoadData",
    "DescribeTable",
    "ShowTables",
    "ShowTableProperties",

    # Catalog
    "CatalogGateway",
    "InMemoryCatalog",
    "TableIdentifier",
    "TableType",
    "CatalogColumn",
    "CatalogStorageFormat",
    "CatalogTable",
    "CatalogRelation",
    "GenericRelation",
    "StructField",

    # Results and paths
    "CommandResult",
    "ResultSchema",
    "ResultColumn",
    "ResolvedPath",
    "resolve_load_path",

    # Exceptions (public API)
    "TableCmdError",
    "CommandValidationError",
    "CatalogError",
    "ErrorCode",
    "FailureReason",
]
