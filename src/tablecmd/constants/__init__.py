"""Constants module for tablecmd.

This module contains all constant values and enumerations used throughout
the package. As Layer 0 in the architecture, it has no dependencies on
other tablecmd modules.

Organization:
    - sql: Command type enumeration
    - catalog: Table kinds, result display types and catalog constants
"""

from tablecmd.constants.sql import CommandType

from tablecmd.constants.catalog import (
    DATASOURCE_PROVIDER_PROPERTY,
    PARTITION_INFO_HEADER,
    USER_HOME_ROOT,
    ResultDataType,
    TableType,
)

__all__ = [
    # SQL
    "CommandType",
    # Catalog
    "TableType",
    "ResultDataType",
    "DATASOURCE_PROVIDER_PROPERTY",
    "PARTITION_INFO_HEADER",
    "USER_HOME_ROOT",
]
