"""Catalog constants and enumerations."""

from enum import Enum


class TableType(str, Enum):
    """Kind of a catalog table entry.

    Values:
        MANAGED: Table whose data lifecycle is owned by the catalog
        EXTERNAL: Table pointing at data the catalog does not own
        VIEW: Stored query
        TEMPORARY: Session-local table, never visible through the persistent catalog
    """

    MANAGED = "MANAGED"
    EXTERNAL = "EXTERNAL"
    VIEW = "VIEW"
    TEMPORARY = "TEMPORARY"


class ResultDataType(str, Enum):
    """Display types used by result schemas."""

    STRING = "string"
    BOOLEAN = "boolean"


# Property key marking a table as backed by a generic datasource format.
DATASOURCE_PROVIDER_PROPERTY = "spark.sql.sources.provider"

# Root under which relative non-local LOAD DATA paths are placed.
USER_HOME_ROOT = "/user"

# Header rows emitted by DESCRIBE for partitioned tables.
PARTITION_INFO_HEADER = "# Partition Information"
