"""SQL command constants.

This module contains the enumeration of table commands handled by the
executor. It is Layer 0 and has no dependencies on other tablecmd modules.
"""

from enum import Enum


class CommandType(str, Enum):
    """Table command type enumeration.

    One value per statement form in the SQL surface:

    - DDL: CREATE_TABLE, CREATE_TABLE_LIKE, ALTER_TABLE_RENAME
    - DML: LOAD_DATA
    - Inspection: DESCRIBE_TABLE, SHOW_TABLES, SHOW_TABLE_PROPERTIES
    """

    # Data Definition (DDL)
    CREATE_TABLE = "CREATE_TABLE"
    CREATE_TABLE_LIKE = "CREATE_TABLE_LIKE"
    ALTER_TABLE_RENAME = "ALTER_TABLE_RENAME"

    # Data Manipulation (DML)
    LOAD_DATA = "LOAD_DATA"

    # Inspection
    DESCRIBE_TABLE = "DESCRIBE_TABLE"
    SHOW_TABLES = "SHOW_TABLES"
    SHOW_TABLE_PROPERTIES = "SHOW_TABLE_PROPERTIES"
