"""Inspection commands: DESCRIBE, SHOW TABLES and SHOW TBLPROPERTIES.

Each command declares a fixed result schema through ``output``.
"""

from typing import Literal, Optional

from pydantic import Field

from tablecmd.constants import CommandType, ResultDataType
from tablecmd.operations.base import BaseCommand
from tablecmd.types.catalog import TableIdentifier
from tablecmd.types.results import ResultColumn, ResultSchema

# Column names follow the warehouse's DESCRIBE output.
DESCRIBE_SCHEMA = ResultSchema(columns=[
    ResultColumn(name="col_name", nullable=False, comment="name of the column"),
    ResultColumn(name="data_type", nullable=False, comment="data type of the column"),
    ResultColumn(name="comment", nullable=True, comment="comment of the column"),
])

SHOW_TABLES_SCHEMA = ResultSchema(columns=[
    ResultColumn(name="tableName", nullable=False),
    ResultColumn(name="isTemporary", data_type=ResultDataType.BOOLEAN, nullable=False),
])

SHOW_PROPERTIES_SCHEMA = ResultSchema(columns=[
    ResultColumn(name="key", nullable=False),
    ResultColumn(name="value", nullable=False),
])

SHOW_PROPERTY_VALUE_SCHEMA = ResultSchema(columns=[
    ResultColumn(name="value", nullable=False),
])


class DescribeTable(BaseCommand):
    """``DESCRIBE [EXTENDED] table``"""
    command_type: Literal[CommandType.DESCRIBE_TABLE] = Field(
        default=CommandType.DESCRIBE_TABLE,
        frozen=True
    )
    table: TableIdentifier
    is_extended: bool = Field(default=False)

    @property
    def output(self) -> Optional[ResultSchema]:
        return DESCRIBE_SCHEMA

    @property
    def target(self) -> Optional[TableIdentifier]:
        return self.table


class ShowTables(BaseCommand):
    """List tables of a database.

    ``SHOW TABLES [(IN|FROM) database] [[LIKE] 'pattern']``

    The current database is used when ``database_name`` is not given.
    """
    command_type: Literal[CommandType.SHOW_TABLES] = Field(
        default=CommandType.SHOW_TABLES,
        frozen=True
    )
    database_name: Optional[str] = Field(default=None, min_length=1)
    table_identifier_pattern: Optional[str] = Field(default=None)

    @property
    def output(self) -> Optional[ResultSchema]:
        return SHOW_TABLES_SCHEMA


class ShowTableProperties(BaseCommand):
    """List table properties, or the value of one property.

    ``SHOW TBLPROPERTIES table [('key')]``
    """
    command_type: Literal[CommandType.SHOW_TABLE_PROPERTIES] = Field(
        default=CommandType.SHOW_TABLE_PROPERTIES,
        frozen=True
    )
    table: TableIdentifier
    property_key: Optional[str] = Field(default=None)

    @property
    def output(self) -> Optional[ResultSchema]:
        if self.property_key is None:
            return SHOW_PROPERTIES_SCHEMA
        return SHOW_PROPERTY_VALUE_SCHEMA

    @property
    def target(self) -> Optional[TableIdentifier]:
        return self.table
