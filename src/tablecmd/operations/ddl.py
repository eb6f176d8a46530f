"""Data Definition Language (DDL) commands.

This module contains command classes for CREATE TABLE, CREATE TABLE LIKE
and ALTER TABLE/VIEW ... RENAME TO.
"""

from typing import Literal, Optional

from pydantic import Field

from tablecmd.constants import CommandType
from tablecmd.operations.base import BaseCommand
from tablecmd.types.catalog import CatalogTable, TableIdentifier


class CreateTable(BaseCommand):
    """Create table command.

    ``CREATE [EXTERNAL] TABLE [IF NOT EXISTS] [db.]table ...``

    The fully described table is handed to the catalog, which owns the
    existence policy. Not intended for temporary tables, though the kind is
    not checked here.
    """
    command_type: Literal[CommandType.CREATE_TABLE] = Field(
        default=CommandType.CREATE_TABLE,
        frozen=True
    )
    table: CatalogTable
    if_not_exists: bool = Field(default=False)

    @property
    def target(self) -> Optional[TableIdentifier]:
        return self.table.identifier


class CreateTableLike(BaseCommand):
    """Create a table with the same definition as an existing table.

    ``CREATE TABLE [IF NOT EXISTS] [db.]table LIKE [other_db.]existing_table``
    """
    command_type: Literal[CommandType.CREATE_TABLE_LIKE] = Field(
        default=CommandType.CREATE_TABLE_LIKE,
        frozen=True
    )
    target_table: TableIdentifier
    source_table: TableIdentifier
    if_not_exists: bool = Field(default=False)

    @property
    def target(self) -> Optional[TableIdentifier]:
        return self.target_table


class AlterTableRename(BaseCommand):
    """Rename a table or a view.

    ``ALTER TABLE t1 RENAME TO t2`` / ``ALTER VIEW v1 RENAME TO v2``
    """
    command_type: Literal[CommandType.ALTER_TABLE_RENAME] = Field(
        default=CommandType.ALTER_TABLE_RENAME,
        frozen=True
    )
    old_name: TableIdentifier
    new_name: TableIdentifier
    is_view: bool = Field(default=False)

    @property
    def target(self) -> Optional[TableIdentifier]:
        return self.old_name
