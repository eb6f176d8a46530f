"""Data Manipulation Language (DML) commands.

This module contains the LOAD DATA command.
"""

from typing import Dict, Literal, Optional

from pydantic import Field, field_validator

from tablecmd.constants import CommandType
from tablecmd.operations.base import BaseCommand
from tablecmd.types.catalog import TableIdentifier


class LoadData(BaseCommand):
    """Load files into a table.

    ``LOAD DATA [LOCAL] INPATH 'path' [OVERWRITE] INTO TABLE t [PARTITION (k=v, ...)]``

    Attributes:
        table: Target table
        path: Raw path as written by the user
        is_local: Path refers to the local filesystem (LOCAL keyword)
        is_overwrite: Replace existing data (OVERWRITE keyword)
        partition: Target partition; required exactly for partitioned tables
    """
    command_type: Literal[CommandType.LOAD_DATA] = Field(
        default=CommandType.LOAD_DATA,
        frozen=True
    )
    table: TableIdentifier
    path: str
    is_local: bool = Field(default=False)
    is_overwrite: bool = Field(default=False)
    partition: Optional[Dict[str, str]] = Field(default=None)

    @field_validator("partition")
    @classmethod
    def validate_partition_keys(cls, v: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
        if v is None:
            return v
        for key in v:
            if not key:
                raise ValueError("Partition column names cannot be empty")
        return v

    @property
    def target(self) -> Optional[TableIdentifier]:
        return self.table
