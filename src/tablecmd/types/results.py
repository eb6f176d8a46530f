"""Result schema and result set types.

Commands that return tabular output declare a fixed ``ResultSchema``; the
executor frames its rows in a ``CommandResult``. A result without a schema
(DDL and LOAD) is different from a result with a schema and no rows.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import Field, model_validator

from tablecmd.constants import ResultDataType
from tablecmd.types.base import TableCmdBaseModel

RowValue = Optional[Union[bool, str]]
Row = Tuple[RowValue, ...]


class ResultColumn(TableCmdBaseModel):
    """A column of a command result."""
    name: str = Field(..., min_length=1)
    data_type: ResultDataType = Field(default=ResultDataType.STRING)
    nullable: bool = Field(default=False)
    comment: Optional[str] = Field(default=None)


class ResultSchema(TableCmdBaseModel):
    """Ordered column definitions of a command result."""
    columns: List[ResultColumn] = Field(..., min_length=1)

    @property
    def names(self) -> List[str]:
        return [c.name for c in self.columns]

    @property
    def arity(self) -> int:
        return len(self.columns)


class CommandResult(TableCmdBaseModel):
    """Rows produced by one command, framed by its result schema."""
    result_schema: Optional[ResultSchema] = Field(default=None)
    rows: List[Row] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_rows(self):
        if self.result_schema is None:
            if self.rows:
                raise ValueError("A result without a schema cannot carry rows")
            return self

        for index, row in enumerate(self.rows):
            if len(row) != self.result_schema.arity:
                raise ValueError(
                    f"Row {index} has {len(row)} values, schema "
                    f"{self.result_schema.names} expects {self.result_schema.arity}"
                )
            for column, value in zip(self.result_schema.columns, row):
                if value is None and not column.nullable:
                    raise ValueError(f"Row {index}: column '{column.name}' is not nullable")
        return self

    @classmethod
    def empty(cls, schema: Optional[ResultSchema] = None) -> "CommandResult":
        return cls(result_schema=schema, rows=[])

    @property
    def has_schema(self) -> bool:
        return self.result_schema is not None

    def to_records(self) -> List[Dict[str, Any]]:
        """Rows as dictionaries keyed by column name."""
        if self.result_schema is None:
            return []
        names = self.result_schema.names
        return [dict(zip(names, row)) for row in self.rows]
