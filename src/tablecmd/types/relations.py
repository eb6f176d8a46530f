"""Relations returned by a catalog lookup.

``lookup_relation`` may resolve to a relation backed by a catalog table
descriptor or to any other relation (a temporary view, a datasource
relation) that only exposes a schema.
"""

from typing import Any, Dict, List, Literal, Union

from pydantic import Field

from tablecmd.types.base import TableCmdBaseModel
from tablecmd.types.catalog import CatalogTable


class StructField(TableCmdBaseModel):
    """A field of a generic relation schema; ``metadata`` may carry a comment."""
    name: str = Field(..., min_length=1)
    data_type: str = Field(..., min_length=1)
    nullable: bool = Field(default=True)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CatalogRelation(TableCmdBaseModel):
    """Relation backed by a native catalog table descriptor."""
    kind: Literal["catalog"] = Field(default="catalog", frozen=True)
    catalog_table: CatalogTable


class GenericRelation(TableCmdBaseModel):
    """Relation known only through its schema."""
    kind: Literal["generic"] = Field(default="generic", frozen=True)
    fields: List[StructField] = Field(default_factory=list)


Relation = Union[CatalogRelation, GenericRelation]
