from typing import Optional

from pydantic import Field

from tablecmd.types.base import TableCmdBaseModel


class ResolvedPath(TableCmdBaseModel):
    """Canonical URI produced by load path resolution.

    Handed to the catalog as an opaque string; never persisted here.
    """
    scheme: str = Field(..., min_length=1)
    authority: Optional[str] = Field(default=None)
    path: str = Field(default="")
    query: Optional[str] = Field(default=None)
    fragment: Optional[str] = Field(default=None)

    @property
    def uri(self) -> str:
        parts = [f"{self.scheme}:"]
        if self.authority is not None:
            parts.append(f"//{self.authority}")
        parts.append(self.path)
        if self.query is not None:
            parts.append(f"?{self.query}")
        if self.fragment is not None:
            parts.append(f"#{self.fragment}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.uri
