"""Protocol definitions for tablecmd.

Protocols provide type-safe interfaces without requiring inheritance,
following Python's structural subtyping (duck typing with type hints).
"""

from .catalog import CatalogGateway

__all__ = [
    "CatalogGateway",
]
