"""Utility helpers for tablecmd."""

from tablecmd.utils.decorators import traced

__all__ = [
    "traced",
]
