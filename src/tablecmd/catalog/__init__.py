"""Catalog gateway implementations shipped with tablecmd."""

from tablecmd.catalog.memory import DEFAULT_DATABASE, InMemoryCatalog, filter_pattern

__all__ = [
    "InMemoryCatalog",
    "DEFAULT_DATABASE",
    "filter_pattern",
]
