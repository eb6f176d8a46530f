from tablecmd.api.commands import execute

__all__ = [
    "execute",
]
