"""Path resolution for LOAD DATA."""

from tablecmd.paths.resolver import (
    current_user_name,
    resolve_load_path,
    resolve_local_path,
    resolve_remote_path,
)

__all__ = [
    "resolve_load_path",
    "resolve_local_path",
    "resolve_remote_path",
    "current_user_name",
]
