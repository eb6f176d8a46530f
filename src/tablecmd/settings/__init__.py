"""Settings module providing configuration management for tablecmd.

Built on Pydantic Settings: every value is type-checked on load and can be
supplied through environment variables or a ``.env`` file.

Configuration Sources (precedence order):
    1. Environment Variables (highest priority)
    2. ``.env`` file in the working directory
    3. Default Values in code (lowest priority)

Environment Variable Naming:
    - Prefix: ``TABLECMD_`` (``TABLECMD_FS_`` for filesystem settings)
    - Nested: Use double underscore ``__`` (e.g. ``TABLECMD_FILESYSTEM__DEFAULT_NAME``)

Quick Start:
    >>> from tablecmd.settings import get_settings
    >>> settings = get_settings()
    >>> settings.filesystem.default_name
    'hdfs://namenode:8020'
"""

from .main import _Settings, _reload_settings, get_settings
from .base import TableCmdBaseSettings
from .filesystem import FileSystemSettings

__all__ = [
    "get_settings",
    "TableCmdBaseSettings",
    "FileSystemSettings",
]
