"""Default filesystem configuration.

Non-local LOAD DATA paths that lack a scheme or an authority borrow them
from the default filesystem URI configured here, mirroring the
``fs.default.name`` setting of a warehouse deployment.
"""

from typing import Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import SettingsConfigDict

from .base import TableCmdBaseSettings


class FileSystemSettings(TableCmdBaseSettings):
    """Default filesystem settings.

    Environment variables:
        TABLECMD_FS_DEFAULT_NAME: Default filesystem URI (e.g. ``hdfs://namenode:8020``)
        FS_DEFAULT_NAME: Accepted as a fallback name for the same value
    """

    model_config = SettingsConfigDict(env_prefix="TABLECMD_FS_")

    default_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("TABLECMD_FS_DEFAULT_NAME", "FS_DEFAULT_NAME", "default_name"),
        description="Default filesystem URI used to complete non-local load paths",
    )

    @field_validator("default_name")
    @classmethod
    def validate_default_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        if any(ch.isspace() for ch in v):
            raise ValueError(f"Invalid default filesystem URI: '{v}'")
        return v
