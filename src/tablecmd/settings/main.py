import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from tablecmd.constants import DATASOURCE_PROVIDER_PROPERTY

from .base import TableCmdBaseSettings
from .filesystem import FileSystemSettings

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class _Settings(TableCmdBaseSettings):

    model_config = SettingsConfigDict(env_prefix="TABLECMD_")

    filesystem: FileSystemSettings = Field(
        default_factory=FileSystemSettings,
        description="Default filesystem configuration for LOAD DATA path resolution"
    )
    load_user_name: Optional[str] = Field(
        default=None,
        description=(
            "User name used to place relative non-local LOAD DATA paths under "
            "/user/<name>. When unset, the name of the user running the process is used."
        )
    )
    datasource_provider_property: str = Field(
        default=DATASOURCE_PROVIDER_PROPERTY,
        min_length=1,
        description="Table property whose presence marks a datasource-backed table"
    )
    log_level: str = Field(
        default="INFO",
        description="Default level used by setup_logging() when no level is passed"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Expected one of: {', '.join(sorted(_LOG_LEVELS))}"
            )
        return level

    @field_validator("load_user_name")
    @classmethod
    def validate_load_user_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if "/" in v:
            raise ValueError("load_user_name cannot contain '/'")
        return v or None


# Singleton instance
_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the singleton settings instance for the application.

    Settings are loaded from environment variables and the ``.env`` file on
    first access and reused afterwards.

    Args:
        force_reload: If True, creates a new Settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        Settings: The singleton Settings instance

    Example:
        ```python
        settings = get_settings()
        settings2 = get_settings()
        assert settings is settings2

        new_settings = get_settings(force_reload=True)
        assert new_settings is not settings
        ```
    """
    global _settings
    if _settings is None or force_reload:
        _settings = _Settings()
        logging.getLogger(__name__).debug(
            "Loaded settings",
            extra={"default_fs": _settings.filesystem.default_name},
        )
    return _settings


def _reload_settings() -> _Settings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.

    Returns:
        A fresh _Settings instance
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
