from pydantic_settings import BaseSettings, SettingsConfigDict


class TableCmdBaseSettings(BaseSettings):
    """Base class for every tablecmd settings model.

    Values come from environment variables (highest priority), then a
    local ``.env`` file, then the defaults declared on each field.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
        populate_by_name=True,
    )
