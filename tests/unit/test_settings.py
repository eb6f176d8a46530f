"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from tablecmd.settings import FileSystemSettings, _reload_settings, get_settings
from tablecmd.settings.main import _Settings


class TestFileSystemSettings:

    def test_prefixed_environment_variable(self, clean_settings):
        clean_settings.setenv("TABLECMD_FS_DEFAULT_NAME", "hdfs://namenode:8020")

        fs = FileSystemSettings()

        assert fs.default_name == "hdfs://namenode:8020"

    def test_fallback_environment_variable(self, clean_settings):
        clean_settings.setenv("FS_DEFAULT_NAME", "s3a://warehouse")

        assert FileSystemSettings().default_name == "s3a://warehouse"

    def test_unset_by_default(self, clean_settings):
        assert FileSystemSettings().default_name is None

    def test_blank_value_means_unset(self):
        assert FileSystemSettings(default_name="   ").default_name is None

    def test_whitespace_inside_uri_is_rejected(self):
        with pytest.raises(ValidationError):
            FileSystemSettings(default_name="hdfs://name node")


class TestSettings:

    def test_defaults(self, clean_settings):
        settings = _Settings()

        assert settings.load_user_name is None
        assert settings.datasource_provider_property == "spark.sql.sources.provider"
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, clean_settings):
        clean_settings.setenv("TABLECMD_LOAD_USER_NAME", "etl")
        clean_settings.setenv("TABLECMD_LOG_LEVEL", "debug")

        settings = _Settings()

        assert settings.load_user_name == "etl"
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Invalid log level"):
            _Settings(log_level="LOUD")

    def test_user_name_cannot_contain_slash(self):
        with pytest.raises(ValidationError):
            _Settings(load_user_name="a/b")

    def test_singleton_and_reload(self, clean_settings):
        first = get_settings()

        assert get_settings() is first

        clean_settings.setenv("TABLECMD_FS_DEFAULT_NAME", "hdfs://other:9000")
        reloaded = _reload_settings()

        assert reloaded is not first
        assert get_settings() is reloaded
        assert reloaded.filesystem.default_name == "hdfs://other:9000"
