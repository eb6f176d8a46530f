"""Tests for error types and helpers."""

from tablecmd.common.exceptions import (
    CatalogError,
    CommandValidationError,
    ErrorCode,
    FailureReason,
    TableCmdError,
    configuration_error,
    resource_not_found_error,
    validation_error,
)


class TestCommandValidationError:

    def test_carries_reason_and_command(self):
        error = CommandValidationError(
            "Table in LOAD DATA does not exist: '`t`'",
            reason=FailureReason.TARGET_NOT_FOUND,
            command="LOAD_DATA",
            details={"table": "t"},
        )

        assert isinstance(error, TableCmdError)
        assert str(error) == "[VALIDATION_005] Table in LOAD DATA does not exist: '`t`'"
        assert error.details == {"table": "t", "reason": "target-not-found", "command": "LOAD_DATA"}

    def test_to_dict(self):
        error = CommandValidationError("bad", reason=FailureReason.KIND_MISMATCH)

        payload = error.to_dict()

        assert payload["type"] == "CommandValidationError"
        assert payload["error_name"] == "COMMAND_VALIDATION_FAILED"
        assert payload["reason"] == "kind-mismatch"
        assert "command" not in payload["details"]


class TestHelpers:

    def test_configuration_error_with_cause(self):
        cause = KeyError("uid")

        error = configuration_error("no user", config_key="load_user_name", cause=cause)

        assert error.error_code == ErrorCode.CONFIG_ERROR
        assert error.details == {"config_key": "load_user_name"}
        assert "caused by: KeyError" in str(error)

    def test_validation_error(self):
        error = validation_error("bad value", field="command_type", value=3)

        assert error.error_code == ErrorCode.VALIDATION_ERROR
        assert error.details == {"field": "command_type", "value": "3"}

    def test_resource_not_found_error_is_a_catalog_error(self):
        error = resource_not_found_error(
            "Database 'x' not found",
            resource_type="database",
            resource_name="x",
            error_code=ErrorCode.DATABASE_NOT_FOUND,
        )

        assert isinstance(error, CatalogError)
        assert error.error_code == ErrorCode.DATABASE_NOT_FOUND
        assert error.details == {"resource_type": "database", "resource_name": "x"}

    def test_from_error_code(self):
        error = CatalogError.from_error_code(ErrorCode.CATALOG_ERROR, "metastore down")

        assert isinstance(error, CatalogError)
        assert error.to_dict()["error_code"] == "CATALOG_002"
