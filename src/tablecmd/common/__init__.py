"""Common exceptions for tablecmd.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions inherit from
    TableCmdError and include structured error information.

    CommandValidationError is the one failure kind produced while checking
    command preconditions; its ``reason`` is drawn from FailureReason.
    CatalogError is raised by the bundled in-memory catalog and is never
    wrapped by the executor.
"""

from tablecmd.common.exceptions import (
    CatalogError,
    CommandValidationError,
    ErrorCode,
    FailureReason,
    TableCmdError,
    # Helper functions
    configuration_error,
    resource_not_found_error,
    validation_error,
)

__all__ = [
    # Base Exception and Error Codes
    "TableCmdError",
    "ErrorCode",
    "FailureReason",
    "CommandValidationError",
    "CatalogError",
    # Helper functions
    "configuration_error",
    "validation_error",
    "resource_not_found_error",
]
