from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for tablecmd operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has a specific prefix for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors
        VALIDATION_*: Command precondition and input validation errors
        RESOURCE_*: Catalog object availability errors
        CATALOG_*: Errors raised by a catalog implementation
        OPERATION_*: High-level command errors
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_003"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_ARGUMENT = "VALIDATION_002"
    COMMAND_VALIDATION_FAILED = "VALIDATION_005"

    # Resource errors
    RESOURCE_NOT_FOUND = "RESOURCE_001"
    TABLE_NOT_FOUND = "RESOURCE_002"
    FILE_NOT_FOUND = "RESOURCE_003"
    DATABASE_NOT_FOUND = "RESOURCE_005"

    # Catalog errors
    TABLE_ALREADY_EXISTS = "CATALOG_001"
    CATALOG_ERROR = "CATALOG_002"

    # Operation errors
    OPERATION_ERROR = "OPERATION_001"
    TABLE_OPERATION_ERROR = "OPERATION_004"


class FailureReason(str, Enum):
    """Closed set of causes for a command validation failure."""

    SOURCE_NOT_FOUND = "source-not-found"
    SOURCE_IS_TEMPORARY = "source-is-temporary"
    TARGET_NOT_FOUND = "target-not-found"
    TARGET_IS_TEMPORARY = "target-is-temporary"
    KIND_MISMATCH = "kind-mismatch"
    UNSUPPORTED_TABLE_KIND_FOR_LOAD = "unsupported-table-kind-for-load"
    PARTITION_SPEC_INCOMPLETE = "partition-spec-incomplete"
    PARTITION_SPEC_UNEXPECTED = "partition-spec-unexpected"
    UNKNOWN_PARTITION_COLUMN = "unknown-partition-column"
    PATH_MISSING_SCHEME = "path-missing-scheme"
    LOCAL_PATH_NOT_FOUND = "local-path-not-found"


class TableCmdError(Exception):
    """Base exception for all tablecmd-related errors.

    This exception class uses error codes for categorization
    instead of creating numerous specific exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.OPERATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize tablecmd error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from tablecmd.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={"error_code": error_code.value, "details": self.details},
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "TableCmdError":
        """Create exception from error code.

        Args:
            error_code: Error code
            message: Error message
            **kwargs: Additional arguments for TableCmdError

        Returns:
            TableCmdError instance
        """
        return cls(message=message, error_code=error_code, **kwargs)


class CommandValidationError(TableCmdError):
    """A command precondition was violated before any catalog mutation.

    This is the single failure kind produced by the validation layer and
    by load path resolution. The cause is one of ``FailureReason``.

    Attributes:
        reason: Which precondition failed
        command: Name of the command type that was rejected, if known
    """

    def __init__(
        self,
        message: str,
        reason: FailureReason,
        command: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        details["reason"] = reason.value
        if command:
            details["command"] = command
        self.reason = reason
        self.command = command
        super().__init__(
            message=message,
            error_code=ErrorCode.COMMAND_VALIDATION_FAILED,
            details=details,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["reason"] = self.reason.value
        return payload


class CatalogError(TableCmdError):
    """Raised by catalog implementations shipped with tablecmd.

    The executor never raises or wraps this type; it propagates from the
    catalog call that failed.
    """


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> TableCmdError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        TableCmdError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return TableCmdError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> TableCmdError:
    """Create a validation error.

    Args:
        message: Error message
        field: Field that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        TableCmdError with VALIDATION_ERROR code
    """
    details = kwargs.get('details', {})
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)

    return TableCmdError(
        message=message,
        error_code=ErrorCode.VALIDATION_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def resource_not_found_error(
    message: str,
    resource_type: Optional[str] = None,
    resource_name: Optional[str] = None,
    **kwargs
) -> CatalogError:
    """Create a catalog resource-not-found error.

    Args:
        message: Error message
        resource_type: Type of resource (table, database)
        resource_name: Name of the missing resource
        **kwargs: Additional error details

    Returns:
        CatalogError with a RESOURCE_* code
    """
    details = kwargs.get('details', {})
    if resource_type:
        details["resource_type"] = resource_type
    if resource_name:
        details["resource_name"] = resource_name

    error_code = kwargs.pop('error_code', ErrorCode.RESOURCE_NOT_FOUND)
    return CatalogError(
        message=message,
        error_code=error_code,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
