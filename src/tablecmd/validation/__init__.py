"""Precondition validation for table commands."""

from tablecmd.validation.preconditions import (
    CatalogSnapshot,
    Check,
    ValidationFailure,
    checks_for,
    first_failure,
    partition_spec_failure,
    validate_command,
)

__all__ = [
    "CatalogSnapshot",
    "Check",
    "ValidationFailure",
    "checks_for",
    "first_failure",
    "partition_spec_failure",
    "validate_command",
]
