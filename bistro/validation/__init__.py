"""Reservation form validation."""

from bistro.validation.rules import (
    VALIDATED_FIELDS,
    ValidationErrors,
    validate,
    validate_field,
)

__all__ = ["VALIDATED_FIELDS", "ValidationErrors", "validate", "validate_field"]
