"""
Validation result models for form responses.

These models represent the output of client-side validation.
"""

from typing import Any

from pydantic import BaseModel, Field


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_id: str = Field(..., description="Id of the field with error")
    error_type: str = Field(..., description="Type of validation error: required, format")
    message: str = Field(..., description="Human-readable error message")
    received: Any | None = Field(default=None, description="Received value")


class ValidationResult(BaseModel):
    """Result of response validation."""

    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )

    @property
    def is_valid(self) -> bool:
        """Whether the response may be submitted."""
        return not self.errors

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_errors(self, field_id: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.field_id == field_id]

    def to_error_dict(self) -> dict[str, str]:
        """Map each failing field id to its single error message."""
        result: dict[str, str] = {}
        for error in self.errors:
            result.setdefault(error.field_id, error.message)
        return result
