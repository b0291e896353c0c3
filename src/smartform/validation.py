"""
Client-side validation of form responses.

Runs synchronously over a schema and the collected response and
produces one error per failing field:

- required checkbox fields need a non-empty selection;
- other required fields need a present value;
- email fields with a value must look like ``local@domain.tld``
  (a shape check, not RFC 5322).
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from smartform.models.field_definitions import FieldType, FormField
from smartform.models.form_schema import FormSchema
from smartform.models.validation_result import FieldValidationError, ValidationResult

EMAIL_PATTERN = re.compile(r"[^@]+@[^.]+\..+")

REQUIRED_MESSAGE = "Required"
INVALID_EMAIL_MESSAGE = "Invalid email"


def is_valid_email(value: str) -> bool:
    """Basic email-shape check."""
    return EMAIL_PATTERN.search(value) is not None


def is_blank(value: Any) -> bool:
    """
    Whether a response value counts as "nothing entered".

    ``None``, empty strings and empty sequences are blank. Numbers,
    including zero, and file uploads are not.
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes)):
        return len(value) == 0
    if isinstance(value, Sequence):
        return len(value) == 0
    return False


def _selection(value: Any) -> list[Any]:
    if is_blank(value):
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def validate_field(field: FormField, value: Any) -> FieldValidationError | None:
    """Check one field's value, returning its error if any."""
    if field.required:
        if field.type is FieldType.CHECKBOX:
            missing = not _selection(value)
        else:
            missing = is_blank(value)
        if missing:
            return FieldValidationError(
                field_id=field.id,
                error_type="required",
                message=REQUIRED_MESSAGE,
                received=value,
            )

    if field.type is FieldType.EMAIL and not is_blank(value):
        if not isinstance(value, str) or not is_valid_email(value):
            return FieldValidationError(
                field_id=field.id,
                error_type="format",
                message=INVALID_EMAIL_MESSAGE,
                received=value,
            )

    return None


def validate_response(schema: FormSchema, response: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a response against a form schema.

    Args:
        schema: The form being filled.
        response: Field id to entered value.

    Returns:
        ValidationResult whose ``to_error_dict()`` maps each failing field
        id to one message. The response may be submitted only when it is
        valid.

    Example:
        >>> result = validate_response(schema, {"f1": "x@y"})
        >>> result.to_error_dict()
        {'f1': 'Invalid email'}
    """
    errors: list[FieldValidationError] = []
    for field in schema.fields:
        error = validate_field(field, response.get(field.id))
        if error is not None:
            errors.append(error)
    return ValidationResult(errors=errors)
