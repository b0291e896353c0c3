"""
Data models for SmartForm.

This module contains Pydantic models for:
- Field kinds and field definitions
- Form schemas and the API's form shapes
- Responses, submissions and analytics
- Validation results
"""

from smartform.models.field_definitions import (
    CHOICE_TYPES,
    FIELD_TYPE_LABELS,
    FieldOption,
    FieldType,
    FormField,
    PersistedField,
    ValueShape,
    default_options,
    is_choice_type,
    value_shape,
)
from smartform.models.form_schema import (
    FormSchema,
    FormSummary,
    PersistedForm,
    SaveFormResult,
)
from smartform.models.submission import (
    AnalyticsSummary,
    FileUpload,
    ResponseData,
    SubmissionRecord,
    SubmitReceipt,
)
from smartform.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Field kinds
    "CHOICE_TYPES",
    "FIELD_TYPE_LABELS",
    "FieldOption",
    "FieldType",
    "FormField",
    "PersistedField",
    "ValueShape",
    "default_options",
    "is_choice_type",
    "value_shape",
    # Forms
    "FormSchema",
    "FormSummary",
    "PersistedForm",
    "SaveFormResult",
    # Responses
    "AnalyticsSummary",
    "FileUpload",
    "ResponseData",
    "SubmissionRecord",
    "SubmitReceipt",
    # Validation
    "FieldValidationError",
    "ValidationResult",
]
