"""
Field definition models for form schemas.

This module is the closed catalogue of field kinds a form can hold,
what each kind's response value looks like, and the pydantic models
for a single field and its options.
"""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field, model_validator


class FieldType(str, Enum):
    """Every kind of input a form field can render as."""

    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    PHONE = "phone"
    NUMBER = "number"
    DATE = "date"
    FILE = "file"
    DROPDOWN = "dropdown"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SIGNATURE = "signature"


class ValueShape(str, Enum):
    """Shape of the value a field contributes to a response."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    BINARY = "binary"


# Palette labels shown by the builder, in palette order
FIELD_TYPE_LABELS: dict[FieldType, str] = {
    FieldType.TEXT: "Single line text",
    FieldType.TEXTAREA: "Multiline text",
    FieldType.EMAIL: "Email",
    FieldType.PHONE: "Phone",
    FieldType.NUMBER: "Number",
    FieldType.DATE: "Date",
    FieldType.FILE: "File upload",
    FieldType.DROPDOWN: "Dropdown",
    FieldType.CHECKBOX: "Checkboxes",
    FieldType.RADIO: "Radio buttons",
    FieldType.SIGNATURE: "Signature",
}

CHOICE_TYPES: frozenset[FieldType] = frozenset(
    {FieldType.DROPDOWN, FieldType.CHECKBOX, FieldType.RADIO}
)


def is_choice_type(kind: FieldType | str) -> bool:
    """Whether fields of this kind carry an options list."""
    return FieldType(kind) in CHOICE_TYPES


def value_shape(kind: FieldType | str) -> ValueShape:
    """Shape of the response value produced by a field of this kind."""
    kind = FieldType(kind)
    if kind is FieldType.CHECKBOX:
        return ValueShape.SEQUENCE
    if kind is FieldType.FILE:
        return ValueShape.BINARY
    return ValueShape.SCALAR


class FieldOption(BaseModel):
    """One selectable choice of a dropdown, checkbox or radio field."""

    label: str = Field(..., description="Text shown to the person filling the form")
    value: str = Field(..., description="Value stored in the response")


def default_options() -> list[FieldOption]:
    """The two placeholder options every new choice field starts with."""
    return [
        FieldOption(label="Option 1", value="option1"),
        FieldOption(label="Option 2", value="option2"),
    ]


class FormField(BaseModel):
    """
    A single field of a form schema.

    ``options`` is present only for choice kinds and is never empty there
    (see ``PersistedField`` for forms read back from the API).
    ``id`` is stable across edits and reorders.
    """

    id: str = Field(..., description="Identifier, unique within a form")
    type: FieldType = Field(..., description="Kind of input")
    label: str = Field(..., description="Human-readable label")
    required: bool = Field(default=False, description="Whether a value must be provided")
    placeholder: str | None = Field(default=None, description="Placeholder text")
    options: list[FieldOption] | None = Field(
        default=None, description="Choices, only for dropdown/checkbox/radio"
    )
    helper_text: str | None = Field(
        default=None, alias="helperText", description="Help text under the input"
    )

    model_config = {"populate_by_name": True}

    allow_empty_options: ClassVar[bool] = False

    @model_validator(mode="after")
    def check_options(self) -> "FormField":
        if self.type in CHOICE_TYPES:
            if self.options is None:
                self.options = []
            if not self.options and not self.allow_empty_options:
                raise ValueError(f"{self.type.value} field '{self.id}' needs at least one option")
        else:
            # Stray options on non-choice kinds are meaningless
            self.options = None
        return self

    @property
    def is_choice(self) -> bool:
        return self.type in CHOICE_TYPES

    @property
    def value_shape(self) -> ValueShape:
        return value_shape(self.type)

    def option_values(self) -> list[str]:
        """Values of this field's options, in order."""
        return [option.value for option in self.options or []]


class PersistedField(FormField):
    """
    A field as served back by the form API.

    Saved forms are read-only copies and may hold a choice field whose
    options were all deleted before saving; such a field renders with
    no choices instead of failing to load.
    """

    allow_empty_options: ClassVar[bool] = True
