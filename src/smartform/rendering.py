"""
Widget descriptors for filling a form.

Maps each field kind to the input that collects its value. Front ends
(the gradio app, an HTML template) build their inputs from these
descriptors instead of switching on field kinds themselves.
"""

from pydantic import BaseModel, Field

from smartform.models.field_definitions import FieldType, FormField
from smartform.models.form_schema import FormSchema

SIGNATURE_PLACEHOLDER = "Type your name as signature"
SELECT_PROMPT = "Select..."

INPUT_TYPES: dict[FieldType, str] = {
    FieldType.TEXT: "text",
    FieldType.TEXTAREA: "textarea",
    FieldType.EMAIL: "email",
    FieldType.PHONE: "tel",
    FieldType.NUMBER: "number",
    FieldType.DATE: "date",
    FieldType.FILE: "file",
    FieldType.DROPDOWN: "select",
    FieldType.CHECKBOX: "checkbox-group",
    FieldType.RADIO: "radio-group",
    FieldType.SIGNATURE: "text",
}


class RenderedInput(BaseModel):
    """Everything a front end needs to draw one field."""

    name: str = Field(..., description="Field id, used as the input name")
    kind: FieldType
    input_type: str = Field(..., description="HTML-style input type")
    label: str
    required: bool = False
    placeholder: str = ""
    helper_text: str | None = None
    rows: int | None = Field(default=None, description="Visible lines for multiline inputs")
    choices: list[tuple[str, str]] = Field(
        default_factory=list, description="(label, value) pairs for choice inputs"
    )
    prompt: str | None = Field(default=None, description="Empty first entry of a select")
    multiple: bool = Field(default=False, description="Whether several values can be chosen")


def render_field(field: FormField) -> RenderedInput:
    """Describe the input for one field."""
    placeholder = field.placeholder or ""
    if field.type is FieldType.SIGNATURE:
        placeholder = SIGNATURE_PLACEHOLDER

    return RenderedInput(
        name=field.id,
        kind=field.type,
        input_type=INPUT_TYPES[field.type],
        label=field.label,
        required=field.required,
        placeholder=placeholder,
        helper_text=field.helper_text,
        rows=4 if field.type is FieldType.TEXTAREA else None,
        choices=[(option.label, option.value) for option in field.options or []],
        prompt=SELECT_PROMPT if field.type is FieldType.DROPDOWN else None,
        multiple=field.type is FieldType.CHECKBOX,
    )


def render_form(form: FormSchema) -> list[RenderedInput]:
    """Describe every input of a form, in rendering order."""
    return [render_field(field) for field in form.fields]
