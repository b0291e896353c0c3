"""
Form fill session.

Holds one person's answers to a persisted form, validates them and
posts them to the form API. Submission only happens when validation
passes.
"""

import logging
from dataclasses import dataclass, field as dataclass_field
from typing import Any

from smartform.api_client import SmartFormClient
from smartform.exceptions import FieldNotFoundError, SmartFormError
from smartform.models.field_definitions import FieldType, FormField
from smartform.models.form_schema import PersistedForm
from smartform.models.submission import FileUpload, ResponseData, SubmitReceipt
from smartform.models.validation_result import ValidationResult
from smartform.rendering import RenderedInput, render_form
from smartform.validation import validate_response

logger = logging.getLogger("smartform-fill")

SUCCESS_MESSAGE = "Thanks! Your response has been recorded."


@dataclass
class SubmitOutcome:
    """What happened when the fill session tried to submit."""

    submitted: bool
    errors: dict[str, str] = dataclass_field(default_factory=dict)
    receipt: SubmitReceipt | None = None
    message: str = ""


class FormFillSession:
    """
    Answers to one form, keyed by field id.

    Usage:
        session = await FormFillSession.open(client, "event-signup-1700000000")
        session.set_value(email_id, "me@example.com")
        session.toggle_choice(topics_id, "option1")
        outcome = await session.submit(client)
    """

    def __init__(self, form: PersistedForm):
        self.form = form
        self.data: ResponseData = {}
        self.errors: dict[str, str] = {}
        self.message = ""

    @classmethod
    async def open(cls, client: SmartFormClient, slug: str) -> "FormFillSession":
        """Fetch a form by share slug and start a session for it."""
        return cls(await client.get_form(slug))

    def render(self) -> list[RenderedInput]:
        return render_form(self.form)

    def _field(self, field_id: str, *kinds: FieldType) -> FormField:
        field = self.form.get_field(field_id)
        if field is None:
            raise FieldNotFoundError(field_id)
        if kinds and field.type not in kinds:
            raise ValueError(f"Field '{field_id}' is a {field.type.value} field")
        return field

    def set_value(self, field_id: str, value: Any) -> None:
        """Store the entered value for a field, replacing any prior value."""
        field = self._field(field_id)
        if field.type is FieldType.CHECKBOX and value is not None:
            value = list(value) if isinstance(value, (list, tuple)) else [value]
        self.data[field_id] = value

    def toggle_choice(self, field_id: str, value: str, checked: bool | None = None) -> list[str]:
        """
        Add or remove one choice of a checkbox field.

        Args:
            field_id: The checkbox field.
            value: Option value being toggled.
            checked: True to select, False to unselect, None to flip.

        Returns:
            The accumulated selection, in the order choices were made.
        """
        self._field(field_id, FieldType.CHECKBOX)
        selection = list(self.data.get(field_id) or [])
        if checked is None:
            checked = value not in selection
        if checked:
            if value not in selection:
                selection.append(value)
        else:
            selection = [item for item in selection if item != value]
        self.data[field_id] = selection
        return selection

    def select_choice(self, field_id: str, value: str | None) -> None:
        """Choose the single value of a radio or dropdown field."""
        field = self._field(field_id, FieldType.RADIO, FieldType.DROPDOWN)
        if value in (None, ""):
            self.data.pop(field_id, None)
            return
        if value not in field.option_values():
            raise ValueError(f"'{value}' is not an option of field '{field_id}'")
        self.data[field_id] = value

    def attach_file(self, field_id: str, upload: FileUpload | None) -> None:
        self._field(field_id, FieldType.FILE)
        if upload is None:
            self.data.pop(field_id, None)
        else:
            self.data[field_id] = upload

    def validate(self) -> ValidationResult:
        result = validate_response(self.form, self.data)
        self.errors = result.to_error_dict()
        return result

    async def submit(self, client: SmartFormClient) -> SubmitOutcome:
        """
        Validate and, only if valid, post the response.

        Network and server failures are caught here and reported through
        ``message``; the answers are kept so the person can retry. After a
        successful submission the answers are cleared.
        """
        result = self.validate()
        if not result.is_valid:
            self.message = ""
            logger.info(f"Submission to {self.form.share_slug} blocked by {result.error_count} error(s)")
            return SubmitOutcome(submitted=False, errors=self.errors)

        try:
            receipt = await client.submit_response(
                self.form.share_slug,
                self.data,
                multipart=self.form.has_file_field,
            )
        except SmartFormError as e:
            self.message = f"Error: {e.message}"
            return SubmitOutcome(submitted=False, message=self.message)

        self.message = SUCCESS_MESSAGE
        self.data = {}
        return SubmitOutcome(submitted=True, receipt=receipt, message=self.message)
