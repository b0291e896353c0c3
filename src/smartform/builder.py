"""
Form builder.

Edits an in-progress form schema: add, duplicate, delete and reorder
fields, change their settings and options, then save the schema to the
form API to get a share link.

Usage:
    builder = FormBuilder(title="Event signup")
    email = builder.add_field("email")
    builder.update_field(email.id, label="Your email", required=True)
    result = await builder.save(client)
    print(result.share_url)
"""

import logging
import uuid

from smartform.api_client import SmartFormClient
from smartform.config import get_config
from smartform.exceptions import BuilderError, FieldNotFoundError, SmartFormError
from smartform.models.field_definitions import (
    FieldOption,
    FieldType,
    FormField,
    default_options,
    is_choice_type,
)
from smartform.models.form_schema import FormSchema, SaveFormResult

logger = logging.getLogger("smartform-builder")

_UNCHANGED = object()


def new_id() -> str:
    """Collision-resistant identifier for fields and options."""
    return uuid.uuid4().hex


def clone_field(field: FormField) -> FormField:
    """Structural copy of a field, including its option list."""
    return field.model_copy(deep=True)


class FormBuilder:
    """
    In-progress form schema owned by one editing session.

    Fields are addressed by id; ids never change across edits and moves.
    """

    def __init__(self, title: str | None = None, description: str = ""):
        self.title = title if title is not None else get_config().default_form_title
        self.description = description
        self.fields: list[FormField] = []
        self.message = ""
        self.last_result: SaveFormResult | None = None

    @classmethod
    def from_schema(cls, schema: FormSchema) -> "FormBuilder":
        """Start editing a copy of an existing schema."""
        builder = cls(title=schema.title, description=schema.description)
        builder.fields = [clone_field(field) for field in schema.fields]
        return builder

    # Field list operations

    def _index_of(self, field_id: str) -> int:
        for index, field in enumerate(self.fields):
            if field.id == field_id:
                return index
        raise FieldNotFoundError(field_id)

    def get_field(self, field_id: str) -> FormField:
        return self.fields[self._index_of(field_id)]

    def add_field(self, kind: FieldType | str) -> FormField:
        """Append a field of the given kind with its default settings."""
        kind = FieldType(kind)
        field = FormField(
            id=new_id(),
            type=kind,
            label=f"{kind.value} field",
            required=False,
            options=default_options() if is_choice_type(kind) else None,
        )
        self.fields.append(field)
        return field

    def duplicate_field(self, field_id: str) -> FormField:
        """Append a copy of a field with a new id and a "(copy)" label."""
        source = self.get_field(field_id)
        copy = clone_field(source)
        copy.id = new_id()
        copy.label = f"{source.label} (copy)"
        self.fields.append(copy)
        return copy

    def delete_field(self, field_id: str) -> None:
        del self.fields[self._index_of(field_id)]

    def move_field(self, index: int, direction: int) -> None:
        """
        Swap the field at ``index`` with its neighbour.

        Args:
            index: Position of the field to move.
            direction: -1 to move up, +1 to move down.

        Moving past either end of the list does nothing.
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction}")
        if not 0 <= index < len(self.fields):
            raise IndexError(f"No field at index {index}")
        target = index + direction
        if target < 0 or target >= len(self.fields):
            return
        self.fields[index], self.fields[target] = self.fields[target], self.fields[index]

    # Field settings

    def update_field(
        self,
        field_id: str,
        label=_UNCHANGED,
        placeholder=_UNCHANGED,
        required=_UNCHANGED,
        helper_text=_UNCHANGED,
    ) -> FormField:
        """Change the settings of one field in place."""
        field = self.get_field(field_id)
        if label is not _UNCHANGED:
            field.label = label
        if placeholder is not _UNCHANGED:
            field.placeholder = placeholder
        if required is not _UNCHANGED:
            field.required = bool(required)
        if helper_text is not _UNCHANGED:
            field.helper_text = helper_text
        return field

    def _choice_field(self, field_id: str) -> FormField:
        field = self.get_field(field_id)
        if not field.is_choice:
            raise BuilderError(f"{field.type.value} field '{field_id}' has no options")
        return field

    def add_option(self, field_id: str, label: str = "New option") -> FieldOption:
        field = self._choice_field(field_id)
        option = FieldOption(label=label, value=f"opt-{new_id()}")
        field.options.append(option)
        return option

    def set_option_label(self, field_id: str, index: int, label: str) -> None:
        field = self._choice_field(field_id)
        field.options[index].label = label

    def remove_option(self, field_id: str, index: int) -> None:
        field = self._choice_field(field_id)
        if len(field.options) <= 1:
            raise BuilderError(f"Field '{field_id}' must keep at least one option")
        del field.options[index]

    # Output

    def to_schema(self) -> FormSchema:
        """Independent snapshot of the form being edited."""
        return FormSchema(
            title=self.title,
            description=self.description,
            fields=[clone_field(field) for field in self.fields],
        )

    async def save(self, client: SmartFormClient) -> SaveFormResult:
        """
        Send the full schema to the form API.

        Returns:
            SaveFormResult with the share URL and slug.

        Raises:
            SmartFormError: The API rejected the schema or could not be
                reached. ``message`` carries the server's text. No retry.
        """
        schema = self.to_schema()
        self.message = ""
        try:
            result = await client.create_form(schema)
        except SmartFormError as e:
            self.message = f"Error: {e.message}"
            raise
        logger.info(f"Saved form '{schema.title}' as {result.share_slug}")
        self.last_result = result
        self.message = f"Form saved! Share URL: {result.share_url}"
        return result
