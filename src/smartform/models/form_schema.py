"""
Form schema models.

``FormSchema`` is what the builder edits and posts. The other models are
the read-only shapes the form API answers with.
"""

from datetime import datetime
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator

from smartform.models.field_definitions import FieldType, FormField, PersistedField


class FormSchema(BaseModel):
    """Title, description and ordered field list of one form."""

    title: str = Field(..., description="Form title")
    description: str = Field(default="", description="Form description")
    fields: list[FormField] = Field(default_factory=list, description="Fields in rendering order")

    @field_validator("description", mode="before")
    @classmethod
    def none_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def unique_ids(self) -> "FormSchema":
        seen: set[str] = set()
        for field in self.fields:
            if field.id in seen:
                raise ValueError(f"Duplicate field id: {field.id}")
            seen.add(field.id)
        return self

    def get_field(self, field_id: str) -> FormField | None:
        """Look up a field by id."""
        for field in self.fields:
            if field.id == field_id:
                return field
        return None

    @property
    def has_file_field(self) -> bool:
        return any(field.type is FieldType.FILE for field in self.fields)

    def to_payload(self) -> dict[str, Any]:
        """Body for ``POST /api/forms``."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PersistedForm(FormSchema):
    """A saved form as served by ``GET /api/forms/by-slug/{slug}``."""

    fields: list[PersistedField] = Field(default_factory=list, description="Fields in rendering order")
    share_slug: str = Field(..., description="Public identifier of the form")
    id: str | None = Field(default=None, alias="_id")
    sheet_name: str | None = None
    owner_uid: str | None = None
    created_at: datetime | None = None

    model_config = {"populate_by_name": True}


class FormSummary(BaseModel):
    """One entry of ``GET /api/forms``."""

    id: str = Field(..., alias="_id")
    title: str
    description: str | None = None
    share_slug: str
    sheet_name: str | None = None
    created_at: datetime | None = None

    model_config = {"populate_by_name": True}


class SaveFormResult(BaseModel):
    """Answer of ``POST /api/forms``."""

    share_url: str
    share_slug: str | None = None
    form_id: str | None = None
    sheet_name: str | None = None

    @model_validator(mode="after")
    def derive_slug(self) -> "SaveFormResult":
        if not self.share_slug:
            path = urlparse(self.share_url).path.rstrip("/")
            self.share_slug = path.rsplit("/", 1)[-1] or None
        return self
