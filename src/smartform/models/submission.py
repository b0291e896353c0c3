"""
Response and analytics models.
"""

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class FileUpload(BaseModel):
    """A file picked for a file field, sent as a multipart part."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "FileUpload":
        path = Path(path)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )


# Field id -> entered value(s) for one fill session
ResponseData = dict[str, Any]


class SubmissionRecord(BaseModel):
    """A stored submission, as listed by the analytics endpoint."""

    id: str = Field(..., alias="_id")
    data: dict[str, Any] = Field(default_factory=dict)
    file_links: dict[str, str] | None = None
    created_at: datetime | None = None

    model_config = {"populate_by_name": True}


class AnalyticsSummary(BaseModel):
    """Answer of ``GET /api/forms/{slug}/analytics``."""

    count: int = Field(..., description="Total submissions")
    recent: list[SubmissionRecord] = Field(default_factory=list, description="Latest submissions")


class SubmitReceipt(BaseModel):
    """Answer of ``POST /api/forms/{slug}/submit``."""

    status: str = "ok"
    submission_id: str | None = None
