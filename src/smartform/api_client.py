"""
HTTP client for the form API.

The form API is an external service; this module is the only place
that talks to it. Credentials are passed in explicitly rather than read
from ambient storage, so the same client can serve several sessions.

Usage:
    from smartform.api_client import Credentials, SmartFormClient

    client = SmartFormClient(
        base_url="https://forms.example.com",
        credentials=Credentials(id_token="..."),
    )
    forms = await client.list_forms()
"""

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from smartform.config import get_config
from smartform.exceptions import ApiError, NetworkError
from smartform.models.form_schema import FormSchema, FormSummary, PersistedForm, SaveFormResult
from smartform.models.submission import AnalyticsSummary, FileUpload, ResponseData, SubmitReceipt

logger = logging.getLogger("smartform-client")

_UNSET: Any = object()


@dataclass
class Credentials:
    """Bearer token used for the owner-only API routes."""

    id_token: str = ""

    @classmethod
    def from_config(cls) -> "Credentials":
        return cls(id_token=get_config().id_token)

    def authorization_header(self) -> dict[str, str]:
        # An empty token is sent as-is, the server decides
        return {"Authorization": f"Bearer {self.id_token}"}

    def clear(self) -> None:
        self.id_token = ""


def _error_message(response: httpx.Response) -> str:
    """Server-provided error text, preferring a JSON ``detail``."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return response.text or response.reason_phrase


def _parse(response: httpx.Response, model: type[BaseModel], key: str | None = None) -> Any:
    """
    Read a 2xx JSON answer into ``model``.

    With ``key`` the body is an object holding a list of items under that
    key. Bodies that are not JSON or do not fit the model raise
    ``ApiError`` like any other failed call.
    """
    try:
        body = response.json()
        if key is None:
            return model.model_validate(body)
        if not isinstance(body, dict):
            raise ValueError(f"expected an object with \"{key}\"")
        return [model.model_validate(item) for item in body.get(key) or []]
    except (ValueError, ValidationError) as e:
        path = response.request.url.path
        logger.warning(f"Unreadable answer from {path}: {e}")
        raise ApiError(response.status_code, "Unexpected response from server") from e


def build_multipart(data: ResponseData) -> tuple[dict[str, Any], dict[str, tuple[str, bytes, str]]]:
    """
    Split a response into multipart form values and file parts.

    Checkbox selections become repeated values under the same key and
    empty values are left out.
    """
    values: dict[str, Any] = {}
    files: dict[str, tuple[str, bytes, str]] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, FileUpload):
            files[key] = (value.filename, value.content, value.content_type)
        elif isinstance(value, (list, tuple)):
            values[key] = [str(item) for item in value]
        else:
            values[key] = str(value)
    return values, files


class SmartFormClient:
    """
    Async client for the form API.

    Every call is a single request: no retry, no cancellation. Non-2xx
    answers raise ``ApiError`` with the server's message, transport
    failures raise ``NetworkError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        credentials: Credentials | None = None,
        timeout: float | None = _UNSET,
        public_base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            base_url: Root URL of the form API. If None, uses config.backend_url.
            credentials: Bearer token holder. If None, built from config.
            timeout: Seconds per request, None for no timeout. Defaults to
                config.request_timeout.
            public_base_url: Root URL of the public fill pages.
            transport: Optional httpx transport (used by tests).
        """
        config = get_config()
        self.base_url = (base_url or config.backend_url).rstrip("/")
        self.credentials = credentials if credentials is not None else Credentials.from_config()
        self.timeout = config.request_timeout if timeout is _UNSET else timeout
        self.public_base_url = (public_base_url or config.public_base_url).rstrip("/")
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        auth: bool = False,
        **kwargs: Any,
    ) -> httpx.Response:
        headers: dict[str, str] = dict(kwargs.pop("headers", None) or {})
        if auth:
            headers.update(self.credentials.authorization_header())

        logger.info(f"{method} {self.base_url}{path}")
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.error(f"Transport error on {method} {path}: {type(e).__name__}: {e}")
            raise NetworkError(str(e) or type(e).__name__) from e

        if not response.is_success:
            message = _error_message(response)
            logger.warning(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message)
        return response

    async def create_form(self, schema: FormSchema) -> SaveFormResult:
        """Persist a schema and get its share URL."""
        response = await self._request("POST", "/api/forms", auth=True, json=schema.to_payload())
        return _parse(response, SaveFormResult)

    async def list_forms(self) -> list[FormSummary]:
        """List the saved forms of the authenticated owner."""
        response = await self._request("GET", "/api/forms", auth=True)
        return _parse(response, FormSummary, key="forms")

    async def get_form(self, slug: str) -> PersistedForm:
        """Fetch a persisted form by its share slug (public route)."""
        response = await self._request("GET", f"/api/forms/by-slug/{quote(slug, safe='')}")
        return _parse(response, PersistedForm)

    async def submit_response(
        self,
        slug: str,
        data: ResponseData,
        multipart: bool = False,
    ) -> SubmitReceipt:
        """
        Post one response to a form (public route).

        Args:
            slug: Share slug of the form.
            data: Field id to value.
            multipart: Send as form data instead of JSON ``{"data": ...}``.
                Required when the form has a file field.
        """
        path = f"/api/forms/{quote(slug, safe='')}/submit"
        if multipart:
            values, files = build_multipart(data)
            response = await self._request("POST", path, data=values, files=files or None)
        else:
            response = await self._request("POST", path, json={"data": data})
        try:
            body = response.json()
        except ValueError:
            body = {}
        return SubmitReceipt.model_validate(body if isinstance(body, dict) else {})

    async def get_analytics(self, slug: str) -> AnalyticsSummary:
        """Submission count and latest entries of a form."""
        response = await self._request("GET", f"/api/forms/{quote(slug, safe='')}/analytics", auth=True)
        return _parse(response, AnalyticsSummary)

    async def export_csv(self, slug: str) -> str:
        """All submissions of a form as CSV text."""
        response = await self._request("GET", f"/api/forms/{quote(slug, safe='')}/export/csv", auth=True)
        return response.text

    async def qr_code(self, slug: str) -> bytes:
        """PNG QR code pointing at the form's fill page."""
        response = await self._request("GET", f"/api/forms/{quote(slug, safe='')}/qr")
        return response.content

    def share_url(self, slug: str) -> str:
        """Public fill page of a form."""
        return f"{self.public_base_url}/f/{slug}"
