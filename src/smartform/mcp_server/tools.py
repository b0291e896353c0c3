"""
MCP Tool definitions for SmartForm.

Wraps the dashboard and fill operations as MCP tools. Every handler
returns a JSON-serialisable dict; API failures come back as
``{"error": ...}`` instead of raising.
"""

import logging
from typing import Any

from smartform.api_client import SmartFormClient
from smartform.exceptions import SmartFormError
from smartform.fill import FormFillSession

logger = logging.getLogger("smartform-mcp")


async def mcp_list_forms(client: SmartFormClient) -> dict[str, Any]:
    """List saved forms with their share URLs."""
    try:
        forms = await client.list_forms()
    except SmartFormError as e:
        logger.error(f"Error listing forms: {e}")
        return {"error": e.message}
    return {
        "forms": [
            {**form.model_dump(mode="json"), "share_url": client.share_url(form.share_slug)}
            for form in forms
        ]
    }


async def mcp_get_form(client: SmartFormClient, slug: str) -> dict[str, Any]:
    """Fetch a form schema and the inputs it renders to."""
    try:
        session = await FormFillSession.open(client, slug)
    except SmartFormError as e:
        logger.error(f"Error fetching form {slug}: {e}")
        return {"error": e.message}
    return {
        "form": session.form.model_dump(mode="json", by_alias=True, exclude_none=True),
        "inputs": [item.model_dump(mode="json") for item in session.render()],
    }


async def mcp_form_analytics(client: SmartFormClient, slug: str) -> dict[str, Any]:
    """Submission count and latest entries of a form."""
    try:
        analytics = await client.get_analytics(slug)
    except SmartFormError as e:
        logger.error(f"Error loading analytics for {slug}: {e}")
        return {"error": e.message}
    return analytics.model_dump(mode="json", by_alias=True)


async def mcp_submit_response(
    client: SmartFormClient,
    slug: str,
    data: dict[str, Any],
) -> dict[str, Any]:
    """Validate a response and submit it when valid."""
    try:
        session = await FormFillSession.open(client, slug)
    except SmartFormError as e:
        logger.error(f"Error fetching form {slug}: {e}")
        return {"error": e.message}

    for field_id, value in data.items():
        if session.form.get_field(field_id) is None:
            return {"error": f"Unknown field: {field_id}"}
        session.set_value(field_id, value)

    outcome = await session.submit(client)
    if outcome.errors:
        return {"submitted": False, "errors": outcome.errors}
    if not outcome.submitted:
        return {"submitted": False, "error": outcome.message}
    return {
        "submitted": True,
        "message": outcome.message,
        "submission_id": outcome.receipt.submission_id if outcome.receipt else None,
    }


_SLUG_SCHEMA = {
    "type": "string",
    "description": "Share slug of the form (last part of its share URL)",
}


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with MCP server.

    Returns list of tool schemas compatible with MCP protocol.
    """
    return [
        {
            "name": "list_forms",
            "description": "List the saved forms of the form owner, with their share slugs and URLs.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "get_form",
            "description": """
Fetch a form by share slug.

Returns the form schema (title, description, fields) and one input
descriptor per field. Use the field ids as keys when calling
submit_response.
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {"slug": _SLUG_SCHEMA},
                "required": ["slug"],
            },
        },
        {
            "name": "form_analytics",
            "description": "Total submission count and the most recent submissions of a form.",
            "inputSchema": {
                "type": "object",
                "properties": {"slug": _SLUG_SCHEMA},
                "required": ["slug"],
            },
        },
        {
            "name": "submit_response",
            "description": """
Submit a response to a form.

The response is validated first (required fields, email format). When
validation fails nothing is sent and the per-field errors are returned.

DATA FORMAT:
- Keys are field ids from get_form
- Checkbox fields take a list of option values
- Radio and dropdown fields take one option value
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "slug": _SLUG_SCHEMA,
                    "data": {
                        "type": "object",
                        "description": "Field id to value",
                    },
                },
                "required": ["slug", "data"],
            },
        },
    ]
