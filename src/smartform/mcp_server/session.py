"""
Per-connection state of the MCP server.

Every MCP connection gets its own ``ToolSession`` holding the credentials
it connected with. Tool calls run against the session of the connection
that made them, so two owners connected at once never see each other's
forms.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx

from smartform.api_client import Credentials, SmartFormClient
from smartform.mcp_server.tools import (
    mcp_form_analytics,
    mcp_get_form,
    mcp_list_forms,
    mcp_submit_response,
)

def bearer_token(headers: dict[bytes, bytes]) -> str | None:
    """Token from a raw ASGI ``Authorization: Bearer ...`` header."""
    value = headers.get(b"authorization", b"").decode("utf-8")
    scheme, _, token = value.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def connection_credentials(headers: dict[bytes, bytes]) -> Credentials:
    """
    Credentials for a new SSE connection.

    The connecting client's bearer token wins; without one the connection
    falls back to SMARTFORM_ID_TOKEN.
    """
    token = bearer_token(headers)
    if token:
        return Credentials(id_token=token)
    return Credentials.from_config()


@dataclass
class ToolSession:
    """Credentials of one MCP connection and the tools bound to them."""

    credentials: Credentials = field(default_factory=Credentials.from_config)
    transport: httpx.AsyncBaseTransport | None = None

    def client(self) -> SmartFormClient:
        return SmartFormClient(credentials=self.credentials, transport=self.transport)

    async def call(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Run one tool by name. Missing arguments raise ``KeyError``."""
        client = self.client()
        if name == "list_forms":
            return await mcp_list_forms(client)
        if name == "get_form":
            return await mcp_get_form(client, arguments["slug"])
        if name == "form_analytics":
            return await mcp_form_analytics(client, arguments["slug"])
        if name == "submit_response":
            return await mcp_submit_response(client, arguments["slug"], arguments.get("data") or {})
        return {"error": f"Unknown tool: {name}"}
