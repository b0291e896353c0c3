"""Tests for the MCP tool handlers."""

import asyncio

import httpx
import pytest
from mcp.server import Server

from smartform.api_client import Credentials
from smartform.config import get_config
from smartform.mcp_server.server import create_mcp_server
from smartform.mcp_server.session import ToolSession, bearer_token, connection_credentials
from smartform.mcp_server.tools import (
    get_mcp_tools,
    mcp_form_analytics,
    mcp_get_form,
    mcp_list_forms,
    mcp_submit_response,
)

FIELDS = [
    {"id": "f1", "type": "email", "label": "Email", "required": True},
    {"id": "c", "type": "checkbox", "label": "C", "options": [{"label": "A", "value": "A"}]},
]


class TestToolDefinitions:
    def test_names(self):
        names = [tool["name"] for tool in get_mcp_tools()]
        assert names == ["list_forms", "get_form", "form_analytics", "submit_response"]

    def test_schemas(self):
        for tool in get_mcp_tools():
            assert tool["inputSchema"]["type"] == "object"
            assert tool["description"]


class TestHandlers:
    """Tests for each MCP tool handler."""

    def test_list_forms(self, client, fake_api):
        fake_api.add_form("t-1", FIELDS)
        result = asyncio.run(mcp_list_forms(client))
        assert result["forms"][0]["share_slug"] == "t-1"
        assert result["forms"][0]["share_url"] == "http://localhost:3000/f/t-1"

    def test_get_form(self, client, fake_api):
        fake_api.add_form("t-1", FIELDS)
        result = asyncio.run(mcp_get_form(client, "t-1"))
        assert [f["id"] for f in result["form"]["fields"]] == ["f1", "c"]
        assert [i["input_type"] for i in result["inputs"]] == ["email", "checkbox-group"]

    def test_get_form_missing(self, client):
        assert asyncio.run(mcp_get_form(client, "missing")) == {"error": "Form not found"}

    def test_analytics(self, client, fake_api):
        fake_api.add_form("t-1", FIELDS)
        result = asyncio.run(mcp_form_analytics(client, "t-1"))
        assert result == {"count": 0, "recent": []}

    def test_submit_invalid(self, client, fake_api):
        fake_api.add_form("t-1", FIELDS)
        result = asyncio.run(mcp_submit_response(client, "t-1", {"f1": "x@y"}))
        assert result == {"submitted": False, "errors": {"f1": "Invalid email"}}
        assert fake_api.submissions["t-1"] == []

    def test_submit_valid(self, client, fake_api):
        fake_api.add_form("t-1", FIELDS)
        result = asyncio.run(mcp_submit_response(client, "t-1", {"f1": "x@y.com", "c": ["A"]}))
        assert result["submitted"] is True
        assert result["submission_id"] == "sub-1"
        assert fake_api.submissions["t-1"][0]["data"] == {"f1": "x@y.com", "c": ["A"]}

    def test_submit_unknown_field(self, client, fake_api):
        fake_api.add_form("t-1", FIELDS)
        result = asyncio.run(mcp_submit_response(client, "t-1", {"zz": "1"}))
        assert result == {"error": "Unknown field: zz"}

    def test_get_form_with_optionless_choice_field(self, client, fake_api):
        fake_api.add_form("t-1", [{"id": "c", "type": "radio", "label": "R", "options": []}])
        result = asyncio.run(mcp_get_form(client, "t-1"))
        assert result["form"]["fields"][0]["options"] == []
        assert result["inputs"][0]["choices"] == []


class TestToolSessions:
    """Tests for per-connection credentials."""

    def _session(self, fake_api, token: str) -> ToolSession:
        return ToolSession(credentials=Credentials(id_token=token), transport=httpx.MockTransport(fake_api))

    def test_sessions_keep_their_own_token(self, fake_api):
        """Two connections open at once each call with the token they connected with."""
        fake_api.add_form("t-1", FIELDS)
        owner = self._session(fake_api, "owner-token")
        stranger = self._session(fake_api, "someone-else")

        async def both():
            return await asyncio.gather(
                owner.call("list_forms", {}),
                stranger.call("list_forms", {}),
            )

        owner_result, stranger_result = asyncio.run(both())
        assert owner_result["forms"][0]["share_slug"] == "t-1"
        assert stranger_result == {"error": "Invalid token"}

        # The later connection does not take over the earlier one
        again = asyncio.run(owner.call("form_analytics", {"slug": "t-1"}))
        assert again == {"count": 0, "recent": []}
        tokens = [request.headers["authorization"] for request in fake_api.requests]
        assert sorted(tokens[:2]) == ["Bearer owner-token", "Bearer someone-else"]
        assert tokens[2] == "Bearer owner-token"

    def test_missing_argument(self, fake_api):
        with pytest.raises(KeyError):
            asyncio.run(self._session(fake_api, "owner-token").call("get_form", {}))

    def test_unknown_tool(self, fake_api):
        result = asyncio.run(self._session(fake_api, "owner-token").call("drop_table", {}))
        assert result == {"error": "Unknown tool: drop_table"}

    def test_server_per_session(self, fake_api):
        assert isinstance(create_mcp_server(self._session(fake_api, "owner-token")), Server)


class TestConnectionCredentials:
    def test_bearer_header_parsing(self):
        assert bearer_token({b"authorization": b"Bearer abc"}) == "abc"
        assert bearer_token({b"authorization": b"Basic abc"}) is None
        assert bearer_token({}) is None

    def test_connections_do_not_share_tokens(self, monkeypatch):
        """A connection without a token gets the configured one, never a previous client's."""
        monkeypatch.setattr(get_config(), "id_token", "configured")
        first = connection_credentials({b"authorization": b"Bearer owner-a"})
        second = connection_credentials({b"authorization": b"Bearer owner-b"})
        third = connection_credentials({})
        assert first.id_token == "owner-a"
        assert second.id_token == "owner-b"
        assert third.id_token == "configured"
