"""
MCP Server implementation for SmartForm.

Provides both stdio and SSE transport support for the Model Context Protocol.
Each connection runs its own server bound to a ``ToolSession``, so the
credentials a tool call uses are always those of the connection it came
from.
"""

import json
import logging
from typing import Any, Literal

from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from smartform.config import get_config
from smartform.mcp_server.session import ToolSession, connection_credentials
from smartform.mcp_server.tools import get_mcp_tools

logger = logging.getLogger("smartform-mcp")


def create_mcp_server(session: ToolSession | None = None) -> Server:
    """
    Create an MCP server whose tools run against one session.

    Args:
        session: Credentials of the connection this server answers. If
            None, a session built from config (SMARTFORM_ID_TOKEN).

    Returns:
        Configured MCP Server with SmartForm tools registered.
    """
    session = session or ToolSession()
    server = Server("smartform-mcp")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name=t["name"],
                description=t["description"],
                inputSchema=t["inputSchema"],
            )
            for t in get_mcp_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        logger.info(f"Tool call: {name}")
        try:
            result = await session.call(name, arguments or {})
        except KeyError as e:
            result = {"error": f"Missing argument: {e.args[0]}"}
        indent = get_config().indent_json_output
        return [TextContent(type="text", text=json.dumps(result, indent=indent))]

    return server


async def run_stdio_server() -> None:
    """
    Serve one local client over stdio with the configured credentials.

    Used for desktop clients and local subprocess communication.
    """
    logger.info("Starting MCP server with stdio transport...")
    server = create_mcp_server()

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def create_sse_app() -> Starlette:
    """
    Create Starlette app for SSE transport.

    Clients pass the form owner's id token as ``Authorization: Bearer <token>``
    when opening the SSE stream. The token belongs to that stream only;
    messages posted for it are routed back to it by the transport.
    """
    sse_transport = SseServerTransport("/messages/")

    async def handle_sse(scope, receive, send):
        credentials = connection_credentials(dict(scope.get("headers", [])))
        logger.info(f"SSE connection opened ({'with' if credentials.id_token else 'without'} owner token)")
        server = create_mcp_server(ToolSession(credentials=credentials))

        async with sse_transport.connect_sse(scope, receive, send) as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
        logger.info("SSE connection closed")

    async def handle_messages(scope, receive, send):
        await sse_transport.handle_post_message(scope, receive, send)

    async def health_check(request):
        return JSONResponse({
            "status": "healthy",
            "service": "smartform-mcp",
            "transport": "sse",
            "backend_url": get_config().backend_url,
        })

    return Starlette(
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Mount("/sse/messages", app=handle_messages),
            Mount("/sse", app=handle_sse),
        ],
    )


async def run_sse_server(host: str = "0.0.0.0", port: int = 8080) -> None:
    """Serve remote clients over SSE, one session per connection."""
    import uvicorn

    logger.info(f"Starting MCP server with SSE transport on {host}:{port}...")

    uvicorn_config = uvicorn.Config(create_sse_app(), host=host, port=port, log_level="info")
    await uvicorn.Server(uvicorn_config).serve()


async def run_mcp_server(
    transport: Literal["stdio", "sse"] = "stdio",
    host: str = "0.0.0.0",
    port: int = 8080,
) -> None:
    """
    Run the MCP server with the given transport.

    Args:
        transport: "stdio" or "sse"
        host: Host for SSE transport
        port: Port for SSE transport
    """
    if transport == "stdio":
        await run_stdio_server()
    elif transport == "sse":
        await run_sse_server(host, port)
    else:
        raise ValueError(f"Unknown transport: {transport}. Use 'stdio' or 'sse'.")
