"""MCP server exposing the Taskwarrior tools over stdio.

The low-level ``mcp`` Server owns framing and transport; this module only
wires its list_tools / call_tool hooks to the Dispatcher.

The Taskwarrior call inside ``call_tool`` is synchronous and holds the
event loop until ``task`` exits: two requests never drive ``task`` at the
same time from this process.
"""

from importlib.metadata import PackageNotFoundError, version
from typing import Any

import structlog
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from taskwarrior_mcp.config import Settings, get_settings
from taskwarrior_mcp.dispatcher import Dispatcher
from taskwarrior_mcp.registry import ToolResult
from taskwarrior_mcp.taskwarrior import Taskwarrior

logger = structlog.get_logger(__name__)

DEFAULT_VERSION = "1.0.0"


def server_version() -> str:
    try:
        return version("taskwarrior-mcp")
    except PackageNotFoundError:
        return DEFAULT_VERSION


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    """Wrap a ToolResult into the MCP response envelope."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


def create_server(dispatcher: Dispatcher, name: str = "taskwarrior-mcp") -> Server:
    """Build an MCP server whose tools are served by ``dispatcher``."""
    server: Server = Server(name, version=server_version())

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in dispatcher.list_tools()
        ]

    # Arguments are validated by the tool handlers
    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> types.CallToolResult:
        return to_call_tool_result(dispatcher.dispatch(name, arguments))

    return server


async def serve(settings: Settings | None = None) -> None:
    """Run the server on stdin/stdout until the client disconnects."""
    settings = settings or get_settings()
    dispatcher = Dispatcher(Taskwarrior.from_settings(settings))
    server = create_server(dispatcher, name=settings.server_name)

    logger.info(
        "server.start",
        name=settings.server_name,
        version=server_version(),
        task_command=settings.task_command,
        task_data=str(settings.task_data or ""),
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("server.stop")
