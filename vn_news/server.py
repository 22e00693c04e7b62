"""MCP server wiring: stdio transport, tool listing and tool calls."""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .config import SERVER_NAME, SERVER_VERSION, load_settings
from .core import NewsAggregator
from .logging_setup import setup_logging
from .tools import TOOLS, call_tool

logger = logging.getLogger(__name__)


def create_server(aggregator: Optional[NewsAggregator] = None) -> Server:
    if aggregator is None:
        aggregator = NewsAggregator()
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        logger.info("ListTools called")
        return TOOLS

    # Registered as a raw request handler: McpError must reach the client as a
    # JSON-RPC error, and out-of-range limits are clamped rather than rejected.
    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        text = await call_tool(req.params.name, req.params.arguments, aggregator=aggregator)
        return types.ServerResult(
            types.CallToolResult(content=[types.TextContent(type="text", text=text)])
        )

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def run(aggregator: Optional[NewsAggregator] = None) -> None:
    logger.info("Starting Vietnamese News RSS MCP Server...")
    server = create_server(aggregator)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Vietnamese News RSS MCP Server running on stdio")
        logger.info("Available tools: %s", ", ".join(tool.name for tool in TOOLS))
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_json)
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)
