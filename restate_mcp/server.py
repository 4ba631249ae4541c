#  Restate MCP Server - MCP Server
#
#  Binds the tool registry and documentation resources to an MCP server
#  and serves it over stdio.
#
#  Depends on: config.py, container.py, tools/registry.py, resources.py, logging_config.py
#  Used by:    run.py

import asyncio
import logging
import sys

from dependency_injector import providers
from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from restate_mcp.config import (
    LOG_FORMAT,
    LOG_LEVEL,
    SERVER_NAME,
    SERVER_VERSION,
    ConfigError,
    validate_config,
)
from restate_mcp.container import Container
from restate_mcp.logging_config import setup_logging
from restate_mcp.resources import DOCUMENTS, get_document
from restate_mcp.tools.registry import ToolRegistry

logger = logging.getLogger("restate_mcp.server")


def create_server(registry: ToolRegistry) -> Server:
    """Build an MCP server exposing every registered tool and the docs."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [types.Tool(**definition) for definition in registry.definitions()]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
        # Exceptions become isError results carrying the message
        text = await registry.call(name, arguments)
        return [types.TextContent(type="text", text=text)]

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return [
            types.Resource(
                uri=doc.uri,
                name=doc.name,
                description=doc.description,
                mimeType=doc.mime_type,
            )
            for doc in DOCUMENTS
        ]

    @server.read_resource()
    async def read_resource(uri) -> list[ReadResourceContents]:
        doc = get_document(str(uri))
        return [ReadResourceContents(content=doc.text, mime_type=doc.mime_type)]

    return server


async def serve(registry: ToolRegistry):
    """Serve over stdio until the client closes the channel."""
    server = create_server(registry)
    logger.info("Restate MCP server starting (%d tools)", len(registry.all_names()))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("Restate MCP server stopped")


def main():
    setup_logging(level=LOG_LEVEL, fmt=LOG_FORMAT)

    try:
        base_url = validate_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    container = Container()
    container.base_url.override(providers.Object(base_url))
    logger.info("Using Restate admin API at %s", base_url)

    asyncio.run(serve(container.tool_registry()))
