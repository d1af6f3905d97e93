#!/usr/bin/env python3
"""
TVMaze MCP Server
Exposes TVMaze show, cast, season and episode data as MCP tools
"""
import asyncio
import logging
import sys
from typing import Any, Optional

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
import mcp.types as types
from dotenv import load_dotenv

from tvmaze_server import __version__
from tvmaze_server.config import get_settings
from tvmaze_server.errors import TVMazeError
from tvmaze_server.tools import TOOLS, run_tool
from tvmaze_server.tvmaze_api import TVMazeAPI

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

ENDPOINTS = [
    "Search endpoint: {base}/search/shows?q=<query>",
    "Show endpoint: {base}/shows/{{id}}",
    "Cast endpoint: {base}/shows/{{id}}/cast",
    "Crew endpoint: {base}/shows/{{id}}/crew",
    "Seasons endpoint: {base}/shows/{{id}}/seasons",
    "Episodes endpoint: {base}/seasons/{{id}}/episodes[?embed=guestcast]",
]


def server_instructions(base_url: str) -> str:
    lines = ["Read-only access to the TVMaze catalog."]
    lines.extend(line.format(base=base_url.rstrip("/")) for line in ENDPOINTS)
    return "\n".join(lines)


# Create a server instance
server = Server(
    "tvmaze-server",
    version=__version__,
    instructions=server_instructions(get_settings().base_url),
)

# Global TVMaze API instance
tvmaze_api: Optional[TVMazeAPI] = None


def get_tvmaze_api() -> TVMazeAPI:
    """Get or create the TVMaze API instance"""
    global tvmaze_api

    if tvmaze_api is None:
        settings = get_settings()
        tvmaze_api = TVMazeAPI(settings.base_url, settings.request_timeout)

    return tvmaze_api


@server.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    """
    List available tools.
    Input and output schemas come from the pydantic models behind each tool.
    """
    return [definition.as_tool() for definition in TOOLS.values()]


@server.call_tool()
async def handle_call_tool(name: str, arguments: dict) -> tuple[list[types.TextContent], dict[str, Any]]:
    """
    Handle tool execution requests.
    Failures are raised so the client receives them as an error result.
    """
    definition = TOOLS.get(name)
    if definition is None:
        raise ValueError(f"Unknown tool: {name}")

    logger.info("%s called with: %s", name, arguments)
    try:
        result = await run_tool(definition, get_tvmaze_api(), arguments)
    except TVMazeError as e:
        logger.warning("%s failed (%s): %s", name, type(e).__name__, e)
        raise

    return [types.TextContent(type="text", text=result.text)], result.data


async def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    # Run the server using stdin/stdout streams
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="tvmaze-server",
                server_version=__version__,
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
                instructions=server_instructions(settings.base_url),
            ),
        )


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
