"""TVMaze MCP server: exposes the TVMaze show catalog as MCP tools."""

__version__ = "0.1.0"
