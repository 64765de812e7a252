"""Linear MCP: exposes the Linear issue tracker as MCP tools."""

__version__ = "0.3.0"
