"""mcpspec — build, validate, and draft MCP server package specifications."""

__version__ = "0.1.0"
