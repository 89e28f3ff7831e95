"""tmodloader-docs: MCP server for searching the tModLoader API documentation."""

__version__ = "0.1.0"
