"""tmodloader-docs MCP server."""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from .config import Config, load_config
from .docs import DocsService
from .tools import register_all_tools


def create_server(
	config: Optional[Config] = None,
	service: Optional[DocsService] = None,
) -> FastMCP:
	"""Build the MCP server with one docs service shared by all tools."""
	config = config or load_config()
	service = service or DocsService.from_config(config)
	mcp = FastMCP("tmodloader-docs")
	register_all_tools(mcp, config, service)
	return mcp
