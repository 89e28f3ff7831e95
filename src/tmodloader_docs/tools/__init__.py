"""MCP tool registration."""

import logging

from mcp.server.fastmcp import FastMCP

from ..config import Config
from ..docs import DocsService
from .core import register_core_tools
from .docs import register_docs_tools

logger = logging.getLogger(__name__)


def register_all_tools(mcp: FastMCP, config: Config, service: DocsService) -> None:
	"""Register all MCP tools against one shared docs service."""
	register_core_tools(mcp, config, service)
	register_docs_tools(mcp, config, service)
	logger.debug("Registered MCP tools")
