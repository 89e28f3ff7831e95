"""tModLoader documentation tools - class search and page reading."""

import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent

from ..config import Config
from ..docs import ClassRecord, DocsService
from ..errors import DocsError, InvalidArgumentError

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No classes found matching your query."


def format_search_results(results: list[ClassRecord]) -> str:
	"""Render search matches as a markdown block per class."""
	if not results:
		return NO_RESULTS_MESSAGE

	blocks = [
		f"\n### {c.name} ({c.full_name})\n"
		f"**Description**: {c.description or 'No description'}\n"
		f"**URL**: {c.url}\n"
		for c in results
	]
	return f"Found {len(results)} classes:\n" + "\n".join(blocks)


def _text_result(text: str, is_error: bool = False) -> CallToolResult:
	return CallToolResult(
		content=[TextContent(type="text", text=text)],
		isError=is_error,
	)


def register_docs_tools(mcp: FastMCP, config: Config, service: DocsService) -> None:
	"""Register tModLoader documentation tools."""

	@mcp.tool()
	async def search_tmodloader_classes(query: str) -> CallToolResult:
		"""
		Search for tModLoader classes and interfaces from the official documentation.
		Returns class names, full paths, descriptions, and docs URLs.

		Args:
			query: The search query (e.g., 'NPC', 'Item', 'ModPlayer')
		"""
		# FastMCP validates arguments before calling; this covers direct calls
		if not isinstance(query, str):
			raise InvalidArgumentError("Invalid arguments: query is required")

		try:
			results = await service.search(query)
		except DocsError as e:
			logger.error(f"Search error: {e}")
			return _text_result(f"Error searching classes: {e}", is_error=True)

		return _text_result(format_search_results(results))

	@mcp.tool()
	async def read_class_docs(url: str) -> CallToolResult:
		"""
		Fetch the detailed documentation (markdown) for a specific tModLoader class URL.

		Args:
			url: The full URL of the class documentation page (returned by search_tmodloader_classes).
		"""
		# FastMCP validates arguments before calling; this covers direct calls
		if not isinstance(url, str):
			raise InvalidArgumentError("Invalid arguments: url is required")

		try:
			markdown = await service.fetch_docs(url)
		except DocsError as e:
			logger.error(f"Read docs error: {e}")
			return _text_result(f"Error fetching docs: {e}", is_error=True)

		return _text_result(markdown)
