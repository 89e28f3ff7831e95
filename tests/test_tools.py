"""Tests for the tModLoader documentation MCP tools."""

import json

import pytest
from aiohttp import test_utils, web
from mcp.server.fastmcp.exceptions import ToolError

from tmodloader_docs.docs import ClassRecord, DocsService
from tmodloader_docs.errors import InvalidArgumentError
from tmodloader_docs.server import create_server
from tmodloader_docs.tools.core import register_core_tools
from tmodloader_docs.tools.docs import (
	NO_RESULTS_MESSAGE,
	format_search_results,
	register_docs_tools,
)
from tests.helpers import (
	BASE_URL,
	INDEX_URL,
	FakeFetcher,
	capture_tools,
	index_page,
	index_row,
	make_config,
	make_service,
)

SAMPLE_INDEX = index_page(
	index_row("Terraria", 1, href="namespace_terraria.html"),
	index_row("ModItem", 2, href="class_mod_item.html", desc="Base class for modded items"),
	index_row("ModNPC", 2, href="class_mod_n_p_c.html"),
)


def _text(result) -> str:
	return result.content[0].text


class TestFormatSearchResults:
	"""Test the text block returned by the search tool."""

	def test_no_results(self):
		assert format_search_results([]) == NO_RESULTS_MESSAGE

	def test_block_per_match(self):
		text = format_search_results([
			ClassRecord("ModItem", "Terraria.ModItem", "Base class", BASE_URL + "a.html"),
			ClassRecord("ModNPC", "Terraria.ModNPC", "", BASE_URL + "b.html"),
		])
		assert text.startswith("Found 2 classes:\n")
		assert "### ModItem (Terraria.ModItem)" in text
		assert "**Description**: Base class" in text
		assert f"**URL**: {BASE_URL}a.html" in text
		assert "**Description**: No description" in text

	def test_matches_keep_order(self):
		text = format_search_results([
			ClassRecord("B", "B", "", ""),
			ClassRecord("A", "A", "", ""),
		])
		assert text.index("### B (B)") < text.index("### A (A)")


class TestSearchTool:
	"""Test search_tmodloader_classes."""

	@pytest.mark.asyncio
	async def test_returns_formatted_matches(self, tmp_path):
		service = make_service(FakeFetcher({INDEX_URL: SAMPLE_INDEX}))
		tools = capture_tools(make_config(tmp_path), service, register_docs_tools)

		result = await tools["search_tmodloader_classes"]("moditem")

		assert not result.isError
		text = _text(result)
		assert "Found 1 classes:" in text
		assert "### ModItem (Terraria.ModItem)" in text
		assert "**Description**: Base class for modded items" in text
		assert f"**URL**: {BASE_URL}class_mod_item.html" in text

	@pytest.mark.asyncio
	async def test_no_matches(self, tmp_path):
		service = make_service(FakeFetcher({INDEX_URL: SAMPLE_INDEX}))
		tools = capture_tools(make_config(tmp_path), service, register_docs_tools)

		result = await tools["search_tmodloader_classes"]("Projectile")

		assert not result.isError
		assert _text(result) == NO_RESULTS_MESSAGE

	@pytest.mark.asyncio
	async def test_fetch_failure_is_error_result(self, tmp_path):
		fetcher = FakeFetcher()
		fetcher.fail(INDEX_URL, "Service Unavailable")
		tools = capture_tools(make_config(tmp_path), make_service(fetcher), register_docs_tools)

		result = await tools["search_tmodloader_classes"]("npc")

		assert result.isError
		assert _text(result) == "Error searching classes: Failed to fetch docs: Service Unavailable"

	@pytest.mark.asyncio
	async def test_wrong_type_rejected_before_fetch(self, tmp_path):
		fetcher = FakeFetcher({INDEX_URL: SAMPLE_INDEX})
		tools = capture_tools(make_config(tmp_path), make_service(fetcher), register_docs_tools)

		with pytest.raises(InvalidArgumentError, match="query is required"):
			await tools["search_tmodloader_classes"](None)
		assert fetcher.requests == []


class TestReadClassDocsTool:
	"""Test read_class_docs."""

	@pytest.mark.asyncio
	async def test_returns_markdown_verbatim(self, tmp_path):
		url = BASE_URL + "class_mod_item.html"
		page = '<html><body><div class="contents"><h2>Properties</h2><p>Item stats.</p></div></body></html>'
		service = make_service(FakeFetcher({url: page}))
		tools = capture_tools(make_config(tmp_path), service, register_docs_tools)

		result = await tools["read_class_docs"](url)

		assert not result.isError
		assert _text(result) == await service.fetch_docs(url)
		assert "## Properties" in _text(result)

	@pytest.mark.asyncio
	async def test_fetch_failure_is_error_result(self, tmp_path):
		tools = capture_tools(make_config(tmp_path), make_service(FakeFetcher()), register_docs_tools)

		result = await tools["read_class_docs"](BASE_URL + "missing.html")

		assert result.isError
		assert _text(result) == "Error fetching docs: Failed to fetch docs: Not Found"

	@pytest.mark.asyncio
	async def test_number_url_rejected_before_fetch(self, tmp_path):
		fetcher = FakeFetcher()
		tools = capture_tools(make_config(tmp_path), make_service(fetcher), register_docs_tools)

		with pytest.raises(InvalidArgumentError, match="url is required"):
			await tools["read_class_docs"](42)
		assert fetcher.requests == []

	@pytest.mark.asyncio
	async def test_undecodable_page_is_error_result(self, tmp_path):
		async def latin1(request: web.Request) -> web.Response:
			return web.Response(body="<p>caf\xe9 ModItem</p>".encode("latin-1"), content_type="text/html")

		app = web.Application()
		app.router.add_get("/class_mod_item.html", latin1)
		config = make_config(tmp_path)
		tools = capture_tools(config, DocsService.from_config(config), register_docs_tools)

		async with test_utils.TestServer(app) as server:
			result = await tools["read_class_docs"](str(server.make_url("/class_mod_item.html")))

		assert result.isError
		assert _text(result).startswith("Error fetching docs: Failed to fetch docs: could not decode page")


class TestArgumentValidationThroughServer:
	"""Malformed arguments never reach the network through FastMCP either."""

	@pytest.mark.asyncio
	async def test_missing_query(self, tmp_path):
		fetcher = FakeFetcher({INDEX_URL: SAMPLE_INDEX})
		mcp = create_server(make_config(tmp_path), make_service(fetcher))

		with pytest.raises(ToolError):
			await mcp.call_tool("search_tmodloader_classes", {})
		assert fetcher.requests == []

	@pytest.mark.asyncio
	async def test_url_as_number(self, tmp_path):
		fetcher = FakeFetcher()
		mcp = create_server(make_config(tmp_path), make_service(fetcher))

		with pytest.raises(ToolError):
			await mcp.call_tool("read_class_docs", {"url": 42})
		assert fetcher.requests == []


class TestHealthCheck:
	"""Test the health_check tool."""

	@pytest.mark.asyncio
	async def test_reports_empty_cache(self, tmp_path):
		config = make_config(tmp_path)
		tools = capture_tools(config, make_service(FakeFetcher()), register_core_tools)

		status = json.loads(await tools["health_check"]())

		assert status["server"] == "running"
		assert status["index_url"] == INDEX_URL
		assert status["catalog"]["cached"] is False
		assert status["catalog"]["records"] == 0
		assert status["catalog"]["age_seconds"] is None

	@pytest.mark.asyncio
	async def test_reports_cached_catalog(self, tmp_path):
		config = make_config(tmp_path)
		fetcher = FakeFetcher({INDEX_URL: SAMPLE_INDEX})
		service = make_service(fetcher)
		await service.search("")
		tools = capture_tools(config, service, register_core_tools)

		status = json.loads(await tools["health_check"]())

		assert status["catalog"]["cached"] is True
		assert status["catalog"]["fresh"] is True
		assert status["catalog"]["records"] == 3
		# No network access from the health check
		assert fetcher.requests == [INDEX_URL]
