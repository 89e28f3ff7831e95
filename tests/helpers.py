"""Shared test fixtures and helpers for tmodloader-docs tests."""

from typing import Callable, Optional

from tmodloader_docs.config import Config
from tmodloader_docs.docs import CatalogCache, DocsService
from tmodloader_docs.errors import FetchError

BASE_URL = "https://docs.tmodloader.net/docs/stable/"
INDEX_URL = BASE_URL + "annotated.html"


class FakeClock:
	"""Manually advanced clock for cache tests."""

	def __init__(self, now: float = 1000.0):
		self.now = now

	def __call__(self) -> float:
		return self.now

	def advance(self, seconds: float) -> None:
		self.now += seconds


class FakeFetcher:
	"""Serves canned pages by URL and records every request.

	A page mapped to a FetchError instance raises it instead.
	"""

	def __init__(self, pages: Optional[dict] = None):
		self.pages: dict = dict(pages or {})
		self.requests: list[str] = []

	async def fetch(self, url: str) -> str:
		self.requests.append(url)
		page = self.pages.get(url)
		if page is None:
			raise FetchError(url, "Not Found", status=404)
		if isinstance(page, Exception):
			raise page
		return page

	def fail(self, url: str, reason: str = "Service Unavailable", status: int = 503) -> None:
		self.pages[url] = FetchError(url, reason, status=status)


def index_row(name: str, level: int = 1, href: Optional[str] = "", desc: str = "") -> str:
	"""One Doxygen directory row. href=None renders a row without a name link."""
	width = level * 16
	if href is None:
		link = f'<b>{name}</b>'
	else:
		href = href or f"class_{name.lower()}.html"
		link = f'<a class="el" href="{href}" target="_self">{name}</a>'
	return (
		f'<tr class="even"><td class="entry">'
		f'<span style="width:{width}px;display:inline-block;">&#160;</span>'
		f'<span class="icona"><span class="icon">C</span></span>'
		f'{link}</td><td class="desc">{desc}</td></tr>'
	)


def index_page(*rows: str) -> str:
	"""Wrap rows in a minimal annotated.html page."""
	return (
		"<html><head><title>Class List</title></head><body>"
		'<div class="contents"><div class="directory">'
		'<table class="directory">' + "".join(rows) + "</table>"
		"</div></div></body></html>"
	)


def make_config(tmp_path) -> Config:
	"""Config rooted in a temporary directory."""
	return Config(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


def make_service(
	fetcher: FakeFetcher,
	clock: Optional[FakeClock] = None,
	config: Optional[Config] = None,
) -> DocsService:
	"""DocsService over a fake fetcher and clock."""
	config = config or Config()
	cache = CatalogCache(ttl_seconds=config.cache_ttl_seconds, clock=clock or FakeClock())
	return DocsService.from_config(config, fetcher=fetcher, cache=cache)


def capture_tools(config: Config, service: DocsService, register_fn: Callable) -> dict:
	"""Register tools on a mock MCP and return the captured tool functions.

	Args:
		config: Config object to pass to the registration function
		service: Docs service the tools are bound to
		register_fn: The registration function (e.g., register_docs_tools)

	Returns:
		Dict mapping tool name to the tool function
	"""
	captured = {}

	class MockMCP:
		def tool(self):
			def decorator(fn):
				captured[fn.__name__] = fn
				return fn
			return decorator

	register_fn(MockMCP(), config, service)
	return captured
