"""Search & fetch service behind the MCP tools."""

import logging
from typing import Optional

from ..config import DEFAULT_CONTENT_SELECTORS, DEFAULT_STRIP_SELECTORS, Config
from .catalog import CatalogBuilder, CatalogCache
from .content import extract_content, html_to_markdown
from .fetcher import PageFetcher
from .models import ClassRecord

logger = logging.getLogger(__name__)


class DocsService:
	"""
	Searches the class catalog and reads individual class pages.

	Usage:
		service = DocsService.from_config(config)
		matches = await service.search("ModPlayer")
		markdown = await service.fetch_docs(matches[0].url)
	"""

	def __init__(
		self,
		builder: CatalogBuilder,
		fetcher: PageFetcher,
		max_results: int = 20,
		content_selectors: tuple[str, ...] = DEFAULT_CONTENT_SELECTORS,
		strip_selectors: tuple[str, ...] = DEFAULT_STRIP_SELECTORS,
	):
		self.builder = builder
		self.fetcher = fetcher
		self.max_results = max_results
		self.content_selectors = content_selectors
		self.strip_selectors = strip_selectors

	@classmethod
	def from_config(
		cls,
		config: Config,
		fetcher: Optional[PageFetcher] = None,
		cache: Optional[CatalogCache] = None,
	) -> "DocsService":
		"""Wire a service, its catalog builder and cache from config."""
		fetcher = fetcher or PageFetcher(timeout=config.request_timeout, user_agent=config.user_agent)
		cache = cache or CatalogCache(ttl_seconds=config.cache_ttl_seconds)
		builder = CatalogBuilder(
			fetcher=fetcher,
			cache=cache,
			index_url=config.index_url,
			base_url=config.docs_base_url,
			indent_unit=config.indent_unit_px,
		)
		return cls(
			builder=builder,
			fetcher=fetcher,
			max_results=config.max_search_results,
			content_selectors=tuple(config.content_selectors),
			strip_selectors=tuple(config.strip_selectors),
		)

	@property
	def cache(self) -> CatalogCache:
		return self.builder.cache

	async def search(self, query: str) -> list[ClassRecord]:
		"""
		Case-insensitive substring search over class names and full names.

		Returns matches in catalog order, at most max_results of them.
		An empty query matches every class.
		"""
		catalog = await self.builder.get_catalog()
		q = query.lower()
		matches = [
			record for record in catalog
			if q in record.name.lower() or q in record.full_name.lower()
		]
		return matches[:self.max_results]

	async def fetch_docs(self, url: str) -> str:
		"""Fetch a class page and return its main content as markdown."""
		logger.info(f"Fetching class docs from {url}")
		html = await self.fetcher.fetch(url)
		fragment = extract_content(html, self.content_selectors, self.strip_selectors)
		if not fragment:
			logger.warning(f"No content region found in {url}")
		return html_to_markdown(fragment)
