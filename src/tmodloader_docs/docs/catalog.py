"""
Class catalog - parses the Doxygen class index and caches it.

The index page (annotated.html) lays the class/namespace tree out as a flat
table. Each row's first spacer span carries an inline width; the width in
units of the per-level indent gives the nesting depth:

	<tr>
		<td class="entry">
			<span style="width:32px;display:inline-block;">&#160;</span>
			<span class="icona"><span class="icon">C</span></span>
			<a class="el" href="classTerraria_1_1ModLoader_1_1ModItem.html">ModItem</a>
		</td>
		<td class="desc">This class serves as a place for you to place all your properties ...</td>
	</tr>
"""

import asyncio
import copy
import logging
import re
import time
from typing import Callable, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .fetcher import PageFetcher
from .models import Catalog, ClassRecord

logger = logging.getLogger(__name__)

WIDTH_PATTERN = re.compile(r"width:\s*(\d+)px")
LEADING_SEPARATOR = re.compile(r"^\s*[:\-]\s*")


def _indent_width(entry: Tag) -> int:
	"""Pixel width of the entry's leading spacer span, 0 when there is none."""
	spacer = entry.find("span")
	if spacer is None:
		return 0
	match = WIDTH_PATTERN.search(spacer.get("style", ""))
	return int(match.group(1)) if match else 0


def _row_description(row: Tag) -> str:
	"""
	Best-effort description: the row text once the entry cell's icons,
	spacers and links are removed. Often empty.
	"""
	row = copy.copy(row)
	for element in row.select("td.entry span, td.entry a"):
		element.extract()
	text = " ".join(row.get_text(" ").split())
	return LEADING_SEPARATOR.sub("", text, count=1)


def parse_class_index(html: str, base_url: str, indent_unit: int = 16) -> list[ClassRecord]:
	"""
	Flatten the index table into class records in row order.

	Args:
		html: The index page HTML
		base_url: Base URL the row links are resolved against
		indent_unit: Spacer width, in pixels, of one nesting level

	Returns:
		One ClassRecord per linked row
	"""
	soup = BeautifulSoup(html, "html.parser")
	records: list[ClassRecord] = []
	stack: list[str] = []

	for row in soup.select("table.directory tr"):
		entry = row.select_one("td.entry")
		if entry is None:
			continue

		link = entry.select_one("a.el")
		if link is None:
			# Grouping rows without a page don't take part in the ancestor chain
			continue

		# Anything narrower than one unit is top level
		level = max(1, _indent_width(entry) / indent_unit)
		while len(stack) >= level:
			stack.pop()

		name = link.get_text().strip()
		href = link.get("href")
		url = urljoin(base_url, href) if href else ""

		stack.append(name)
		records.append(ClassRecord(
			name=name,
			full_name=".".join(stack),
			description=_row_description(row),
			url=url,
		))

	return records


class CatalogCache:
	"""
	Holds the current catalog snapshot and decides when it is stale.

	The snapshot is replaced by a single assignment, so a reader never sees
	a timestamp paired with another refresh's records.
	"""

	def __init__(self, ttl_seconds: float = 3600, clock: Callable[[], float] = time.monotonic):
		self.ttl_seconds = ttl_seconds
		self.clock = clock
		self._catalog: Optional[Catalog] = None

	@property
	def catalog(self) -> Optional[Catalog]:
		"""The last stored catalog, fresh or stale."""
		return self._catalog

	def age(self) -> Optional[float]:
		"""Seconds since the catalog was stored, or None when empty."""
		if self._catalog is None:
			return None
		return self.clock() - self._catalog.fetched_at

	def get_fresh(self) -> Optional[Catalog]:
		"""Return the catalog if it is younger than the TTL."""
		age = self.age()
		if age is None or age >= self.ttl_seconds:
			return None
		return self._catalog

	def store(self, records: list[ClassRecord]) -> Catalog:
		"""Replace the cached catalog with a new snapshot stamped now."""
		catalog = Catalog(records=tuple(records), fetched_at=self.clock())
		self._catalog = catalog
		return catalog


class CatalogBuilder:
	"""Fetches and parses the class index, refreshing it through the cache."""

	def __init__(
		self,
		fetcher: PageFetcher,
		cache: CatalogCache,
		index_url: str,
		base_url: str,
		indent_unit: int = 16,
	):
		self.fetcher = fetcher
		self.cache = cache
		self.index_url = index_url
		self.base_url = base_url
		self.indent_unit = indent_unit
		self._refresh_lock = asyncio.Lock()

	async def get_catalog(self) -> Catalog:
		"""
		Return a catalog no older than the cache TTL.

		Raises:
			FetchError: If the index page could not be fetched. The cached
				catalog and its timestamp are left as they were.
		"""
		catalog = self.cache.get_fresh()
		if catalog is not None:
			logger.debug(f"Catalog cache hit ({len(catalog)} classes)")
			return catalog

		async with self._refresh_lock:
			# Another caller may have refreshed while we waited
			catalog = self.cache.get_fresh()
			if catalog is not None:
				return catalog

			logger.info(f"Fetching tModLoader class index from {self.index_url}")
			html = await self.fetcher.fetch(self.index_url)
			records = parse_class_index(html, self.base_url, self.indent_unit)
			catalog = self.cache.store(records)
			logger.info(f"Parsed {len(catalog)} classes")
			return catalog
