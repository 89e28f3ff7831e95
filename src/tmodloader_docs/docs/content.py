"""Content extraction: turns a class documentation page into markdown."""

import re
from typing import Sequence

from bs4 import BeautifulSoup
from markdownify import markdownify as md

from ..config import DEFAULT_CONTENT_SELECTORS, DEFAULT_STRIP_SELECTORS


def extract_content(
	html: str,
	content_selectors: Sequence[str] = DEFAULT_CONTENT_SELECTORS,
	strip_selectors: Sequence[str] = DEFAULT_STRIP_SELECTORS,
) -> str:
	"""
	Return the inner HTML of the page's main content region.

	Selectors are tried in order and the first region with non-empty inner
	HTML wins. Elements matching strip_selectors are removed from it.
	Returns an empty string when no region matches.
	"""
	soup = BeautifulSoup(html, "html.parser")

	fragment = ""
	for selector in content_selectors:
		element = soup.select_one(selector)
		if element is not None:
			inner = element.decode_contents()
			if inner.strip():
				fragment = inner
				break

	if not fragment:
		return ""

	content = BeautifulSoup(fragment, "html.parser")
	for selector in strip_selectors:
		for element in content.select(selector):
			element.decompose()
	return str(content)


def _clean_markdown(markdown: str) -> str:
	"""Clean up converted markdown."""
	lines = [line.rstrip() for line in markdown.split("\n")]
	markdown = "\n".join(lines)

	# Remove excessive blank lines
	markdown = re.sub(r"\n{3,}", "\n\n", markdown)
	return markdown.strip()


def html_to_markdown(fragment: str) -> str:
	"""Convert an HTML fragment to markdown. An empty fragment gives ""."""
	if not fragment.strip():
		return ""
	markdown = md(
		fragment,
		heading_style="ATX",
		bullets="-",
		code_language="csharp",
		strip=["script", "style"],
	)
	return _clean_markdown(markdown)
