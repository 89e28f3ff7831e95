"""Exceptions raised by the docs layer and the tool handlers."""

from typing import Optional


class DocsError(Exception):
	"""Base class for failures while reading the documentation site."""


class FetchError(DocsError):
	"""A documentation page could not be fetched."""

	def __init__(self, url: str, reason: str, status: Optional[int] = None):
		self.url = url
		self.reason = reason
		self.status = status
		super().__init__(f"Failed to fetch docs: {reason}")


class InvalidArgumentError(ValueError):
	"""A tool was called with a missing or wrong-typed argument."""
