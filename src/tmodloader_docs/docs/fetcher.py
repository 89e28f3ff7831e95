"""HTTP fetcher for documentation pages."""

import asyncio
import logging

import aiohttp

from ..errors import FetchError

logger = logging.getLogger(__name__)


class PageFetcher:
	"""
	Fetches documentation pages with a plain HTTP GET.

	Every failure (non-2xx status, connection error, timeout) is raised as
	FetchError. No retries: callers get one attempt per call.
	"""

	def __init__(self, timeout: float = 30.0, user_agent: str = "tmodloader-docs"):
		self.timeout = timeout
		self.user_agent = user_agent

	async def fetch(self, url: str) -> str:
		"""Return the body of the page at url as text."""
		logger.debug(f"Fetching: {url}")
		try:
			async with aiohttp.ClientSession(
				headers={"User-Agent": self.user_agent},
				timeout=aiohttp.ClientTimeout(total=self.timeout),
			) as session:
				async with session.get(url, allow_redirects=True) as response:
					if not 200 <= response.status < 300:
						reason = response.reason or str(response.status)
						logger.warning(f"Failed to fetch {url}: {response.status} {reason}")
						raise FetchError(url, reason, status=response.status)
					return await response.text()
		except asyncio.TimeoutError as e:
			logger.warning(f"Timed out fetching {url}")
			raise FetchError(url, f"timed out after {self.timeout}s") from e
		except aiohttp.ClientError as e:
			logger.warning(f"Error fetching {url}: {e}")
			raise FetchError(url, str(e) or type(e).__name__) from e
		except (UnicodeDecodeError, LookupError) as e:
			# Undecodable body or an unknown charset in Content-Type
			logger.warning(f"Could not decode {url}: {e}")
			raise FetchError(url, f"could not decode page: {e}") from e
