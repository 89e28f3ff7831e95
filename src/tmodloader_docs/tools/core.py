"""Core health check tool."""

import json

from mcp.server.fastmcp import FastMCP

from ..config import Config
from ..docs import DocsService


def register_core_tools(mcp: FastMCP, config: Config, service: DocsService) -> None:
	"""Register core tools."""

	@mcp.tool()
	async def health_check() -> str:
		"""
		Check the health of the tmodloader-docs server.
		Returns config paths and the state of the class catalog cache.
		"""
		cache = service.cache
		catalog = cache.catalog
		age = cache.age()
		status = {
			"server": "running",
			"config_dir": str(config.config_dir),
			"log_dir": str(config.log_dir),
			"index_url": config.index_url,
			"catalog": {
				"cached": catalog is not None,
				"fresh": cache.get_fresh() is not None,
				"records": len(catalog) if catalog is not None else 0,
				"age_seconds": round(age, 1) if age is not None else None,
				"ttl_seconds": cache.ttl_seconds,
			},
		}
		return json.dumps(status, indent=2)
