"""Configuration system using platformdirs for cross-platform paths."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urljoin

import platformdirs

from . import __version__

APP_NAME = "tmodloader-docs"
APP_AUTHOR = "tmodloader-docs"

DEFAULT_DOCS_BASE_URL = "https://docs.tmodloader.net/docs/stable/"

# Page extraction, tried in order
DEFAULT_CONTENT_SELECTORS = (".contents", ".textblock", "body")
DEFAULT_STRIP_SELECTORS = ("script", "style", ".footer")


@dataclass
class Config:
	"""Central configuration with XDG/platform conventions."""

	config_dir: Path = field(default_factory=lambda: Path(platformdirs.user_config_dir(APP_NAME)))
	data_dir: Path = field(default_factory=lambda: Path(platformdirs.user_data_dir(APP_NAME)))

	# Derived
	log_dir: Path = field(init=False)
	index_url: str = field(init=False)

	# Remote site
	docs_base_url: str = DEFAULT_DOCS_BASE_URL
	index_page: str = "annotated.html"
	request_timeout: float = 30.0
	user_agent: str = f"tmodloader-docs/{__version__}"

	# Catalog
	cache_ttl_seconds: float = 60 * 60
	indent_unit_px: int = 16
	max_search_results: int = 20

	# Page extraction
	content_selectors: tuple[str, ...] = DEFAULT_CONTENT_SELECTORS
	strip_selectors: tuple[str, ...] = DEFAULT_STRIP_SELECTORS

	def __post_init__(self) -> None:
		self.log_dir = self.data_dir / "logs"
		self.index_url = urljoin(self.docs_base_url, self.index_page)

	def ensure_dirs(self) -> None:
		"""Create all required directories."""
		self.config_dir.mkdir(parents=True, exist_ok=True)
		self.data_dir.mkdir(parents=True, exist_ok=True)
		self.log_dir.mkdir(parents=True, exist_ok=True)


def _apply_env_overrides(config: Config) -> Config:
	"""Apply TMODLOADER_DOCS_* environment variable overrides."""
	path_env = {
		"TMODLOADER_DOCS_CONFIG_DIR": "config_dir",
		"TMODLOADER_DOCS_DATA_DIR": "data_dir",
	}
	for env_key, attr in path_env.items():
		val = os.getenv(env_key)
		if val:
			setattr(config, attr, Path(val))

	val = os.getenv("TMODLOADER_DOCS_BASE_URL")
	if val:
		config.docs_base_url = val

	number_env = {
		"TMODLOADER_DOCS_CACHE_TTL": "cache_ttl_seconds",
		"TMODLOADER_DOCS_REQUEST_TIMEOUT": "request_timeout",
	}
	for env_key, attr in number_env.items():
		val = os.getenv(env_key)
		if val:
			setattr(config, attr, float(val))

	# Recompute derived values after overrides
	config.__post_init__()
	return config


def _apply_toml(config: Config) -> Config:
	"""Apply config.toml overrides if file exists."""
	toml_path = config.config_dir / "config.toml"
	if not toml_path.exists():
		return config

	with open(toml_path, "rb") as f:
		data = tomllib.load(f)

	path_fields = {"config_dir", "data_dir"}
	tuple_fields = {"content_selectors", "strip_selectors"}
	for key, val in data.items():
		if key in ("log_dir", "index_url") or not hasattr(config, key):
			continue
		if key in path_fields:
			setattr(config, key, Path(os.path.expanduser(val)))
		elif key in tuple_fields:
			setattr(config, key, tuple(val))
		else:
			setattr(config, key, val)

	# Recompute derived values after toml overrides
	config.__post_init__()
	return config


def load_config() -> Config:
	"""Load config with precedence: env vars > config.toml > defaults."""
	config = Config()
	config = _apply_env_overrides(config)
	config = _apply_toml(config)
	config = _apply_env_overrides(config)
	config.ensure_dirs()
	return config
