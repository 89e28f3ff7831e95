"""Documentation scraping: class catalog, page fetching and content extraction."""

from .catalog import CatalogBuilder, CatalogCache, parse_class_index
from .content import extract_content, html_to_markdown
from .fetcher import PageFetcher
from .models import Catalog, ClassRecord
from .service import DocsService

__all__ = [
	"Catalog",
	"CatalogBuilder",
	"CatalogCache",
	"ClassRecord",
	"DocsService",
	"PageFetcher",
	"extract_content",
	"html_to_markdown",
	"parse_class_index",
]
