"""
ogscrape - Open Graph metadata scraper

Fetches a web page and extracts its Open Graph ``<meta property="og:...">``
tags into a nested dict.

Example Usage:
    >>> import ogscrape
    >>> meta = ogscrape.scrape("example.com")
    >>> meta["title"]
    >>> ogscrape.extract(html, strict=True)
"""
from typing import Optional

__version__ = "0.1.0"
__author__ = "ogscrape Contributors"

from ogscrape.config import OgConfig, get_config, init_config
from ogscrape.document import Document
from ogscrape.extractor import (
    ExtractOptions,
    Extractor,
    ExtractorSettings,
    extract,
)
from ogscrape.exceptions import ConfigError, HttpStatusError, NetworkError, OgScrapeError
from ogscrape.fetcher import Fetcher, normalize_url
from ogscrape.tree import MetaTree, insert


def scrape(
    url: str,
    options: Optional[ExtractOptions] = None,
    fetcher: Optional[Fetcher] = None,
    extractor: Optional[Extractor] = None,
) -> Optional[MetaTree]:
    """
    Fetch ``url`` and extract its Open Graph metadata.

    Args:
        url: Page URL; ``http://`` is assumed when no scheme is given
        options: Extraction options
        fetcher: Fetcher to use (default: a Fetcher with default settings)
        extractor: Extractor to use (default: Open Graph vocabulary)

    Returns:
        Nested metadata mapping, or None in strict mode when the page
        declares no Open Graph namespace

    Raises:
        NetworkError: If the page could not be downloaded
        HttpStatusError: If the server did not answer 200
    """
    html = (fetcher or Fetcher()).fetch(url)
    return (extractor or Extractor()).extract(html, options)


__all__ = [
    # Entry points
    "scrape",
    "extract",
    # Components
    "Fetcher",
    "Extractor",
    "ExtractorSettings",
    "ExtractOptions",
    "Document",
    "MetaTree",
    "insert",
    "normalize_url",
    # Errors
    "OgScrapeError",
    "NetworkError",
    "HttpStatusError",
    "ConfigError",
    # Config
    "OgConfig",
    "get_config",
    "init_config",
]
