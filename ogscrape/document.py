"""
Read-only view over a parsed HTML page.

Wraps a BeautifulSoup tree and exposes only the queries the extractor
needs: the root element's attributes, meta elements, the page title and
the first image.
"""
from typing import Dict, Iterator, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

PARSER = "html.parser"


def _attributes(tag: Tag) -> Dict[str, str]:
    """Copy a tag's attributes, joining multi-valued ones into one string."""
    attrs = {}
    for name, value in tag.attrs.items():
        if isinstance(value, list):
            value = " ".join(value)
        attrs[name] = value
    return attrs


class Document:
    """
    A parsed HTML document.

    Attribute names are lower-cased by the parser; values are kept
    verbatim. Every accessor returns copies, so callers cannot modify
    the underlying tree.
    """

    def __init__(self, html: str):
        self._soup = BeautifulSoup(html, PARSER)

    def root_attributes(self) -> Optional[Dict[str, str]]:
        """
        Attributes of the first ``html`` element in declaration order.

        Returns:
            Attribute mapping, or None if the document has no html element
        """
        html = self._soup.find("html")
        if html is None:
            return None
        return _attributes(html)

    def iter_meta(self) -> Iterator[Dict[str, str]]:
        """Attributes of every meta element, in document order."""
        for tag in self._soup.find_all("meta"):
            yield _attributes(tag)

    def title_text(self) -> Optional[str]:
        title = self._soup.find("title")
        if title is None:
            return None
        return title.get_text()

    def first_image_attributes(self) -> Optional[Dict[str, str]]:
        img = self._soup.find("img")
        if img is None:
            return None
        return _attributes(img)
