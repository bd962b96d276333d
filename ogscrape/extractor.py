"""
Open Graph metadata extraction.

Turns HTML text into a MetaTree (see ``ogscrape.tree``). The extractor
works on text it is handed and never touches the network, so it can be
used on pages that were downloaded some other way.

Example:
    >>> extract('<html><head><meta property="og:title" content="Hi"></head></html>')
    {'title': 'Hi'}
"""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, NamedTuple, Optional

from .constants import (
    DEFAULT_NAMESPACE,
    OG_SCHEMA_URL,
    SHORTHAND_PROPERTIES,
    XMLNS_PREFIX,
)
from .document import Document
from .tree import MetaTree, insert

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractOptions:
    """Per-call extraction options."""

    # Return None instead of assuming the default namespace
    strict: bool = False
    # Fill in title and image from <title> and <img> when no OG tag sets them
    fallbacks: bool = True


@dataclass(frozen=True)
class ExtractorSettings:
    """Static vocabulary an Extractor is built with."""

    default_namespace: str = DEFAULT_NAMESPACE
    schema_url: str = OG_SCHEMA_URL
    shorthands: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(SHORTHAND_PROPERTIES))
    )


class MetaProperty(NamedTuple):
    """A meta element accepted for insertion."""

    path: str
    content: str


class Extractor:
    """
    Extract Open Graph properties from HTML.

    Args:
        settings: Namespace and shorthand configuration (default: Open Graph)
    """

    def __init__(self, settings: Optional[ExtractorSettings] = None):
        self.settings = settings or ExtractorSettings()

    def extract(self, html: str, options: Optional[ExtractOptions] = None) -> Optional[MetaTree]:
        """
        Extract Open Graph metadata from an HTML string.

        Args:
            html: Page source
            options: Extraction options (default: lenient, with fallbacks)

        Returns:
            Nested mapping of properties, or None when ``options.strict`` is
            set and the page does not declare the Open Graph namespace

        Raises:
            TypeError: If html is not a string
        """
        if not isinstance(html, str):
            raise TypeError(f"html must be a str, not {type(html).__name__}")
        options = options or ExtractOptions()

        document = Document(html)
        root = document.root_attributes()
        if root is None and options.strict:
            logger.debug("No <html> element, strict mode: giving up")
            return None

        namespace = self.discover_namespace(root) if root is not None else None
        if namespace is None:
            if options.strict:
                logger.debug("No Open Graph namespace declared, strict mode: giving up")
                return None
            namespace = self.settings.default_namespace
        logger.debug(f"Using namespace '{namespace}'")

        meta: MetaTree = {}
        for attrs in document.iter_meta():
            prop = self.read_property(attrs, namespace)
            if prop is None:
                continue
            insert(meta, prop.path, prop.content)

        if options.fallbacks:
            self._apply_fallbacks(meta, document)

        return meta

    def discover_namespace(self, root_attrs: Mapping[str, str]) -> Optional[str]:
        """
        Find the prefix bound to the Open Graph schema by an xmlns attribute.

        Args:
            root_attrs: Attributes of the html element, in declaration order

        Returns:
            The declared prefix, or None if there is no matching declaration
        """
        for name, value in root_attrs.items():
            if not name.startswith(XMLNS_PREFIX):
                continue
            if value.lower() == self.settings.schema_url:
                return name[len(XMLNS_PREFIX):]
        return None

    def read_property(self, attrs: Mapping[str, str], namespace: str) -> Optional[MetaProperty]:
        """
        Decide whether a meta element carries a property in ``namespace``.

        Args:
            attrs: The meta element's attributes
            namespace: Active namespace prefix

        Returns:
            The expanded property path and its content, or None to skip
        """
        prop = attrs.get("property")
        prefix = namespace + ":"
        if not prop or not prop.startswith(prefix):
            return None

        path = prop[len(prefix):]
        path = self.settings.shorthands.get(path, path)
        return MetaProperty(path=path, content=attrs.get("content") or "")

    def _apply_fallbacks(self, meta: MetaTree, document: Document) -> None:
        if "title" not in meta:
            meta["title"] = document.title_text() or ""

        if "image" not in meta:
            img = document.first_image_attributes()
            if img is not None:
                image: Dict[str, str] = {"url": img.get("src") or ""}
                # Only copy dimensions the <img> actually declares
                for dimension in ("width", "height"):
                    if img.get(dimension):
                        image[dimension] = img[dimension]
                meta["image"] = image


_default_extractor = Extractor()


def extract(html: str, options: Optional[ExtractOptions] = None, **kwargs) -> Optional[MetaTree]:
    """
    Extract Open Graph metadata with the default extractor.

    Keyword arguments (``strict``, ``fallbacks``) build ExtractOptions when
    ``options`` is not given.
    """
    if options is None:
        options = ExtractOptions(**kwargs)
    return _default_extractor.extract(html, options)
