"""
Page fetching for ogscrape.

Downloads a page over HTTP(S) and hands back its body as text. Every call
uses its own requests session, so cookies set during a redirect chain are
kept for that chain and dropped afterwards.
"""
import logging
import time
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

import requests

from .constants import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_PROTOCOL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from .exceptions import HttpStatusError, NetworkError

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    """
    Add the default scheme to a URL that has none and re-serialize it.

    Args:
        url: URL as typed by the user, e.g. ``example.com/page``

    Returns:
        Absolute URL, e.g. ``http://example.com/page``
    """
    url = url.strip()
    if url.startswith("//"):
        url = f"{DEFAULT_PROTOCOL}:{url}"
    else:
        parts = urlsplit(url)
        # "localhost:8080/x" parses with scheme "localhost" and no host
        if not parts.scheme or not parts.netloc:
            url = f"{DEFAULT_PROTOCOL}://{url}"
    return urlunsplit(urlsplit(url))


class Fetcher:
    """Fetch page source for metadata extraction."""

    def __init__(
        self,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        user_agent: Optional[str] = None,
        verify_ssl: bool = True,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: Custom user agent string
            verify_ssl: Verify TLS certificates
            max_redirects: Redirects to follow before giving up
        """
        self.timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.verify_ssl = verify_ssl
        self.max_redirects = max_redirects

    def _new_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            "User-Agent": self.user_agent,
            "Accept-Encoding": "gzip, deflate",
        })
        session.max_redirects = self.max_redirects
        return session

    def fetch(self, url: str) -> str:
        """
        Fetch a page and return its body.

        Args:
            url: Page URL; ``http://`` is assumed when no scheme is given

        Returns:
            Response body decoded as UTF-8

        Raises:
            NetworkError: If the request could not be completed
            HttpStatusError: If the final response status is not 200
        """
        target = normalize_url(url)
        start_time = time.time()

        with self._new_session() as session:
            try:
                response = session.get(
                    target,
                    timeout=self.timeout,
                    allow_redirects=True,
                    verify=self.verify_ssl,
                )
            except requests.TooManyRedirects as e:
                code = e.response.status_code if e.response is not None else 0
                logger.warning(f"Too many redirects for {target}")
                raise HttpStatusError(target, code) from e
            except requests.RequestException as e:
                logger.warning(f"Fetching {target} failed: {e}")
                raise NetworkError(target, e) from e

        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug(f"GET {target} -> {response.status_code} in {elapsed_ms:.0f}ms")

        if response.status_code != 200:
            raise HttpStatusError(target, response.status_code)

        response.encoding = "utf-8"
        return response.text

