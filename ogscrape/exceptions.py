"""Exception hierarchy for ogscrape."""


class OgScrapeError(Exception):
    """Base class for ogscrape errors."""

    pass


class NetworkError(OgScrapeError):
    """Raised when the request fails before a response arrives."""

    def __init__(self, url: str, cause: BaseException):
        super().__init__(f"Request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class HttpStatusError(OgScrapeError):
    """Raised when the server answers with anything but 200."""

    def __init__(self, url: str, code: int):
        super().__init__(f"Request failed with HTTP status code: {code}")
        self.url = url
        self.code = code


class ConfigError(OgScrapeError):
    """Raised when a config file or OGSCRAPE_* variable holds a bad value."""

    def __init__(self, message: str, key: str = None, source: str = None):
        super().__init__(message)
        self.key = key
        self.source = source
