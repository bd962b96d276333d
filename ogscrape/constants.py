"""
Constants for ogscrape.

These constants are used by various modules for sensible defaults.
Most network values can also be set through the config system.
"""

# Scheme used when a URL is given without one
DEFAULT_PROTOCOL = "http"

# Network timeouts (in seconds)
DEFAULT_REQUEST_TIMEOUT = 10

# requests' own redirect ceiling
DEFAULT_MAX_REDIRECTS = 30

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ogscrape/0.1)"

# Open Graph vocabulary
DEFAULT_NAMESPACE = "og"
OG_SCHEMA_URL = "http://opengraphprotocol.org/schema/"
XMLNS_PREFIX = "xmlns:"

SHORTHAND_PROPERTIES = {
    "image": "image:url",
    "video": "video:url",
    "audio": "audio:url",
}
