"""Constants used throughout urlsieve.

This module contains enums, default values, and static blacklists
to ensure consistency across the application.
"""

from enum import Enum


class OperatingMode(Enum):
    """Mutually exclusive processing modes."""
    CLEAN = "clean"
    PROBE = "probe"
    FORMAT = "format"


class Verdict(Enum):
    """Classification verdict for a rendered path."""
    KEEP = "keep"
    SUPPRESS = "suppress"


class SuppressReason(Enum):
    """Why a rendered path was suppressed.

    Members are declared in reporting precedence order.
    """
    UUID = "is_uuid"
    CONTENT_HASH = "is_content_hash"
    BLACKLISTED_SUBSTRING = "matches_blacklisted_substring"
    BLACKLISTED_EXTENSION = "matches_blacklisted_extension"
    NONE = "none"


class ProbeStatus(Enum):
    """Outcome of a liveness probe."""
    ALIVE = "alive"
    DEAD = "dead"
    ERROR = "error"


# Scheme assumed for inputs such as "example.com/login"
DEFAULT_SCHEME = "http"

# Directive string rendered when no --format is given
DEFAULT_FORMAT = "%p"

# Path fragments that mark static or editorial content
BLACKLISTED_PATH_FRAGMENTS = (
    "assets/frontend",
    "assets/static",
    "assets/vendor",
    "/fonts/",
    "article/",
    "/blog/",
)

# Extension tokens matched as substrings of the path's extension
BLACKLISTED_EXTENSIONS = (
    "jpeg", "png", "svg", "jpg", "ico", "swf", "gif",
    "woff", "ttf", "scss", "css", ".eot",
)

# Cosmetic cleanup applied to emitted URLs, in order
VERSION_QUERY_PATTERN = r"\?v=.*?$"
FRAGMENT_PATTERN = r"#.*?$"

# Hex digest lengths accepted as content hashes (SHA-256, possibly truncated by two digits)
MIN_HASH_LENGTH = 62
MAX_HASH_LENGTH = 64

# Wayback Machine prefix; the fixed timestamp resolves to the closest snapshot
ARCHIVE_PREFIX = "https://web.archive.org/web/20060102150405if_/"


# Application-wide defaults
DEFAULTS = {
    "format": DEFAULT_FORMAT,
    "unique": True,
    "verbose": False,
    "concurrency": 20,
    "timeout": 10.0,
    "follow_redirects": True,
}
