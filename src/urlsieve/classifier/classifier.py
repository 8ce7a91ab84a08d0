"""Endpoint classification for noise suppression.

This module decides whether a rendered path is worth keeping. Paths are
suppressed when one of their segments is a content-addressed name (a UUID
or a hex digest), when they sit under a known static-asset location, or
when their extension marks an image, font or stylesheet.
"""

import logging
import re
from typing import Iterable, Optional

from urlsieve.core.constants import (
    BLACKLISTED_EXTENSIONS,
    BLACKLISTED_PATH_FRAGMENTS,
    FRAGMENT_PATTERN,
    MAX_HASH_LENGTH,
    MIN_HASH_LENGTH,
    SuppressReason,
    VERSION_QUERY_PATTERN,
)
from urlsieve.core.models import ClassificationVerdict


logger = logging.getLogger(__name__)

_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
    r"|[0-9a-fA-F]{32}"
)
_HEX_RE = re.compile(r"[0-9a-fA-F]+")

_CLEANUP_PATTERNS = [
    re.compile(VERSION_QUERY_PATTERN),
    re.compile(FRAGMENT_PATTERN),
]


# ============================================================================
# Segment Validators
# ============================================================================

def is_uuid(segment: str) -> bool:
    """Check if a path segment is a UUID.

    Accepts the canonical 8-4-4-4-12 hyphenated form (36 characters) and
    the 32-digit hex form. Braced and URN forms are not path names and
    are rejected.

    Args:
        segment: Single path segment

    Returns:
        True if segment is a UUID, False otherwise
    """
    if len(segment) not in (32, 36):
        return False
    return _UUID_RE.fullmatch(segment) is not None


def is_content_hash(segment: str) -> bool:
    """Check if a path segment is a hex content digest.

    The digest may stand alone or follow a dash-separated prefix, as in
    ``constants-d28d2546...``. SHA-256 digests of 62 to 64
    hex digits are accepted; 40-digit SHA-1 ids are not.

    Args:
        segment: Single path segment

    Returns:
        True if segment is or ends with a content hash, False otherwise
    """
    digest = segment.rpartition("-")[2]
    if not MIN_HASH_LENGTH <= len(digest) <= MAX_HASH_LENGTH:
        return False
    return _HEX_RE.fullmatch(digest) is not None


def split_extension(path: str) -> tuple[str, str]:
    """Split a path into the value without extension and the extension.

    The extension starts at the final dot of the final ``/`` segment and
    includes the dot. Paths without one return an empty extension.

    Args:
        path: Rendered path, e.g. ``/static/app.min.js``

    Returns:
        Tuple of (stripped path, extension), e.g. (``/static/app.min``, ``.js``)
    """
    last_segment = path.rpartition("/")[2]
    dot = last_segment.rfind(".")
    if dot == -1:
        return path, ""

    extension = last_segment[dot:]
    return path[:-len(extension)], extension


def clean_output(url: str) -> str:
    """Strip a trailing ``?v=...`` version string and ``#...`` fragment.

    Args:
        url: Fully rendered URL about to be emitted

    Returns:
        URL without cache-busting suffixes
    """
    for pattern in _CLEANUP_PATTERNS:
        url = pattern.sub("", url)
    return url


# ============================================================================
# Classifier
# ============================================================================

class EndpointClassifier:
    """Classify rendered paths as KEEP or SUPPRESS.

    Checks run in reporting precedence order: UUID, content hash,
    blacklisted substring, blacklisted extension. The first match decides
    the reported reason.
    """

    def __init__(
        self,
        *,
        path_fragments: Optional[Iterable[str]] = None,
        extensions: Optional[Iterable[str]] = None,
    ):
        """Initialize EndpointClassifier.

        Args:
            path_fragments: Substrings marking noise paths (defaults to built-ins)
            extensions: Extension tokens marking noise files (defaults to built-ins)
        """
        self.path_fragments = list(
            BLACKLISTED_PATH_FRAGMENTS if path_fragments is None else path_fragments
        )
        self.extensions = list(
            BLACKLISTED_EXTENSIONS if extensions is None else extensions
        )

    def classify(self, stripped_value: str, extension: str = "") -> ClassificationVerdict:
        """Classify a path whose extension has already been removed.

        Args:
            stripped_value: Rendered path without its file extension
            extension: The removed extension, including its dot

        Returns:
            ClassificationVerdict with the first matching reason
        """
        segments = stripped_value.split("/")

        for segment in segments:
            if is_uuid(segment):
                return self._suppress(stripped_value, SuppressReason.UUID, segment)

        for segment in segments:
            if is_content_hash(segment):
                return self._suppress(stripped_value, SuppressReason.CONTENT_HASH, segment)

        for fragment in self.path_fragments:
            if fragment in stripped_value:
                return self._suppress(
                    stripped_value, SuppressReason.BLACKLISTED_SUBSTRING, fragment
                )

        if extension:
            for token in self.extensions:
                if token in extension:
                    return self._suppress(
                        stripped_value, SuppressReason.BLACKLISTED_EXTENSION, extension
                    )

        return ClassificationVerdict.keep()

    def classify_path(self, path: str) -> ClassificationVerdict:
        """Split the extension off ``path`` and classify it.

        Args:
            path: Rendered path, e.g. ``/assets/frontend/app.css``

        Returns:
            ClassificationVerdict
        """
        stripped, extension = split_extension(path)
        return self.classify(stripped, extension)

    def is_noise(self, path: str) -> bool:
        """Check if a rendered path should be suppressed."""
        return self.classify_path(path).suppressed

    def _suppress(
        self,
        value: str,
        reason: SuppressReason,
        detail: str,
    ) -> ClassificationVerdict:
        logger.debug("Suppressed %s (%s: %s)", value, reason.value, detail)
        return ClassificationVerdict.suppress(reason, detail)
