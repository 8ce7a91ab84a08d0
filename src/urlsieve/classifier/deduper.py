"""Intra-run deduplication of rendered endpoints.

This module keeps the set of keys already emitted during one run. A key
is the rendered path followed by the sorted names of the URL's query
parameters, so ``/search?q=a`` and ``/search?q=b`` collapse into one
endpoint while ``/search?q=a&page=2`` stays distinct.
"""

from urllib.parse import parse_qsl

from urlsieve.core.models import ParsedURL


def query_param_names(parsed: ParsedURL) -> list[str]:
    """Get the sorted, distinct query parameter names of a URL.

    For ``/?one=1&two=2&three=3`` this returns ``["one", "three", "two"]``.

    Args:
        parsed: Parsed URL

    Returns:
        Sorted list of parameter names
    """
    if not parsed.raw_query:
        return []

    pairs = parse_qsl(parsed.raw_query, keep_blank_values=True)
    return sorted({name for name, _ in pairs})


def build_seen_key(rendered: str, parsed: ParsedURL) -> str:
    """Build the dedup key for a rendered value.

    Args:
        rendered: Rendered path (or other format output)
        parsed: URL the value was rendered from

    Returns:
        Rendered value followed by the ``&``-joined parameter names
    """
    return rendered + "&".join(query_param_names(parsed))


class URLDedupGate:
    """Track keys seen during a run.

    Keys are never evicted; memory grows with the number of distinct
    keys. Not thread-safe: use from the single processing thread only.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def should_process(self, key: str, unique: bool) -> bool:
        """Check whether a key should be processed.

        Args:
            key: Dedup key
            unique: Whether uniqueness mode is enabled

        Returns:
            False if unique mode is on and the key was recorded before
        """
        if not unique:
            return True
        return key not in self._seen

    def record(self, key: str) -> None:
        """Remember a key as processed."""
        self._seen.add(key)

    def __contains__(self, key: object) -> bool:
        return key in self._seen

    def __len__(self) -> int:
        return len(self._seen)
