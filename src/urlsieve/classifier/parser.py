"""URL parsing and field decomposition.

This module turns raw input lines into ParsedURL objects and exposes them
through URLView, a read-only view with the named fields the format
interpreter renders. Registrable-domain parts are resolved with public
suffix rules via tldextract.
"""

import re
from functools import cached_property
from typing import Optional
from urllib.parse import quote, unquote, urlsplit

import tldextract

from urlsieve.core.constants import DEFAULT_SCHEME
from urlsieve.core.exceptions import URLParseError
from urlsieve.core.models import DomainParts, ParsedURL


_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Characters left untouched when escaping a path; "%" keeps existing escapes intact
_PATH_SAFE = "/:@!$&'()*+,;=-._~%"


def parse_url(raw: str) -> ParsedURL:
    """Parse a raw input line into a ParsedURL.

    If the line has no scheme, ``http://`` is prepended (``http:`` for
    protocol-relative input) and the result is parsed again.

    Args:
        raw: Raw URL-like string

    Returns:
        ParsedURL with escaped path

    Raises:
        URLParseError: If the line is not a well-formed URL
    """
    if _CONTROL_RE.search(raw):
        raise URLParseError(raw, "invalid control character in URL")

    candidate = raw
    if not _SCHEME_RE.match(raw):
        if raw.startswith("//"):
            candidate = f"{DEFAULT_SCHEME}:{raw}"
        else:
            candidate = f"{DEFAULT_SCHEME}://{raw}"

    try:
        parts = urlsplit(candidate)
    except ValueError as e:
        raise URLParseError(raw, str(e)) from e

    userinfo: Optional[str] = None
    host = parts.netloc
    if "@" in host:
        userinfo, _, host = host.rpartition("@")

    _validate_host(raw, host)

    for component in (parts.path, parts.fragment):
        if _BAD_ESCAPE_RE.search(component):
            raise URLParseError(raw, "invalid URL escape")

    return ParsedURL(
        scheme=parts.scheme.lower(),
        userinfo=userinfo,
        host=host,
        path=quote(parts.path, safe=_PATH_SAFE),
        raw_query=parts.query,
        fragment=parts.fragment,
    )


def _validate_host(raw: str, host: str) -> None:
    """Reject hosts with whitespace, bad escapes or a non-numeric port.

    Raises:
        URLParseError: If host is malformed
    """
    if any(ch.isspace() for ch in host):
        raise URLParseError(raw, "invalid character in host name")

    if _BAD_ESCAPE_RE.search(host):
        raise URLParseError(raw, "invalid URL escape in host")

    colon = host.rfind(":")
    if colon != -1 and colon > host.rfind("]"):
        port = host[colon + 1:]
        if host.startswith("[") and not host[:colon].endswith("]"):
            raise URLParseError(raw, "invalid IPv6 host")
        if port and not port.isdigit():
            raise URLParseError(raw, f"invalid port {':' + port!r} after host")


class DomainResolver:
    """Split hostnames into subdomain, root and TLD.

    Uses the public suffix snapshot bundled with tldextract and never
    fetches the list over the network. Construct one per run and pass it
    to each URLView.
    """

    def __init__(self, extractor: Optional[tldextract.TLDExtract] = None):
        """Initialize DomainResolver.

        Args:
            extractor: TLDExtract instance (creates an offline one if None)
        """
        self.extractor = extractor or tldextract.TLDExtract(
            suffix_list_urls=(),
            cache_dir=None,
        )

    def resolve(self, hostname: str) -> DomainParts:
        """Resolve the domain parts of a hostname (no port).

        Args:
            hostname: Hostname such as ``sub.example.co.uk``

        Returns:
            DomainParts, all empty for an empty hostname
        """
        if not hostname:
            return DomainParts()

        result = self.extractor(hostname)
        return DomainParts(
            subdomain=result.subdomain,
            root=result.domain,
            tld=result.suffix,
        )


class URLView:
    """Read-only named fields of a parsed URL.

    Domain parts are resolved on first access and cached for the lifetime
    of the view, which is one input line.
    """

    def __init__(self, parsed: ParsedURL, resolver: DomainResolver):
        self.parsed = parsed
        self.resolver = resolver

    @classmethod
    def from_string(cls, raw: str, resolver: DomainResolver) -> "URLView":
        """Parse ``raw`` and wrap it in a view.

        Raises:
            URLParseError: If the line is not a well-formed URL
        """
        return cls(parse_url(raw), resolver)

    @property
    def scheme(self) -> str:
        return self.parsed.scheme

    @property
    def userinfo(self) -> str:
        return self.parsed.userinfo or ""

    @property
    def hostname(self) -> str:
        return self.parsed.hostname

    @property
    def port(self) -> str:
        return self.parsed.port

    @property
    def path(self) -> str:
        return self.parsed.path

    @property
    def raw_query(self) -> str:
        return self.parsed.raw_query

    @property
    def fragment(self) -> str:
        """Fragment with percent-escapes decoded."""
        return unquote(self.parsed.fragment)

    @property
    def extension(self) -> str:
        """Text after the last "." of the final path segment, or empty string."""
        parts = self.path.rpartition("/")[2].split(".")
        if len(parts) > 1:
            return parts[-1]
        return ""

    @cached_property
    def domain_parts(self) -> DomainParts:
        return self.resolver.resolve(self.hostname)

    @property
    def subdomain(self) -> str:
        return self.domain_parts.subdomain

    @property
    def root(self) -> str:
        return self.domain_parts.root

    @property
    def tld(self) -> str:
        return self.domain_parts.tld

    @property
    def has_userinfo(self) -> bool:
        return self.parsed.has_userinfo

    @property
    def has_port(self) -> bool:
        return self.port != ""

    @property
    def has_query(self) -> bool:
        return self.raw_query != ""

    @property
    def has_fragment(self) -> bool:
        return self.fragment != ""

    def __str__(self) -> str:
        return str(self.parsed)
