"""Core data models for urlsieve.

This module defines the data structures passed between the parser,
format interpreter, classifier, deduplication gate and liveness probe.
"""

from dataclasses import dataclass
from typing import Optional

from urlsieve.core.constants import ProbeStatus, SuppressReason, Verdict


# ============================================================================
# URL Models
# ============================================================================

@dataclass(frozen=True)
class ParsedURL:
    """A URL split into its components.

    Components are kept as they appeared in the input. ``host`` may still
    carry the port (``example.com:8443``); use ``hostname`` and ``port``
    for the separated values.
    """
    scheme: str
    userinfo: Optional[str]                 # None when no "@" was given
    host: str
    path: str                               # Escaped path
    raw_query: str = ""
    fragment: str = ""

    @property
    def has_userinfo(self) -> bool:
        """Check if the authority carried a userinfo section."""
        return self.userinfo is not None

    @property
    def hostname(self) -> str:
        """Host without port; IPv6 brackets are removed."""
        host, _ = _split_host_port(self.host)
        return host

    @property
    def port(self) -> str:
        """Port as written, or empty string if none was given."""
        _, port = _split_host_port(self.host)
        return port

    def __str__(self) -> str:
        out = f"{self.scheme}:" if self.scheme else ""
        if self.scheme or self.host or self.userinfo is not None:
            out += "//"
            if self.userinfo is not None:
                out += f"{self.userinfo}@"
            out += self.host
        out += self.path
        if self.raw_query:
            out += f"?{self.raw_query}"
        if self.fragment:
            out += f"#{self.fragment}"
        return out


def _split_host_port(host: str) -> tuple[str, str]:
    """Split ``host[:port]`` into hostname and port.

    A trailing ``:`` with no digits yields an empty port.
    """
    colon = host.rfind(":")
    if colon != -1 and (colon > host.rfind("]")):
        port = host[colon + 1:]
        if port == "" or port.isdigit():
            host = host[:colon]
        else:
            port = ""
    else:
        port = ""

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    return host, port


@dataclass(frozen=True)
class DomainParts:
    """Public-suffix-aware split of a hostname.

    For ``sub.example.co.uk``: subdomain ``sub``, root ``example``,
    tld ``co.uk``.
    """
    subdomain: str = ""
    root: str = ""
    tld: str = ""


# ============================================================================
# Classification Models
# ============================================================================

@dataclass(frozen=True)
class ClassificationVerdict:
    """Result of classifying a rendered path."""
    verdict: Verdict
    reason: SuppressReason = SuppressReason.NONE
    detail: str = ""                        # Segment, fragment or extension that matched

    @classmethod
    def keep(cls) -> "ClassificationVerdict":
        return cls(verdict=Verdict.KEEP)

    @classmethod
    def suppress(cls, reason: SuppressReason, detail: str = "") -> "ClassificationVerdict":
        return cls(verdict=Verdict.SUPPRESS, reason=reason, detail=detail)

    @property
    def kept(self) -> bool:
        """Check if the value survives classification."""
        return self.verdict is Verdict.KEEP

    @property
    def suppressed(self) -> bool:
        """Check if the value is noise."""
        return self.verdict is Verdict.SUPPRESS


# ============================================================================
# Probe Models
# ============================================================================

@dataclass(frozen=True)
class ProbeResult:
    """Result of a liveness check against a single URL."""
    url: str
    status: ProbeStatus
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def flagged(self) -> bool:
        """Check if the endpoint was not confirmed alive."""
        return self.status is not ProbeStatus.ALIVE
