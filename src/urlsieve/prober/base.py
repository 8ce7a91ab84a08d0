"""Base interface for liveness probes.

A probe checks whether an endpoint still answers. Endpoints that are not
confirmed alive are reported with a Wayback Machine URL so their last
archived copy can be inspected.
"""

from abc import ABC, abstractmethod

from urlsieve.core.constants import ARCHIVE_PREFIX
from urlsieve.core.models import ProbeResult


def archive_url(url: str) -> str:
    """Build the archival-snapshot URL for ``url``."""
    return f"{ARCHIVE_PREFIX}{url}"


class LivenessProbe(ABC):
    """Abstract base class for liveness probes.

    Implementations must never raise for network failures; those are
    reported as ``ProbeStatus.ERROR`` results.
    """

    name: str = "base"

    @abstractmethod
    async def check(self, url: str) -> ProbeResult:
        """Check whether ``url`` is reachable.

        Args:
            url: Absolute URL to check

        Returns:
            ProbeResult with ALIVE, DEAD or ERROR status
        """
        pass

    async def aclose(self) -> None:
        """Release resources held by the probe."""
        pass

    async def __aenter__(self) -> "LivenessProbe":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
