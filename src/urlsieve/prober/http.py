from __future__ import annotations

import logging
from typing import Optional

import httpx

from urlsieve.core.constants import DEFAULTS, ProbeStatus
from urlsieve.core.exceptions import ProbeError
from urlsieve.core.models import ProbeResult
from urlsieve.prober.base import LivenessProbe


logger = logging.getLogger(__name__)


class HttpLivenessProbe(LivenessProbe):
    name = "http"

    def __init__(
        self,
        *,
        timeout: float = DEFAULTS["timeout"],
        follow_redirects: bool = DEFAULTS["follow_redirects"],
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if timeout <= 0:
            raise ProbeError(f"timeout must be positive, got {timeout}")
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=self.follow_redirects,
            )
        return self._client

    async def check(self, url: str) -> ProbeResult:
        client = self._get_client()

        try:
            response = await client.head(url)
        except httpx.TimeoutException:
            logger.debug(f"Probe timed out after {self.timeout}s: {url}")
            return ProbeResult(url=url, status=ProbeStatus.ERROR, error="timeout")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Probe failed for {url}: {e}")
            return ProbeResult(url=url, status=ProbeStatus.ERROR, error=str(e) or type(e).__name__)

        status_code = response.status_code
        if 200 <= status_code <= 299:
            logger.debug(f"Alive ({status_code}): {url}")
            return ProbeResult(url=url, status=ProbeStatus.ALIVE, status_code=status_code)

        logger.debug(f"Dead ({status_code}): {url}")
        return ProbeResult(url=url, status=ProbeStatus.DEAD, status_code=status_code)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
