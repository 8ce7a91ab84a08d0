"""Line-by-line processing pipelines for each operating mode.

This module wires the parser, format interpreter, dedup gate, classifier
and liveness probe together:

- EndpointCleaner: render, dedup and classify; emit kept URLs
- DeadEndpointFinder: dedup and probe; emit archive URLs for dead endpoints
- FormatRenderer: render each URL with a format string
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Optional, TextIO

from urlsieve.core.config import SieveConfig
from urlsieve.core.constants import (
    BLACKLISTED_EXTENSIONS,
    BLACKLISTED_PATH_FRAGMENTS,
    OperatingMode,
    ProbeStatus,
)
from urlsieve.core.exceptions import InputStreamError, URLParseError
from urlsieve.core.models import ProbeResult
from urlsieve.classifier.classifier import EndpointClassifier, clean_output
from urlsieve.classifier.deduper import URLDedupGate, build_seen_key
from urlsieve.classifier.formatter import render_all
from urlsieve.classifier.parser import DomainResolver, URLView
from urlsieve.prober.base import LivenessProbe, archive_url


logger = logging.getLogger(__name__)

Emit = Callable[[str], None]


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from a text stream without their line terminators.

    Args:
        stream: Input stream, usually stdin

    Yields:
        Lines with trailing ``\\r\\n`` or ``\\n`` removed

    Raises:
        InputStreamError: If reading from the stream fails
    """
    try:
        for line in stream:
            yield line.rstrip("\r\n")
    except (OSError, UnicodeDecodeError) as e:
        raise InputStreamError(f"failed to read input: {e}") from e


@dataclass
class RunStats:
    """Counters for a single run."""
    lines: int = 0
    parse_failures: int = 0
    duplicates: int = 0
    suppressed: int = 0
    probed: int = 0
    flagged: int = 0
    emitted: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "lines": self.lines,
            "parse_failures": self.parse_failures,
            "duplicates": self.duplicates,
            "suppressed": self.suppressed,
            "probed": self.probed,
            "flagged": self.flagged,
            "emitted": self.emitted,
        }


class LineProcessor(ABC):
    """Shared parsing and dedup state for the pipelines.

    The dedup gate is the only state that outlives a line. It is owned by
    one processor and touched only from the thread driving it.
    """

    mode: OperatingMode

    def __init__(
        self,
        config: SieveConfig,
        *,
        resolver: Optional[DomainResolver] = None,
        gate: Optional[URLDedupGate] = None,
    ):
        """Initialize LineProcessor.

        Args:
            config: Run configuration
            resolver: DomainResolver instance (creates default if None)
            gate: URLDedupGate instance (creates empty one if None)
        """
        self.config = config
        self.resolver = resolver or DomainResolver()
        self.gate = gate or URLDedupGate()
        self.stats = RunStats()

    def parse(self, line: str) -> Optional[URLView]:
        """Parse a line, returning None for parse failures."""
        self.stats.lines += 1
        try:
            return URLView.from_string(line, self.resolver)
        except URLParseError as e:
            self.stats.parse_failures += 1
            logger.info(str(e))
            return None

    def _claim(self, key: str) -> bool:
        """Check the gate for ``key``; count it as a duplicate if refused."""
        if self.gate.should_process(key, self.config.unique):
            return True
        self.stats.duplicates += 1
        return False

    def _record(self, key: str) -> None:
        if self.config.unique:
            self.gate.record(key)

    @abstractmethod
    def process(self, line: str) -> list[str]:
        """Turn one input line into the values to emit.

        Args:
            line: Raw input line without its terminator

        Returns:
            Values to emit, possibly empty
        """
        pass

    def run(self, lines: Iterable[str], emit: Emit) -> RunStats:
        """Process every line and emit the outputs in input order.

        Raises:
            InputStreamError: If ``lines`` fails while reading
        """
        for line in lines:
            for output in self.process(line):
                self.stats.emitted += 1
                emit(output)

        logger.debug(f"{self.mode.value} run finished: {self.stats.to_dict()}")
        return self.stats


class EndpointCleaner(LineProcessor):
    """Emit URLs whose rendered path is not noise.

    Per line: parse, render the format string, check the dedup gate,
    classify, strip cache-busting suffixes, emit, then record the key.
    """

    mode = OperatingMode.CLEAN

    def __init__(
        self,
        config: SieveConfig,
        *,
        classifier: Optional[EndpointClassifier] = None,
        resolver: Optional[DomainResolver] = None,
        gate: Optional[URLDedupGate] = None,
    ):
        super().__init__(config, resolver=resolver, gate=gate)
        self.classifier = classifier or EndpointClassifier(
            path_fragments=[*BLACKLISTED_PATH_FRAGMENTS, *config.extra_path_fragments],
            extensions=[*BLACKLISTED_EXTENSIONS, *config.extra_extensions],
        )

    def process(self, line: str) -> list[str]:
        """Process one input line.

        Returns:
            Cleaned URLs to emit (empty if the line is dropped)
        """
        view = self.parse(line)
        if view is None:
            return []

        outputs = []
        for rendered in render_all(view, self.config.format):
            # empty paths are common for bare hosts
            if not rendered:
                continue

            key = build_seen_key(rendered, view.parsed)
            if not self._claim(key):
                continue

            verdict = self.classifier.classify_path(rendered)
            if verdict.suppressed:
                self.stats.suppressed += 1
                continue

            outputs.append(clean_output(str(view)))
            self._record(key)

        return outputs


class FormatRenderer(LineProcessor):
    """Emit the rendered format string for every URL."""

    mode = OperatingMode.FORMAT

    def process(self, line: str) -> list[str]:
        view = self.parse(line)
        if view is None:
            return []

        outputs = []
        for rendered in render_all(view, self.config.format):
            if not rendered or not self._claim(rendered):
                continue
            outputs.append(rendered)
            self._record(rendered)

        return outputs


class DeadEndpointFinder(LineProcessor):
    """Probe endpoints and emit archive URLs for those not alive.

    A fixed pool of worker coroutines drains a bounded queue fed by the
    reader. Output order follows probe completion, not input order.
    """

    mode = OperatingMode.PROBE

    def __init__(
        self,
        config: SieveConfig,
        probe: LivenessProbe,
        *,
        resolver: Optional[DomainResolver] = None,
        gate: Optional[URLDedupGate] = None,
    ):
        super().__init__(config, resolver=resolver, gate=gate)
        self.probe = probe

    def process(self, line: str) -> list[str]:
        """Return the URLs from ``line`` that still need probing.

        Keys are recorded here, when the URL is handed to a worker, so a
        repeated URL is never probed twice.
        """
        view = self.parse(line)
        if view is None:
            return []

        url = str(view)
        if not self._claim(url):
            return []

        self._record(url)
        return [url]

    async def run_async(self, lines: Iterable[str], emit: Emit) -> RunStats:
        """Probe every accepted URL with bounded concurrency.

        Raises:
            InputStreamError: If ``lines`` fails while reading
        """
        queue: asyncio.Queue[Optional[str]] = asyncio.Queue(
            maxsize=self.config.concurrency * 2
        )
        workers = [
            asyncio.create_task(self._worker(queue, emit))
            for _ in range(self.config.concurrency)
        ]

        iterator = iter(lines)
        try:
            while True:
                # read in a thread so slow producers don't stall in-flight probes
                line = await asyncio.to_thread(next, iterator, None)
                if line is None:
                    break
                for url in self.process(line):
                    await queue.put(url)
        finally:
            for _ in workers:
                await queue.put(None)
            await asyncio.gather(*workers)

        logger.debug(f"{self.mode.value} run finished: {self.stats.to_dict()}")
        return self.stats

    def run(self, lines: Iterable[str], emit: Emit) -> RunStats:
        """Synchronous entry point for ``run_async``."""
        return asyncio.run(self._run_and_close(lines, emit))

    async def _run_and_close(self, lines: Iterable[str], emit: Emit) -> RunStats:
        async with self.probe:
            return await self.run_async(lines, emit)

    async def _worker(self, queue: "asyncio.Queue[Optional[str]]", emit: Emit) -> None:
        while True:
            url = await queue.get()
            try:
                if url is None:
                    return
                try:
                    result = await self.probe.check(url)
                except Exception as e:
                    # a crashed check is not a confirmation of liveness
                    logger.error(f"Probe crashed for {url}: {e}")
                    result = ProbeResult(
                        url=url,
                        status=ProbeStatus.ERROR,
                        error=str(e) or type(e).__name__,
                    )
                self.stats.probed += 1
                if result.flagged:
                    self.stats.flagged += 1
                    self.stats.emitted += 1
                    emit(archive_url(result.url))
            finally:
                queue.task_done()
