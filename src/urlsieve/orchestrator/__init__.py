"""Orchestrator module for stream processing.

This module provides the per-line pipelines behind each operating mode,
including endpoint cleaning, dead-endpoint probing, and format rendering.
"""

from urlsieve.orchestrator.pipeline import (
    DeadEndpointFinder,
    EndpointCleaner,
    FormatRenderer,
    LineProcessor,
    RunStats,
    read_lines,
)


__all__ = [
    "DeadEndpointFinder",
    "EndpointCleaner",
    "FormatRenderer",
    "LineProcessor",
    "RunStats",
    "read_lines",
]
