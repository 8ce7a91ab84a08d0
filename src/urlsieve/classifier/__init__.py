"""URL parsing, rendering, classification, and deduplication.

This package provides the endpoint-filtering core:
- URLView: Named fields of a parsed URL, with public-suffix-aware domain parts
- render: Format-string interpreter projecting a URLView into a string
- EndpointClassifier: Suppress content-addressed names and static assets
- URLDedupGate: Suppress endpoints already emitted during a run
"""

from urlsieve.classifier.parser import DomainResolver, URLView, parse_url
from urlsieve.classifier.formatter import render, render_all
from urlsieve.classifier.classifier import EndpointClassifier, clean_output
from urlsieve.classifier.deduper import URLDedupGate, build_seen_key

__all__ = [
    "DomainResolver",
    "URLView",
    "parse_url",
    "render",
    "render_all",
    "EndpointClassifier",
    "clean_output",
    "URLDedupGate",
    "build_seen_key",
]
