from urlsieve.prober.base import LivenessProbe, archive_url
from urlsieve.prober.http import HttpLivenessProbe

__all__ = [
    "LivenessProbe",
    "HttpLivenessProbe",
    "archive_url",
]
