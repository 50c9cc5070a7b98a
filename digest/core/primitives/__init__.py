"""
Primitives — atomic building blocks for the aggregation pipeline.

Each primitive does ONE thing well.
Source fetchers compose the HTTP fetcher with extractors.
"""

from digest.core.primitives.exceptions import FetcherError, ParseError, UpstreamError
from digest.core.primitives.fetcher import (
    ContentType,
    Fetcher,
    FetcherConfig,
    FetchResult,
)

__all__ = [
    "ContentType",
    "Fetcher",
    "FetcherConfig",
    "FetcherError",
    "FetchResult",
    "ParseError",
    "UpstreamError",
]
