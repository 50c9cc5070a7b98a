"""
Fetcher exceptions.

Fetchers and the HTTP primitive raise these for consistent error handling.
They never escape BaseFetcher.fetch(); the base class turns them into a
failure reason on the FetchOutcome.
"""


class FetcherError(Exception):
    """Base exception for all fetcher errors."""

    pass


class UpstreamError(FetcherError):
    """Upstream unreachable, timed out, or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(FetcherError):
    """Upstream answered but the payload could not be parsed."""

    pass
