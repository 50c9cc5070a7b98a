"""
Fetcher primitive — downloads content from URLs.

This is an atomic primitive that does ONE thing:
fetch content from a URL and return it in a structured way.
Every source fetcher goes through it, so timeouts and transport errors
surface the same way for all of them.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

import httpx

from digest.core.primitives.exceptions import ParseError, UpstreamError

logger = logging.getLogger(__name__)


class ContentType(StrEnum):
    """Detected content type."""
    HTML = "html"
    JSON = "json"
    XML = "xml"
    TEXT = "text"
    BINARY = "binary"
    UNKNOWN = "unknown"


@dataclass
class FetchResult:
    """Result of fetching a URL."""
    url: str
    status_code: int
    content_type: ContentType
    content: bytes
    text: str | None
    headers: dict[str, str]
    fetched_at: datetime
    elapsed_ms: int
    encoding: str | None = None

    @property
    def ok(self) -> bool:
        """True if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON, raising ParseError on malformed payloads."""
        try:
            return json.loads(self.text if self.text is not None else self.content)
        except (ValueError, TypeError) as e:
            raise ParseError(f"Invalid JSON from {self.url}: {e}") from e


@dataclass
class FetcherConfig:
    """Configuration for Fetcher."""
    timeout: float = 10.0
    # One attempt: a failed source is retried on the next refresh cycle.
    max_retries: int = 1
    retry_delay: float = 1.0
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    extra_headers: dict[str, str] = field(default_factory=dict)
    follow_redirects: bool = True
    verify_ssl: bool = True


class Fetcher:
    """
    Fetches content from URLs.

    Usage:
        fetcher = Fetcher(FetcherConfig(timeout=10.0))
        result = await fetcher.fetch("https://example.com")

        if result.ok:
            print(result.text)

        data = await fetcher.get_json("https://example.com/api.json")
    """

    def __init__(self, config: FetcherConfig | None = None):
        self.config = config or FetcherConfig()

    async def fetch(self, url: str, **kwargs: Any) -> FetchResult:
        """
        Fetch content from URL.

        Raises:
            UpstreamError: On timeout or transport error after all attempts.
        """
        timeout = kwargs.get("timeout", self.config.timeout)
        headers = {
            "User-Agent": self.config.user_agent,
            **self.config.extra_headers,
            **kwargs.get("headers", {}),
        }
        params = kwargs.get("params")

        start_time = datetime.now()

        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=self.config.follow_redirects,
            verify=self.config.verify_ssl,
        ) as client:

            last_error: Exception | None = None

            for attempt in range(self.config.max_retries):
                try:
                    response = await client.get(url, headers=headers, params=params)

                    elapsed_ms = int((datetime.now() - start_time).total_seconds() * 1000)
                    content_type = self._detect_content_type(response)

                    text = None
                    if content_type != ContentType.BINARY:
                        try:
                            text = response.text
                        except (UnicodeDecodeError, LookupError):
                            logger.debug(f"Could not decode body from {url}")

                    return FetchResult(
                        url=str(response.url),
                        status_code=response.status_code,
                        content_type=content_type,
                        content=response.content,
                        text=text,
                        headers=dict(response.headers),
                        fetched_at=datetime.now(),
                        elapsed_ms=elapsed_ms,
                        encoding=response.encoding,
                    )

                except httpx.TimeoutException as e:
                    last_error = e
                    logger.warning(f"Timeout fetching {url}, attempt {attempt + 1}")

                except httpx.RequestError as e:
                    last_error = e
                    logger.warning(f"Error fetching {url}: {e}, attempt {attempt + 1}")

                if attempt < self.config.max_retries - 1:
                    await asyncio.sleep(self.config.retry_delay * (attempt + 1))

            reason = "timed out" if isinstance(last_error, httpx.TimeoutException) else "failed"
            raise UpstreamError(
                f"Request to {url} {reason} after {self.config.max_retries} attempt(s)"
            ) from last_error

    async def get_text(self, url: str, **kwargs: Any) -> str:
        """
        Fetch a URL and return its body text.

        Raises:
            UpstreamError: On transport failure or non-2xx status.
        """
        result = await self.fetch(url, **kwargs)
        if not result.ok:
            raise UpstreamError(
                f"HTTP {result.status_code} from {url}", status_code=result.status_code
            )
        return result.text or ""

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        """
        Fetch a URL and decode its body as JSON.

        Raises:
            UpstreamError: On transport failure or non-2xx status.
            ParseError: If the body is not valid JSON.
        """
        result = await self.fetch(url, **kwargs)
        if not result.ok:
            raise UpstreamError(
                f"HTTP {result.status_code} from {url}", status_code=result.status_code
            )
        return result.json()

    def _detect_content_type(self, response: httpx.Response) -> ContentType:
        """Detect content type from response headers."""
        content_type_header = response.headers.get("content-type", "").lower()

        if "json" in content_type_header:
            return ContentType.JSON
        elif "text/html" in content_type_header:
            return ContentType.HTML
        elif "xml" in content_type_header:
            return ContentType.XML
        elif "text/" in content_type_header:
            return ContentType.TEXT
        elif content_type_header.startswith(("image/", "audio/", "video/")):
            return ContentType.BINARY
        else:
            content = response.content[:100]
            if b"<!DOCTYPE html" in content or b"<html" in content:
                return ContentType.HTML
            elif content.startswith(b"<?xml"):
                return ContentType.XML

            return ContentType.UNKNOWN
