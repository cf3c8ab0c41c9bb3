"""Upstream fetcher with TTL caching."""

import logging
import re
from typing import Any, Optional

import httpx

from .cache import TTLCache
from .errors import FeedParseError, UpstreamFetchError

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; paperfeed/0.1)"
}
DEFAULT_TIMEOUT = 30.0

# api.biorxiv.org/details/biorxiv/2025-03-01/2025-03-08/0
_JSON_API_PATH = re.compile(r"api\.(?:bio|med)rxiv\.org/details/")
_DATE_SEGMENT = re.compile(r"/\d{4}-\d{2}-\d{2}(?:/|$)")


def is_json_endpoint(url: str) -> bool:
    """True for bioRxiv/medRxiv date-range API URLs, which answer in JSON."""
    return bool(_JSON_API_PATH.search(url) and _DATE_SEGMENT.search(url))


class FeedFetcher:
    """
    GET upstream feeds, serving repeated URLs from a ``TTLCache``.

    Only successful responses are cached, so a failed fetch is retried
    from scratch on the next request.
    """

    def __init__(
        self,
        cache: TTLCache,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[dict[str, str]] = None,
    ):
        self.cache = cache
        self.timeout = timeout
        self.headers = headers or HEADERS
        self._client = client

    async def fetch(
        self,
        url: str,
        as_json: Optional[bool] = None,
        cache_key: Optional[str] = None,
    ) -> Any:
        """
        Fetch ``url``, returning text (XML feeds) or decoded JSON.

        Args:
            url: Upstream URL
            as_json: Force JSON decoding; None infers it from the URL shape
            cache_key: Cache under this key instead of the URL

        Returns:
            Raw text or parsed JSON payload

        Raises:
            UpstreamFetchError: transport failure or non-2xx status
            FeedParseError: JSON endpoint returned an undecodable body
        """
        key = cache_key or url
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Cache hit for {key}")
            return cached.payload

        if as_json is None:
            as_json = is_json_endpoint(url)

        logger.info(f"Fetching fresh data for: {url}")
        response = await self._get(url)

        if as_json:
            try:
                payload = response.json()
            except ValueError as e:
                raise FeedParseError(f"Invalid JSON from {url}: {e}") from e
        else:
            payload = response.text

        self.cache.put(key, payload)
        return payload

    async def _get(self, url: str) -> httpx.Response:
        try:
            if self._client is not None:
                response = await self._client.get(
                    url, headers=self.headers, follow_redirects=True, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(follow_redirects=True, timeout=self.timeout) as client:
                    response = await client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            raise UpstreamFetchError(f"Failed to fetch feed: {e}", url=url) from e

        if not response.is_success:
            logger.warning(f"HTTP {response.status_code} from {url}")
            raise UpstreamFetchError(
                f"Failed to fetch feed: {response.reason_phrase or response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return response
