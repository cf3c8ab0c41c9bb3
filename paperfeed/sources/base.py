"""Base class for preprint feed sources."""

import io
import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Callable, Iterable, Optional

import feedparser

from ..errors import FeedParseError, InvalidRequest
from ..models import Paper, PaperSource, SearchQuery

logger = logging.getLogger(__name__)


class FeedSource(ABC):
    """
    One upstream preprint server.

    Subclasses know how to build the URL for a query, turn the fetched
    payload into ``Paper`` records, and look up a single paper.
    """

    # 子类覆盖
    name: PaperSource
    label: str = ""
    # Only arXiv truncates matched results to the requested limit
    applies_limit: bool = False
    missing_category_message = "A category is required"
    # Detail payloads are JSON for bioRxiv/medRxiv, Atom for arXiv
    detail_is_json: bool = False

    def validate(self, query: SearchQuery) -> list[str]:
        """
        Return the category codes to query.

        Raises:
            InvalidRequest: no category given
        """
        categories = query.category_codes()
        if not categories:
            raise InvalidRequest(self.missing_category_message)
        return categories

    @abstractmethod
    def build_url(self, query: SearchQuery, today: date) -> str:
        """Upstream URL for ``query`` as of ``today``. Never performs I/O."""

    @abstractmethod
    def parse_feed(self, payload: Any) -> list[Paper]:
        """Parse a fetched feed/collection payload into papers."""

    @abstractmethod
    def parse_item(self, entry: dict) -> Paper:
        """Parse one feed item."""

    @abstractmethod
    def build_detail_url(self, identifier: str) -> str:
        """URL returning a single paper."""

    @abstractmethod
    def parse_detail(self, payload: Any) -> Optional[Paper]:
        """Parse a single-paper payload; None when the paper is absent."""

    @abstractmethod
    def extract_id(self, text: str) -> Optional[str]:
        """Pull this source's identifier out of a URL or id string."""

    def detail_cache_key(self, identifier: str) -> Optional[str]:
        """Cache key for detail lookups; None caches by URL."""
        return None

    def parse_error(self) -> FeedParseError:
        return FeedParseError(f"Error parsing {self.label} feed. The feed format may have changed.")

    def _parse_xml(self, payload: Any) -> feedparser.FeedParserDict:
        """
        Run feedparser over raw XML text.

        Raises:
            FeedParseError: payload is not a recognisable RSS/RDF/Atom document
        """
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        if not isinstance(payload, bytes):
            raise self.parse_error()

        feed = feedparser.parse(io.BytesIO(payload))
        # HTML error pages and empty bodies parse without bozo but carry no version
        if not feed.get("version"):
            logger.error(
                f"{self.label} feed parse error: not an RSS/RDF/Atom document "
                f"(bozo_exception={feed.get('bozo_exception')})"
            )
            raise self.parse_error()
        return feed

    def _parse_entries(
        self,
        entries: Iterable[dict],
        parse: Callable[[dict], Paper],
    ) -> list[Paper]:
        """Parse every entry; a broken entry is logged and skipped."""
        papers = []
        for entry in entries:
            try:
                papers.append(parse(entry))
            except Exception as e:
                logger.warning(f"Skipping malformed {self.label} item: {e}")
        return papers


def text_value(value: Any) -> str:
    """
    Flatten a feed field to a string.

    Feed fields arrive as plain strings, as ``{"value": ...}`` / ``{"_": ...}``
    mappings for structured elements, or as lists of either.
    """
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return text_value(value[0]) if value else ""
    if isinstance(value, dict):
        for key in ("value", "_", "term", "name"):
            if key in value:
                return text_value(value[key])
        return ""
    return str(value)
