"""arXiv source: daily RSS feed on weekdays, Atom search API on weekends."""

import re
from datetime import date
from typing import Any, Optional
from urllib.parse import quote, urlencode

from ..core.dates import ARXIV_DAY_FORMAT, is_weekend, last_completed_workweek
from ..models import Paper, PaperSource, SearchQuery
from .base import FeedSource, text_value

RSS_URL = "https://rss.arxiv.org/rss/"
API_URL = "http://export.arxiv.org/api/query"
DEFAULT_PAGE_SIZE = 500

_ARXIV_ID_PATTERNS = [
    # oai:arXiv.org:2503.02283v1
    re.compile(r"oai:arXiv\.org:(\S+)", re.IGNORECASE),
    # https://arxiv.org/abs/2503.02283v1
    re.compile(r"arxiv\.org/abs/([^\s?#]+)", re.IGNORECASE),
]


def extract_arxiv_id(text: str) -> Optional[str]:
    """
    Extract an arXiv id from an OAI identifier or an abstract-page URL.

    Returns:
        The id, or None for unrecognised formats
    """
    if not text:
        return None
    for pattern in _ARXIV_ID_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).rstrip("/")
    return None


def _select_link(links: list[dict]) -> str:
    """Prefer the abstract page, then the PDF, then whatever comes first."""
    if not links:
        return ""
    alternate = next((l for l in links if l.get("rel") == "alternate"), None)
    pdf = next((l for l in links if l.get("title") == "pdf"), None)
    chosen = alternate or pdf or links[0]
    return chosen.get("href", "") or ""


class ArxivSource(FeedSource):
    """Parser and URL builder for arXiv."""

    name = PaperSource.ARXIV
    label = "arXiv"
    applies_limit = True
    missing_category_message = "At least one category is required"

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        self.page_size = page_size

    # ── URLs ────────────────────────────────────────────────

    def build_url(self, query: SearchQuery, today: date) -> str:
        """
        RSS feed for all requested categories (joined with ``+``).

        On Saturday and Sunday the RSS feed is empty, so the search API is
        queried for last Monday 06:00 through Friday 23:59 instead.
        """
        categories = self.validate(query)
        if is_weekend(today):
            return self.build_weekend_url(categories, today)
        return f"{RSS_URL}{'+'.join(categories)}"

    def build_weekend_url(self, categories: list[str], today: date) -> str:
        monday, friday = last_completed_workweek(today)
        cat_query = " OR ".join(f"cat:{c}" for c in categories)
        start = f"{monday.strftime(ARXIV_DAY_FORMAT)}0600"
        end = f"{friday.strftime(ARXIV_DAY_FORMAT)}2359"
        params = {
            "search_query": f"({cat_query}) AND submittedDate:[{start} TO {end}]",
            "start": 0,
            "max_results": self.page_size,
            "sortBy": "submittedDate",
            "sortOrder": "descending",
        }
        return f"{API_URL}?{urlencode(params)}"

    def build_detail_url(self, identifier: str) -> str:
        return f"{API_URL}?id_list={quote(identifier)}"

    def detail_cache_key(self, identifier: str) -> Optional[str]:
        return f"paper_{identifier}"

    def extract_id(self, text: str) -> Optional[str]:
        return extract_arxiv_id(text)

    # ── Parsing ─────────────────────────────────────────────

    def parse_feed(self, payload: Any) -> list[Paper]:
        feed = self._parse_xml(payload)
        entries = feed.get("entries", [])
        if str(feed.get("version", "")).startswith("atom"):
            return self._parse_entries(entries, self.parse_api_entry)
        return self._parse_entries(entries, self.parse_item)

    def parse_item(self, entry: dict) -> Paper:
        """
        Parse an arXiv RSS item.

        arXiv RSS format:
        - description: "arXiv:2503.02283v1 Announce Type: new\\nAbstract: ..."
        - dc:creator: "Author One, Author Two"
        - category: one element per subject
        - arxiv:announce_type: new / cross / replace
        """
        description = text_value(entry.get("summary") or entry.get("description"))
        parts = description.split("Abstract:")
        abstract = parts[1].strip() if len(parts) > 1 else ""

        creators = entry.get("author") or entry.get("dc_creator") or ""
        if isinstance(creators, str):
            creators = [creators]
        authors = [
            name.strip()
            for creator in creators
            for name in text_value(creator).split(", ")
            if name.strip()
        ]

        categories = [
            text_value(tag) for tag in entry.get("tags", []) if text_value(tag)
        ]

        return Paper(
            title=text_value(entry.get("title")).strip(),
            link=text_value(entry.get("link")).strip(),
            abstract=abstract,
            authors=authors,
            categories=categories,
            publish_date=text_value(entry.get("published") or entry.get("pubdate")),
            announce_type=text_value(entry.get("arxiv_announce_type")) or "unknown",
            source=self.name,
            guid=text_value(entry.get("id") or entry.get("guid")) or None,
        )

    def parse_api_entry(self, entry: dict) -> Paper:
        """Parse an Atom entry from the search API; it carries no announce type."""
        categories = [t.get("term") for t in entry.get("tags", []) if t.get("term")]
        authors = [a.get("name") for a in entry.get("authors", []) if a.get("name")]

        return Paper(
            title=text_value(entry.get("title")).strip(),
            link=_select_link(entry.get("links", [])),
            abstract=text_value(entry.get("summary")).strip(),
            authors=authors,
            categories=categories,
            publish_date=text_value(entry.get("published")),
            announce_type="new",
            source=self.name,
            guid=text_value(entry.get("id")) or None,
        )

    def parse_detail(self, payload: Any) -> Optional[Paper]:
        feed = self._parse_xml(payload)
        entries = feed.get("entries", [])
        if not entries:
            return None
        entry = entries[0]
        # Unknown ids come back as a single "Error" entry
        if "/api/errors" in text_value(entry.get("id")):
            return None
        return self.parse_api_entry(entry)
