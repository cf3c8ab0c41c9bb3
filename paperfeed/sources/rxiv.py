"""bioRxiv/medRxiv sources.

Official API documentation: https://api.biorxiv.org/

Weekdays read the per-subject RSS (RDF) feed. On weekends bioRxiv switches
to the JSON details API over the trailing 7 days; medRxiv always stays on
RSS.
"""

import re
from datetime import date
from typing import Any, Optional
from urllib.parse import quote

from ..core.dates import format_date, is_weekend, trailing_window
from ..models import Paper, PaperSource, SearchQuery
from .base import FeedSource, text_value

_CDATA_PATTERN = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)

# biorxiv.org/content/10.1101/2025.03.01.641017v1
_CONTENT_URL_DOI = re.compile(r"(?:bio|med)rxiv\.org/content/([\d.]+/[\d.]+)", re.IGNORECASE)
# 10.1101/2025.03.01.641017 (and the newer 10.64898/ prefix)
_RAW_DOI = re.compile(r"(10\.(?:1101|64898)/[\d.]+)")


def strip_cdata(text: Any) -> str:
    """Replace ``<![CDATA[...]]>`` wrappers with their inner text."""
    return _CDATA_PATTERN.sub(r"\1", text_value(text)).strip()


def extract_doi(source: str) -> Optional[str]:
    """
    Extract a DOI from a content-page URL or a raw DOI string.

    Returns:
        DOI without version suffix, or None if not found
    """
    if not source:
        return None
    for pattern in (_CONTENT_URL_DOI, _RAW_DOI):
        match = pattern.search(source)
        if match:
            return match.group(1).rstrip(".")
    return None


def _parse_authors(authors_str: str, sep: str) -> list[str]:
    """Split an author string ("Smith, J.; Jones, A.") on ``sep``."""
    if not authors_str:
        return []
    return [a.strip() for a in authors_str.split(sep) if a.strip()]


class BiorxivSource(FeedSource):
    """Parser and URL builder for bioRxiv."""

    name = PaperSource.BIORXIV
    label = "bioRxiv"
    server = "biorxiv"
    detail_is_json = True

    # 子类可覆盖
    supports_weekend = True
    weekend_window_days = 7
    captures_publisher = False
    missing_title = ""
    missing_abstract = ""

    @property
    def rss_url(self) -> str:
        return f"https://connect.{self.server}.org/{self.server}_xml.php?subject="

    @property
    def api_url(self) -> str:
        return f"https://api.{self.server}.org/details/{self.server}"

    @property
    def content_url(self) -> str:
        return f"https://www.{self.server}.org/content/"

    # ── URLs ────────────────────────────────────────────────

    def build_url(self, query: SearchQuery, today: date) -> str:
        category = self.validate(query)[0]
        if self.supports_weekend and is_weekend(today):
            # Date-range API has no subject filter; results span all categories
            start, end = trailing_window(today, self.weekend_window_days)
            return self.build_date_range_url(format_date(start), format_date(end))
        return f"{self.rss_url}{quote(category)}"

    def build_date_range_url(self, start_date: str, end_date: str, cursor: int = 0) -> str:
        """API endpoint: /details/{server}/{start}/{end}/{cursor}"""
        return f"{self.api_url}/{start_date}/{end_date}/{cursor}"

    def build_detail_url(self, identifier: str) -> str:
        return f"{self.api_url}/{identifier}"

    def extract_id(self, text: str) -> Optional[str]:
        return extract_doi(text)

    # ── Parsing ─────────────────────────────────────────────

    def parse_feed(self, payload: Any) -> list[Paper]:
        if isinstance(payload, dict):
            return self._parse_entries(self._collection(payload), self.parse_record)
        feed = self._parse_xml(payload)
        return self._parse_entries(feed.get("entries", []), self.parse_item)

    def parse_item(self, entry: dict) -> Paper:
        """
        Parse a bioRxiv/medRxiv RSS entry.

        RSS格式:
        - title / description: may still carry CDATA markers
        - dc:creator: 作者 (逗号分隔)
        - dc:identifier: doi:10.1101/2025.01.01.123456
        - prism:section: subject label (often empty)
        - dc:publisher: medRxiv only
        """
        creator = strip_cdata(entry.get("author") or entry.get("dc_creator"))
        identifier = text_value(entry.get("dc_identifier")).strip()
        guid = identifier.replace("doi:", "", 1).strip() if identifier else ""
        section = strip_cdata(entry.get("prism_section"))

        publisher = None
        if self.captures_publisher:
            publisher = strip_cdata(entry.get("publisher") or entry.get("dc_publisher")) or None

        return Paper(
            title=strip_cdata(entry.get("title")) or self.missing_title,
            link=text_value(entry.get("link")).strip(),
            abstract=strip_cdata(entry.get("summary") or entry.get("description")) or self.missing_abstract,
            authors=_parse_authors(creator, ","),
            categories=[section or "Unknown"],
            publish_date=text_value(
                entry.get("dc_date") or entry.get("updated") or entry.get("published")
            ),
            announce_type="new",
            source=self.name,
            guid=guid or None,
            publisher=publisher,
        )

    def parse_record(self, record: dict) -> Paper:
        """
        Parse one record of the JSON details API.

        API returns authors as "Smith, J.; Jones, A.; Wang, B."
        """
        doi = text_value(record.get("doi")).strip()
        version = text_value(record.get("version")).strip()
        category = text_value(record.get("category")).strip()

        return Paper(
            title=text_value(record.get("title")).strip(),
            link=f"{self.content_url}{doi}v{version}" if doi else "",
            abstract=text_value(record.get("abstract")).strip(),
            authors=_parse_authors(text_value(record.get("authors")), ";"),
            categories=[category] if category else [],
            publish_date=text_value(record.get("date")),
            announce_type=text_value(record.get("type")) or "new",
            source=self.name,
            guid=doi or None,
        )

    def parse_detail(self, payload: Any) -> Optional[Paper]:
        if not isinstance(payload, dict):
            raise self.parse_error()
        collection = self._collection(payload)
        if not collection:
            return None
        return self.parse_record(collection[0])

    def _collection(self, payload: dict) -> list[dict]:
        collection = payload.get("collection") or []
        if not isinstance(collection, list):
            raise self.parse_error()
        return collection


class MedrxivSource(BiorxivSource):
    """
    medRxiv: same formats as bioRxiv, plus the publisher field.

    No weekend branch; the live RSS feed is used every day.
    """

    name = PaperSource.MEDRXIV
    label = "medRxiv"
    server = "medrxiv"

    supports_weekend = False
    captures_publisher = True
    missing_title = "No title available"
    missing_abstract = "No abstract available"
