"""Single-paper lookup by arXiv id or DOI."""

import logging
from typing import Optional

from .fetcher import FeedFetcher
from .models import Paper
from .sources import FeedSource, default_sources, get_source

logger = logging.getLogger(__name__)


class DetailLookup:
    """
    Fetch one paper's record from its source.

    Lookups never raise: a missing paper, a failed fetch or an unparseable
    payload all come back as None, and the details stay in the log.
    """

    def __init__(
        self,
        fetcher: FeedFetcher,
        sources: Optional[dict[str, FeedSource]] = None,
    ):
        self.fetcher = fetcher
        self.sources = sources if sources is not None else default_sources()

    async def fetch_paper(self, source_name: str, identifier: str) -> Optional[Paper]:
        """
        Args:
            source_name: "arxiv", "biorxiv" or "medrxiv"
            identifier: Bare id/DOI, OAI identifier, or paper URL

        Returns:
            Paper or None if not found
        """
        try:
            source = get_source(source_name, self.sources)
            paper_id = source.extract_id(identifier) or identifier.strip()
            if not paper_id:
                return None

            url = source.build_detail_url(paper_id)
            payload = await self.fetcher.fetch(
                url,
                as_json=source.detail_is_json,
                cache_key=source.detail_cache_key(paper_id),
            )
            paper = source.parse_detail(payload)
        except Exception as e:
            logger.warning(f"Error fetching {source_name} paper {identifier!r}: {e}")
            return None

        if paper is None:
            logger.info(f"{source_name} paper {identifier!r} not found")
        return paper

    async def fetch_abstract(self, source_name: str, identifier: str) -> Optional[str]:
        """Abstract text only; None when missing or empty."""
        paper = await self.fetch_paper(source_name, identifier)
        if paper is None or not paper.abstract:
            return None
        return paper.abstract
