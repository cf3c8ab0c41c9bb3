"""Search orchestration: validate -> build URL -> fetch -> parse -> filter -> limit."""

import logging
from datetime import date
from typing import Callable, Optional

from .core.dates import current_date
from .errors import InvalidRequest, PaperfeedError
from .fetcher import FeedFetcher
from .matcher import filter_papers
from .models import SearchOutcome, SearchQuery
from .sources import FeedSource, default_sources, get_source

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000


class SearchService:
    """
    Runs keyword searches against any ``FeedSource``.

    Validation errors come back as a 400 outcome without touching the
    network; fetch/parse errors come back as a 500 outcome. Nothing is
    raised to the caller.
    """

    def __init__(
        self,
        fetcher: FeedFetcher,
        sources: Optional[dict[str, FeedSource]] = None,
        today: Callable[[], date] = current_date,
        default_limit: int = DEFAULT_LIMIT,
    ):
        self.fetcher = fetcher
        self.sources = sources if sources is not None else default_sources()
        self.today = today
        self.default_limit = default_limit

    async def search(self, source_name: str, query: SearchQuery) -> SearchOutcome:
        """
        Search one source.

        Args:
            source_name: "arxiv", "biorxiv" or "medrxiv"
            query: Categories, keywords and optional limit

        Returns:
            SearchOutcome with status OK / INVALID_REQUEST / FAILED
        """
        try:
            source = get_source(source_name, self.sources)
            source.validate(query)
        except InvalidRequest as e:
            return SearchOutcome.invalid(str(e))

        try:
            url = source.build_url(query, self.today())
            payload = await self.fetcher.fetch(url)
            papers = source.parse_feed(payload)
        except PaperfeedError as e:
            logger.error(f"Error processing {source.label} papers request: {e}")
            return SearchOutcome.failed(str(e))
        except Exception:
            logger.exception(f"Unexpected error processing {source.label} papers request")
            return SearchOutcome.failed(f"Error processing {source.label} papers request")

        matched = filter_papers(papers, query.keywords)
        if source.applies_limit:
            limit = query.limit if query.limit is not None else self.default_limit
            matched = matched[:limit]

        logger.info(
            f"{source.label} search {query.categories} keywords={query.keywords}: "
            f"{len(matched)}/{len(papers)} matched"
        )
        return SearchOutcome.ok(matched, total=len(papers))
