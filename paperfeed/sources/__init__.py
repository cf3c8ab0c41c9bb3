"""Feed sources - one per preprint server."""

from typing import Optional

from ..errors import InvalidRequest
from ..models import PaperSource
from .arxiv import ArxivSource, extract_arxiv_id
from .base import FeedSource
from .rxiv import BiorxivSource, MedrxivSource, extract_doi, strip_cdata

__all__ = [
    "FeedSource",
    "ArxivSource",
    "BiorxivSource",
    "MedrxivSource",
    "extract_arxiv_id",
    "extract_doi",
    "strip_cdata",
    "default_sources",
    "get_source",
]


def default_sources(arxiv_page_size: Optional[int] = None) -> dict[str, FeedSource]:
    """Source name -> instance, for all supported servers."""
    arxiv = ArxivSource(arxiv_page_size) if arxiv_page_size else ArxivSource()
    return {
        PaperSource.ARXIV.value: arxiv,
        PaperSource.BIORXIV.value: BiorxivSource(),
        PaperSource.MEDRXIV.value: MedrxivSource(),
    }


def get_source(name: str, sources: Optional[dict[str, FeedSource]] = None) -> FeedSource:
    """
    Look up a source by name.

    Raises:
        InvalidRequest: unknown source name
    """
    registry = sources if sources is not None else default_sources()
    source = registry.get((name or "").lower())
    if source is None:
        raise InvalidRequest(f"Unknown source: {name}")
    return source
