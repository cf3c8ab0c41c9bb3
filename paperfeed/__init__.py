"""paperfeed - preprint feed aggregation for arXiv, bioRxiv and medRxiv."""

from .cache import CacheEntry, TTLCache
from .detail import DetailLookup
from .errors import FeedParseError, InvalidRequest, PaperfeedError, UpstreamFetchError
from .fetcher import FeedFetcher
from .matcher import filter_papers, matches_keywords
from .models import Paper, PaperSource, SearchOutcome, SearchQuery, SearchResponse, SearchStatus
from .search import SearchService

__version__ = "0.1.0"

__all__ = [
    "CacheEntry",
    "TTLCache",
    "FeedFetcher",
    "SearchService",
    "DetailLookup",
    "Paper",
    "PaperSource",
    "SearchQuery",
    "SearchResponse",
    "SearchOutcome",
    "SearchStatus",
    "matches_keywords",
    "filter_papers",
    "PaperfeedError",
    "InvalidRequest",
    "UpstreamFetchError",
    "FeedParseError",
]
