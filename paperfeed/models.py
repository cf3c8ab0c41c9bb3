"""Data models for paperfeed."""

from enum import Enum, IntEnum
from typing import Optional, Union

from pydantic import BaseModel, Field


class PaperSource(str, Enum):
    """Upstream preprint server a paper came from."""
    ARXIV = "arxiv"
    BIORXIV = "biorxiv"
    MEDRXIV = "medrxiv"


class Paper(BaseModel):
    """
    Canonical paper record produced by every parser.

    ``publish_date`` keeps whatever representation the source emitted
    (RFC-822 for RSS, ISO-8601-like for Atom/JSON).
    """

    title: str
    link: str
    abstract: str = ""
    authors: list[str] = []
    categories: list[str] = []
    publish_date: str = Field(default="", alias="publishDate")
    announce_type: str = Field(default="new", alias="announceType")
    source: PaperSource
    guid: Optional[str] = None          # OAI id (arXiv) or DOI (bioRxiv/medRxiv)
    publisher: Optional[str] = None     # medRxiv only

    class Config:
        use_enum_values = True
        populate_by_name = True


def _split_param(value: Union[str, list[str], None]) -> list[str]:
    """Accept a list or a comma-separated string; drop empty items."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [v.strip() for v in value if v and v.strip()]


class SearchQuery(BaseModel):
    """One search request. Never persisted."""

    categories: list[str] = []
    subfield: Optional[str] = None
    keywords: list[str] = []
    limit: Optional[int] = Field(default=None, ge=0)

    @classmethod
    def from_params(
        cls,
        category: Union[str, list[str], None] = None,
        categories: Union[str, list[str], None] = None,
        keywords: Union[str, list[str], None] = None,
        limit: Optional[int] = None,
        subfield: Optional[str] = None,
    ) -> "SearchQuery":
        """
        Build a query from loosely-typed request parameters.

        ``category`` (bioRxiv/medRxiv style) and ``categories`` (arXiv style)
        are merged; both accept lists or comma-separated strings.
        """
        merged = _split_param(categories) + _split_param(category)
        return cls(
            categories=merged,
            subfield=(subfield or "").strip() or None,
            keywords=_split_param(keywords),
            limit=limit,
        )

    def category_codes(self) -> list[str]:
        """
        Categories with the sub-field applied.

        ``cs`` + subfield ``AI`` becomes ``cs.AI``; codes that already carry
        a sub-field are left alone.
        """
        if not self.subfield:
            return list(self.categories)
        return [c if "." in c else f"{c}.{self.subfield}" for c in self.categories]


class SearchResponse(BaseModel):
    """Envelope returned by every search endpoint."""

    papers: list[Paper] = []
    total_results: int = Field(default=0, alias="totalResults")
    matched_results: int = Field(default=0, alias="matchedResults")
    errors: list[str] = []

    class Config:
        populate_by_name = True


class SearchStatus(IntEnum):
    """Outcome of a search, valued as the matching HTTP status."""
    OK = 200
    INVALID_REQUEST = 400
    FAILED = 500


class SearchOutcome(BaseModel):
    """Status plus envelope, handed to the HTTP layer."""

    status: SearchStatus
    response: SearchResponse

    @classmethod
    def ok(cls, papers: list[Paper], total: int) -> "SearchOutcome":
        return cls(
            status=SearchStatus.OK,
            response=SearchResponse(
                papers=papers,
                total_results=total,
                matched_results=len(papers),
            ),
        )

    @classmethod
    def invalid(cls, *messages: str) -> "SearchOutcome":
        return cls(status=SearchStatus.INVALID_REQUEST, response=SearchResponse(errors=list(messages)))

    @classmethod
    def failed(cls, message: str) -> "SearchOutcome":
        return cls(status=SearchStatus.FAILED, response=SearchResponse(errors=[message]))
