"""Credit-gated abstract simplification."""

import logging
from typing import Awaitable, Callable, Optional

from .credits import CreditLedger
from .detail import DetailLookup
from .errors import InvalidRequest, PaperfeedError
from .llm import simplify_abstract
from .models import PaperSource

logger = logging.getLogger(__name__)


class NoCreditsRemaining(PaperfeedError):
    """User has no credits left."""


class AbstractUnavailable(PaperfeedError):
    """The paper's abstract could not be fetched."""


class AbstractSimplifier:
    """
    Look up a paper abstract and rewrite it in plain language.

    A credit is checked before any upstream work and spent only after the
    text was generated.
    """

    def __init__(
        self,
        lookup: DetailLookup,
        ledger: CreditLedger,
        simplify: Callable[[str], Awaitable[str]] = simplify_abstract,
    ):
        self.lookup = lookup
        self.ledger = ledger
        self.simplify = simplify

    async def run(
        self,
        user_id: str,
        arxiv_id: Optional[str] = None,
        doi: Optional[str] = None,
        source: Optional[str] = None,
    ) -> str:
        """
        Args:
            user_id: Authenticated user
            arxiv_id: arXiv id / OAI identifier / abs URL
            doi: bioRxiv or medRxiv DOI
            source: "medrxiv" routes DOIs to medRxiv; anything else to bioRxiv

        Returns:
            Simplified text

        Raises:
            InvalidRequest: neither identifier given
            NoCreditsRemaining: balance is zero or no record exists
            AbstractUnavailable: lookup found nothing
        """
        if not arxiv_id and not doi:
            raise InvalidRequest("Missing paper identifier (arXiv ID or DOI)")

        if not self.ledger.has_credits(user_id):
            raise NoCreditsRemaining("No credits remaining")

        if arxiv_id:
            abstract = await self.lookup.fetch_abstract(PaperSource.ARXIV.value, arxiv_id)
        else:
            server = PaperSource.MEDRXIV if source == PaperSource.MEDRXIV.value else PaperSource.BIORXIV
            abstract = await self.lookup.fetch_abstract(server.value, doi)

        if not abstract:
            raise AbstractUnavailable("Could not fetch paper abstract")

        text = await self.simplify(abstract)

        remaining = self.ledger.use_credit(user_id)
        if remaining is None:
            # Text is already generated; the balance ran out concurrently
            logger.warning(f"Credit for {user_id} could not be decremented after simplification")
        return text
