"""Error types raised by the feed ingestion layer."""

from typing import Optional


class PaperfeedError(Exception):
    """Base class for all paperfeed errors."""


class InvalidRequest(PaperfeedError, ValueError):
    """Caller input is unusable (e.g. no category). Raised before any I/O."""


class UpstreamFetchError(PaperfeedError):
    """A feed/API host answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FeedParseError(PaperfeedError):
    """Upstream payload did not have the expected XML/JSON shape."""
