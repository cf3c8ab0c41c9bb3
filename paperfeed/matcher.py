"""Keyword matching over title + abstract."""

from typing import Iterable

from .models import Paper


def matches_keywords(paper: Paper, keywords: list[str]) -> bool:
    """
    Case-insensitive OR substring match.

    An empty keyword list matches every paper.
    """
    if not keywords:
        return True

    search_text = f"{paper.title} {paper.abstract}".lower()
    return any(keyword.lower() in search_text for keyword in keywords)


def filter_papers(papers: Iterable[Paper], keywords: list[str]) -> list[Paper]:
    """Keep papers matching ``keywords``, preserving feed order."""
    return [p for p in papers if matches_keywords(p, keywords)]
