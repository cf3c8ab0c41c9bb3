"""Category reference lists used by client-side filters."""

from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

import yaml

from .config import load_settings


@lru_cache(maxsize=4)
def _load_categories(path: str) -> dict:
    file = Path(path)
    if not file.exists():
        return {}
    with open(file, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_categories(path: Union[str, Path, None] = None) -> dict:
    """Load the categories YAML (read-only, cached per path)."""
    return _load_categories(str(path or load_settings()["categories_file"]))


def list_rxiv_categories(server: str, path: Union[str, Path, None] = None) -> list[dict]:
    """
    bioRxiv/medRxiv subjects as ``{value, label}`` pairs, sorted by label.

    ``value`` is the underscore form used in feed URLs; ``label`` falls back
    to the value with underscores replaced by spaces.
    """
    rows = load_categories(path).get(server) or []
    result = [
        {
            "value": row["category"],
            "label": row.get("display_name") or row["category"].replace("_", " "),
        }
        for row in rows
        if row.get("category")
    ]
    result.sort(key=lambda x: x["label"].lower())
    return result


def list_arxiv_categories(
    group: Optional[str] = None,
    path: Union[str, Path, None] = None,
) -> list[dict]:
    """arXiv categories as ``{key, field, description}``, optionally for one group."""
    rows = load_categories(path).get("arxiv") or []
    if group:
        rows = [r for r in rows if r.get("category") == group]
    return [
        {
            "key": r.get("key", ""),
            "field": r.get("field", ""),
            "description": r.get("description", ""),
        }
        for r in rows
    ]
