"""Core utilities for paperfeed."""

from .dates import (
    DATE_FORMAT,
    current_date,
    format_date,
    is_weekend,
    last_completed_workweek,
    now_iso,
    trailing_window,
)
from .io import load_json, save_json

__all__ = [
    # I/O
    "load_json",
    "save_json",
    # Dates
    "current_date",
    "now_iso",
    "format_date",
    "is_weekend",
    "last_completed_workweek",
    "trailing_window",
    "DATE_FORMAT",
]
