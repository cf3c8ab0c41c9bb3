"""Date helpers for feed URL selection."""

from datetime import date, datetime, timedelta


# Standard format constants
DATE_FORMAT = "%Y-%m-%d"
ARXIV_DAY_FORMAT = "%Y%m%d"

SATURDAY = 5
SUNDAY = 6
FRIDAY = 4


def current_date() -> date:
    """Server-local calendar date."""
    return datetime.now().date()


def now_iso() -> str:
    """Current datetime as ISO format string."""
    return datetime.now().isoformat()


def format_date(day: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return day.strftime(DATE_FORMAT)


def is_weekend(day: date) -> bool:
    """True on Saturday and Sunday."""
    return day.weekday() in (SATURDAY, SUNDAY)


def last_completed_workweek(day: date) -> tuple[date, date]:
    """
    Monday and Friday of the most recently completed Monday-Friday week.

    A week counts as completed once its Friday is in the past, so on a
    Friday this returns the previous week.

    Args:
        day: Reference date

    Returns:
        (monday, friday)
    """
    days_since_friday = (day.weekday() - FRIDAY) % 7 or 7
    friday = day - timedelta(days=days_since_friday)
    monday = friday - timedelta(days=4)
    return monday, friday


def trailing_window(day: date, days: int = 7) -> tuple[date, date]:
    """(day - days, day), both inclusive."""
    return day - timedelta(days=days), day
