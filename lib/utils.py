# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time in ISO 8601 format, as stored in timestamp columns."""
    return utc_now().isoformat()


def days_ago_iso(days: int, now: datetime | None = None) -> str:
    """
    ISO timestamp `days` days before now.

    Example:
        since = days_ago_iso(10)  # lookback bound for created_at filters
    """
    now = now or utc_now()
    return (now - timedelta(days=days)).isoformat()


def days_ago_date(days: int, today: date | None = None) -> str:
    """YYYY-MM-DD date `days` days before today, for DATE columns."""
    today = today or utc_now().date()
    return (today - timedelta(days=days)).isoformat()


def file_extension(filename: str) -> str:
    """
    Lower-cased extension of a filename including the dot.

    Returns "" when the filename has no extension.
    """
    if "." not in filename:
        return ""
    return "." + filename.rsplit(".", 1)[-1].lower()


def local_today(tz_name: str, now: datetime | None = None) -> date:
    """
    Calendar date in the named IANA timezone.

    Example:
        local_today("Africa/Accra")  # the floor's "today" for code prefixes
    """
    now = now or utc_now()
    return now.astimezone(ZoneInfo(tz_name)).date()
