"""
Date helpers shared by the list handler, notifications and the page controller.
"""

from datetime import datetime, timezone
from typing import Optional


def parse_dt(val: Optional[str]) -> Optional[datetime]:
    """
    Safely parse an ISO-8601 or datetime-local string to a datetime object.

    Args:
        val (str): The date string to parse.

    Returns:
        datetime: The parsed datetime, or None if invalid.
    """
    if not val or not isinstance(val, str):
        return None
    try:
        # Handles 'YYYY-MM-DD', 'YYYY-MM-DDTHH:MM' and '...Z' or '...+00:00'
        if val.endswith('Z'):
            val = val[:-1] + '+00:00'
        return datetime.fromisoformat(val)
    except (ValueError, TypeError):
        return None


def to_utc(dt: datetime) -> datetime:
    """Naive values are taken to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_date(val: Optional[str]) -> str:
    """
    Human readable form, e.g. 'Saturday, March 1, 2025, 06:00 PM'.
    Unparsable input is returned unchanged.
    """
    dt = parse_dt(val)
    if dt is None:
        return str(val) if val else ""
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def utc_now_iso() -> str:
    """Current UTC time as '2025-03-01T18:00:00.000Z'."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
