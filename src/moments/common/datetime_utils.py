from datetime import datetime, timezone, tzinfo
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parses an ISO-8601 string or a unix epoch number into an aware datetime.
    Returns None for anything that cannot be interpreted.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_aware(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def one_year_before(now: datetime) -> datetime:
    """Same calendar date one year earlier (Feb 29 maps to Feb 28)."""
    try:
        return now.replace(year=now.year - 1)
    except ValueError:
        return now.replace(year=now.year - 1, day=28)


def local_calendar(dt: Optional[datetime], tz: tzinfo, now: datetime) -> datetime:
    # Missing timestamps are grouped as if they happened "now".
    value = dt if dt is not None else now
    return ensure_aware(value).astimezone(tz)
