"""UTC time helpers shared by services and storage backends."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_instant(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')


def parse_instant(value: str) -> datetime:
    """
    Parse an ISO-8601 string into an aware UTC datetime.

    Naive values are assumed to already be UTC.
    """
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
