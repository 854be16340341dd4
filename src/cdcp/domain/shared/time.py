"""UTC helpers; every timestamp in the service is timezone-aware UTC."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Attach UTC to naive values, as SQLite returns them without an offset."""
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)
