"""Clock helpers. All domain timestamps are aware datetimes in UTC."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Attach UTC to naive values (SQLite drops the offset on read)."""
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)
