"""UTC time helpers shared by the domain and persistence layers."""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


def utc_after(delta: timedelta) -> datetime:
    """Point in time ``delta`` from now, used for token expiry."""
    return utc_now() + delta


def ensure_tz_aware(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
