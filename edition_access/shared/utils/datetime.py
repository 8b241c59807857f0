"""Timezone-aware UTC helpers for grant and delegate expiry."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize dt to aware UTC; naive values are taken to be UTC already.

    SQLite hands back naive datetimes even for timezone=True columns, so
    entities pass stored expiry values through here before comparing them
    with utc_now().
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
