"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime

from app.core.constants import CLIENT_TIMESTAMP_FORMAT


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes
    (some drivers hand back naive values).
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_client_timestamp(value: str) -> datetime:
    """
    Parse a request-body timestamp in the "YYYY-MM-DD HH:MM:SS" layout as UTC.

    Raises:
        ValueError: If value does not match the layout. The message names the
            expected layout so it can be returned to the client as-is.
    """
    try:
        parsed = datetime.strptime(value, CLIENT_TIMESTAMP_FORMAT)
    except ValueError as e:
        raise ValueError(
            f"invalid time format, expected {CLIENT_TIMESTAMP_FORMAT!r}, got {value!r}"
        ) from e
    return parsed.replace(tzinfo=UTC)
