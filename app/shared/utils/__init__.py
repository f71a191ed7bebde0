"""Shared utilities: datetime helpers."""

from app.shared.utils.datetime import ensure_utc, parse_client_timestamp, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
    "parse_client_timestamp",
]
