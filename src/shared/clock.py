"""Datetime helpers.

Aggregates are created with timezone-aware UTC timestamps, but SQL
providers hand them back naive. Comparisons go through ``naive_utc`` so
both kinds can be mixed.
"""

from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC)


def naive_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` as a naive datetime expressed in UTC."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value
