"""UTC date helpers for persisted records.

Dates are written as ISO-8601 with millisecond precision and a `Z` suffix,
e.g. `1970-01-01T00:00:00.000Z`.
"""

from __future__ import annotations

from datetime import UTC, datetime


def format_date_time(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    millis = value.microsecond // 1000
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"


def parse_date_time(text: str) -> datetime:
    """Parse an ISO-8601 string into an aware UTC datetime.

    Naive values are assumed to already be UTC.
    """

    parsed = datetime.fromisoformat(text.strip())
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def normalize_date_time(value: datetime) -> datetime:
    """Return `value` as aware UTC at the millisecond precision it is persisted with."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)
