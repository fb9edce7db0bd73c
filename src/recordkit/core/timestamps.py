"""
UTC timestamp utilities (stdlib-only).

Timestamps are one of the kinds the record toolkit special-cases: they are
merged as whole values, formatted as wall-clock strings in query maps and
produced as epoch milliseconds by typed-value coercion. The helpers here keep
those conversions in one place.

Features:
    - **utc_now():** Timezone-aware UTC datetime
    - **to_utc():** Normalise aware or naive datetimes to UTC
    - **ZERO_TIMESTAMP / is_zero_timestamp():** The "unset" timestamp value
    - **to_epoch_millis():** Milliseconds since the Unix epoch
    - **format_wall_clock():** UTC strftime with a four-digit year
    - **parse_timestamp():** Strict RFC 3339 parsing

Tags:
    timestamps, utc, datetime, recordkit, stdlib-only

STDLIB ONLY - NO PYDANTIC.
"""

from datetime import UTC, datetime, timedelta

# Unset value for non-optional timestamp fields.
ZERO_TIMESTAMP = datetime.min.replace(tzinfo=UTC)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def is_zero_timestamp(dt: datetime) -> bool:
    """Return True for ``datetime.min`` with or without a timezone."""
    return dt.replace(tzinfo=None) == datetime.min


def to_utc(dt: datetime) -> datetime:
    """Convert to UTC. Naive datetimes are taken to already be UTC."""
    if dt.tzinfo is None or is_zero_timestamp(dt):
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch.

    Naive datetimes are read in local time.
    """
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def format_wall_clock(dt: datetime, layout: str) -> str:
    """Format ``dt`` in UTC with ``layout``.

    The year is always rendered with four digits; ``%Y`` alone is not
    zero-padded on every platform for years before 1000.
    """
    utc = to_utc(dt)
    return utc.strftime(layout.replace("%Y", f"{utc.year:04d}"))


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp (``2024-01-15T09:30:00Z`` or with an offset).

    Raises:
        ValueError: ``text`` is not RFC 3339 or carries no offset
    """
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp has no UTC offset: {text!r}")
    return parsed
