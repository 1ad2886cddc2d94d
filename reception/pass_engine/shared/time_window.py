"""Time window helpers for "today" and "active now" checks.

The upstream stores booking and arrival times as timezone-naive wall-clock
strings; they are interpreted as UTC throughout."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Literal

DEFAULT_MARGIN_MINUTES = 15


@dataclass(frozen=True)
class TimeFormat:
    """Textual form an upstream filter field accepts.

    Different filter fields take different precision, so callers pick the
    form per field rather than per client.
    """

    precision: Literal["second", "minute"]
    include_z_suffix: bool


# from_/to_Visitor_ExpectedArrival: 2026-10-19T00:00:00Z
SECOND_Z = TimeFormat(precision="second", include_z_suffix=True)
# from_Booking_FromTime / to_Booking_ToTime: 2026-10-19T00:00
MINUTE = TimeFormat(precision="minute", include_z_suffix=False)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_upstream_time(value: datetime, time_format: TimeFormat) -> str:
    """Render an instant in the given upstream filter format (always UTC)."""
    pattern = "%Y-%m-%dT%H:%M:%S" if time_format.precision == "second" else "%Y-%m-%dT%H:%M"
    rendered = _as_utc(value).strftime(pattern)
    return f"{rendered}Z" if time_format.include_z_suffix else rendered


def today_window_utc(now: datetime) -> tuple[datetime, datetime]:
    """Return (00:00:00.000, 23:59:59.999) UTC of the day containing `now`."""
    now = _as_utc(now)
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = now.replace(hour=23, minute=59, second=59, microsecond=999000)
    return start, end


def parse_upstream_time(value: object) -> datetime | None:
    """Parse an upstream timestamp, returning None when it cannot be read.

    Handles:
    - Naive ISO datetime: "2026-10-19T10:00:00" (taken as UTC)
    - Minute precision: "2026-10-19T10:00"
    - Zulu / offset suffix: "2026-10-19T10:00:00Z", "2026-10-19T10:00:00+02:00"
    - Fractional seconds: "2026-10-19T10:00:00.123Z"
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return _as_utc(datetime.fromisoformat(value.strip()))
    except ValueError:
        return None


def is_active_now(
    now: datetime,
    from_time: object,
    to_time: object,
    margin_minutes: int = DEFAULT_MARGIN_MINUTES,
) -> bool:
    """True iff now lies within [from - margin, to + margin]. Never raises."""
    start = parse_upstream_time(from_time)
    end = parse_upstream_time(to_time)
    if start is None or end is None:
        return False
    margin = timedelta(minutes=margin_minutes)
    return start - margin <= _as_utc(now) <= end + margin


def overlaps_window(from_time: object, to_time: object, start: datetime, end: datetime) -> bool:
    """True iff [from, to] intersects [start, end]. Unparsable times never overlap."""
    booking_start = parse_upstream_time(from_time)
    booking_end = parse_upstream_time(to_time)
    if booking_start is None or booking_end is None:
        return False
    return booking_end >= _as_utc(start) and booking_start <= _as_utc(end)


def format_clock_time(value: object) -> str:
    """Render an upstream timestamp as HH:MM, or "?" when unparsable."""
    parsed = parse_upstream_time(value)
    return parsed.strftime("%H:%M") if parsed else "?"
