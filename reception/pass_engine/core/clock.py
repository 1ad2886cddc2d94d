"""Clock capability injected wherever "now" matters."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant (timezone-aware, UTC)"""

    def now(self) -> datetime: ...


class SystemClock:
    """Reads wall-clock time"""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Always returns the same instant. Naive datetimes are taken as UTC."""

    def __init__(self, instant: datetime):
        self._instant = instant if instant.tzinfo else instant.replace(tzinfo=UTC)

    def now(self) -> datetime:
        return self._instant
