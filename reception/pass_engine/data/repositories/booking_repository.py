"""Booking repository for data access."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from nexudus.client import BOOKINGS, NexudusClient
from nexudus.pagination import PageResult, fetch_all_pages

from ...core.config import EngineConfig
from ...shared.time_window import MINUTE, TimeFormat, format_upstream_time


class BookingRepository:
    """Repository for booking records"""

    def __init__(
        self,
        client: NexudusClient,
        config: EngineConfig | None = None,
        window_format: TimeFormat = MINUTE,
    ) -> None:
        """Initialize repository.

        Args:
            client: Nexudus client
            config: Engine limits
            window_format: Format the FromTime/ToTime filters accept (minute precision by default)
        """
        self.client = client
        self.config = config or EngineConfig()
        self.window_format = window_format

    def confirmed_in_window(self, start: datetime, end: datetime) -> PageResult:
        """All confirmed bookings within the window, paged up to the cap."""
        params = {
            "status": "Confirmed",
            "from_Booking_FromTime": format_upstream_time(start, self.window_format),
            "to_Booking_ToTime": format_upstream_time(end, self.window_format),
        }
        return fetch_all_pages(
            self.client,
            BOOKINGS,
            params,
            page_size=self.config.bookings_page_size,
            page_cap=self.config.page_cap,
        )

    def get_by_id(self, booking_id: int) -> dict[str, Any]:
        return self.client.get_record(BOOKINGS, booking_id)
