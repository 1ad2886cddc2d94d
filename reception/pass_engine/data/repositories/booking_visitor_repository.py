"""Booking-visitor link repository for data access."""

from __future__ import annotations

from nexudus.client import BOOKING_VISITORS, NexudusClient
from nexudus.pagination import PageResult, fetch_all_pages

from ...core.config import EngineConfig


class BookingVisitorRepository:
    """Repository for booking-visitor join rows"""

    def __init__(self, client: NexudusClient, config: EngineConfig | None = None) -> None:
        self.client = client
        self.config = config or EngineConfig()

    def for_visitor(self, visitor_id: int) -> PageResult:
        """Join rows filtered server-side to one visitor."""
        return fetch_all_pages(
            self.client,
            BOOKING_VISITORS,
            {"BookingVisitor_Visitor": visitor_id},
            page_size=self.config.booking_visitors_page_size,
            page_cap=self.config.page_cap,
        )

    def all_links(self) -> PageResult:
        """Every join row on the account, paged up to the cap."""
        return fetch_all_pages(
            self.client,
            BOOKING_VISITORS,
            page_size=self.config.booking_visitors_page_size,
            page_cap=self.config.page_cap,
        )
