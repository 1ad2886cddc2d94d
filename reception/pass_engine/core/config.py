"""Tunable limits for the pass engine."""

from __future__ import annotations

from dataclasses import dataclass

from ..shared.time_window import DEFAULT_MARGIN_MINUTES


@dataclass(frozen=True)
class EngineConfig:
    """Page sizes, caps and margins used by one resolution.

    Built from api.settings.Settings at the HTTP boundary; defaults suit tests.
    """

    active_margin_minutes: int = DEFAULT_MARGIN_MINUTES
    page_cap: int = 10
    bookings_page_size: int = 500
    booking_visitors_page_size: int = 200
    search_page_size: int = 50
    broad_search_page_size: int = 200
    max_booking_detail_fetches: int = 20
    max_name_candidates: int = 5
