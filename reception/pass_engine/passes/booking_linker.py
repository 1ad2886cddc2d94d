"""Booking Linker: finds today's bookings that belong to a located person.

Coworkers own bookings directly. Visitors reach bookings through
booking-visitor join rows, preferably filtered server-side by visitor id
(each linked booking then fetched by id), falling back to scanning every
join row on the account and cross-referencing today's bookings."""

from __future__ import annotations

import logging
from datetime import datetime

from nexudus.pagination import PageResult

from ..core.config import EngineConfig
from ..core.errors import UpstreamUnavailableError
from ..core.models import BookingCandidate, BookingVisitorLink, PersonRef
from ..data.record_adapters import (
    booking_coworker_ids,
    booking_from_record,
    booking_is_confirmed,
    link_from_record,
)
from ..data.repositories import BookingRepository, BookingVisitorRepository
from ..shared.name_utils import normalize_name
from ..shared.time_window import overlaps_window, today_window_utc

logger = logging.getLogger(__name__)


def _dedupe_bookings(bookings: list[BookingCandidate]) -> list[BookingCandidate]:
    seen: set[int] = set()
    unique = []
    for booking in bookings:
        if booking.booking_id is not None:
            if booking.booking_id in seen:
                continue
            seen.add(booking.booking_id)
        unique.append(booking)
    return unique


class BookingLinker:
    """Links people to today's bookings"""

    def __init__(
        self,
        booking_repository: BookingRepository,
        booking_visitor_repository: BookingVisitorRepository,
        config: EngineConfig | None = None,
    ):
        self.booking_repo = booking_repository
        self.booking_visitor_repo = booking_visitor_repository
        self.config = config or EngineConfig()

    def todays_bookings(self, now: datetime) -> PageResult:
        """Fetch today's confirmed bookings without raising; callers judge the failure."""
        start, end = today_window_utc(now)
        return self.booking_repo.confirmed_in_window(start, end)

    def for_coworker(
        self, coworker_id: int, now: datetime, todays: PageResult | None = None
    ) -> list[BookingCandidate]:
        """Today's bookings owned by a coworker.

        Args:
            coworker_id: Upstream coworker id
            now: Current instant
            todays: Pre-fetched result of todays_bookings(), shared across candidates

        Raises:
            UpstreamUnavailableError: today's bookings could not be fetched at all
        """
        if todays is None:
            todays = self.todays_bookings(now)
        todays.raise_for_failure()

        mine = [booking_from_record(r) for r in todays.records if coworker_id in booking_coworker_ids(r)]
        logger.debug(f"Coworker {coworker_id} owns {len(mine)} of {len(todays.records)} bookings today")
        return _dedupe_bookings(mine)

    def for_visitor(self, visitor: PersonRef, now: datetime) -> list[BookingCandidate]:
        """Today's bookings a visitor is attached to.

        Raises:
            UpstreamUnavailableError: the degraded path could not fetch today's bookings
        """
        if visitor.id is not None:
            links = self.booking_visitor_repo.for_visitor(visitor.id)
            if not (links.failed and not links.records):
                return self._link_by_detail_fetch(visitor, links, now)
            logger.warning(
                f"Filtered booking-visitor lookup for visitor {visitor.id} failed; scanning all join rows"
            )

        return self._link_by_full_scan(visitor, now)

    def _matching_booking_ids(self, visitor: PersonRef, links: list[BookingVisitorLink]) -> list[int]:
        wanted_name = normalize_name(visitor.display_name)
        booking_ids: list[int] = []
        for link in links:
            if link.booking_id is None:
                continue
            same_id = visitor.id is not None and link.visitor_id == visitor.id
            same_name = bool(wanted_name) and normalize_name(link.visitor_full_name) == wanted_name
            if (same_id or same_name) and link.booking_id not in booking_ids:
                booking_ids.append(link.booking_id)
        return booking_ids

    def _link_by_detail_fetch(self, visitor: PersonRef, links: PageResult, now: datetime) -> list[BookingCandidate]:
        """Fetch each linked booking by id and keep the confirmed ones overlapping today."""
        booking_ids = self._matching_booking_ids(visitor, [link_from_record(r) for r in links.records])

        limit = self.config.max_booking_detail_fetches
        if len(booking_ids) > limit:
            logger.warning(
                f"Visitor {visitor.id} links {len(booking_ids)} bookings; fetching only the first {limit}"
            )
            booking_ids = booking_ids[:limit]

        start, end = today_window_utc(now)
        bookings = []
        for booking_id in booking_ids:
            try:
                record = self.booking_repo.get_by_id(booking_id)
            except UpstreamUnavailableError as e:
                logger.warning(f"Skipping booking {booking_id} for visitor {visitor.id}: {e.message}")
                continue
            if not booking_is_confirmed(record):
                logger.debug(f"Skipping booking {booking_id} for visitor {visitor.id}: status is not Confirmed")
                continue
            booking = booking_from_record(record)
            if overlaps_window(booking.from_time, booking.to_time, start, end):
                bookings.append(booking)

        logger.debug(f"Visitor {visitor.id}: {len(bookings)} of {len(booking_ids)} linked bookings are today")
        return _dedupe_bookings(bookings)

    def _link_by_full_scan(self, visitor: PersonRef, now: datetime) -> list[BookingCandidate]:
        """Scan every join row, then cross-reference today's confirmed bookings."""
        links = self.booking_visitor_repo.all_links()
        if links.failed and not links.records:
            logger.warning(f"Booking-visitor scan for visitor {visitor.id} failed; no linked bookings")
            return []

        booking_ids = set(self._matching_booking_ids(visitor, [link_from_record(r) for r in links.records]))
        if not booking_ids:
            return []

        todays = self.todays_bookings(now)
        todays.raise_for_failure()
        bookings = [booking_from_record(r) for r in todays.records]
        return _dedupe_bookings([b for b in bookings if b.booking_id in booking_ids])
