"""Pass Selector: picks the one booking (or fallback) a person's pass shows."""

from __future__ import annotations

from datetime import datetime

from ..core.models import BookingCandidate, Pass, PassSource, PersonKind, PersonRef
from ..data.record_adapters import CUSTOM_FIELD_FROM_TIME, CUSTOM_FIELD_RESOURCE, custom_field_value, to_text
from ..shared.time_window import DEFAULT_MARGIN_MINUTES, is_active_now, parse_upstream_time

NOT_AVAILABLE = "N/A"


class PassSelector:
    """Chooses between candidate bookings.

    An active booking (within the grace margin) wins; otherwise the booking
    that ends latest. Unparsable end times sort last.
    """

    def __init__(self, margin_minutes: int = DEFAULT_MARGIN_MINUTES):
        self.margin_minutes = margin_minutes

    def active(self, bookings: list[BookingCandidate], now: datetime) -> list[BookingCandidate]:
        return [b for b in bookings if is_active_now(now, b.from_time, b.to_time, self.margin_minutes)]

    def choose(self, bookings: list[BookingCandidate], now: datetime) -> BookingCandidate | None:
        """Return the winning booking, or None for an empty set."""
        if not bookings:
            return None

        active = self.active(bookings, now)
        if active:
            return active[0]

        def end_key(booking: BookingCandidate) -> float:
            end = parse_upstream_time(booking.to_time)
            return end.timestamp() if end else float("-inf")

        # max() keeps the first of equal keys, so ties follow input order
        return max(bookings, key=end_key)

    def select(self, person: PersonRef, bookings: list[BookingCandidate], now: datetime) -> Pass | None:
        """Build the pass for a person from their candidate bookings.

        With no bookings, coworkers get no pass and visitors get a pass built
        from their profile when one is available.
        """
        chosen = self.choose(bookings, now)
        if chosen is None:
            if person.kind is PersonKind.VISITOR:
                return self._visitor_fallback(person)
            return None

        if person.kind is PersonKind.COWORKER:
            name = chosen.owner_name or person.display_name or NOT_AVAILABLE
        else:
            name = person.display_name or "Visitor"

        return Pass(
            source=PassSource.BOOKING,
            name=name,
            resource=chosen.resource_name or NOT_AVAILABLE,
            from_time=chosen.from_time,
            to_time=chosen.to_time,
            booking_id=chosen.booking_id,
        )

    def _visitor_fallback(self, person: PersonRef) -> Pass | None:
        """Pass built from booking-like fields on the visitor profile."""
        if not person.raw:
            return None
        return Pass(
            source=PassSource.VISITOR_FALLBACK,
            name=person.display_name or "Visitor",
            resource=custom_field_value(person.raw, CUSTOM_FIELD_RESOURCE) or NOT_AVAILABLE,
            from_time=custom_field_value(person.raw, CUSTOM_FIELD_FROM_TIME)
            or to_text(person.raw.get("ExpectedArrival")),
            to_time=None,
        )
