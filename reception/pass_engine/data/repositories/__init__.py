"""Read-only repositories over the Nexudus list and record endpoints."""

from __future__ import annotations

from .booking_repository import BookingRepository
from .booking_visitor_repository import BookingVisitorRepository
from .coworker_repository import CoworkerRepository
from .visitor_repository import VisitorRepository

__all__ = [
    "BookingRepository",
    "BookingVisitorRepository",
    "CoworkerRepository",
    "VisitorRepository",
]
