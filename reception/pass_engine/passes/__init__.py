"""Booking linking, pass selection and the resolve/search orchestrator."""

from __future__ import annotations

from .booking_linker import BookingLinker
from .pass_resolver import PassResolver
from .pass_selector import PassSelector

__all__ = ["BookingLinker", "PassResolver", "PassSelector"]
