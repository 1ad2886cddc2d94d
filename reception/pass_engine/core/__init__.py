"""Core domain types for the pass engine."""

from __future__ import annotations

from .clock import Clock, FixedClock, SystemClock
from .errors import (
    InvalidInputError,
    NotFoundError,
    PassError,
    UpstreamMalformedError,
    UpstreamUnavailableError,
)
from .models import (
    BookingCandidate,
    BookingVisitorLink,
    Pass,
    PassResolution,
    PassSource,
    PersonKind,
    PersonMatch,
    PersonRef,
    SearchEntry,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "InvalidInputError",
    "NotFoundError",
    "PassError",
    "UpstreamMalformedError",
    "UpstreamUnavailableError",
    "BookingCandidate",
    "BookingVisitorLink",
    "Pass",
    "PassResolution",
    "PassSource",
    "PersonKind",
    "PersonMatch",
    "PersonRef",
    "SearchEntry",
]
