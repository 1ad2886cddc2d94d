"""Pass resolution engine.

Resolves a visitor or coworker to the single booking pass a reception
kiosk should display right now. The orchestrator lives in
`passes.pass_resolver`; this package re-exports the core types only, since
the Nexudus client imports the error classes from here."""

from __future__ import annotations

from .core.clock import Clock, FixedClock, SystemClock
from .core.errors import (
    InvalidInputError,
    NotFoundError,
    PassError,
    UpstreamMalformedError,
    UpstreamUnavailableError,
)
from .core.models import Pass, PassResolution, PassSource, PersonKind, SearchEntry

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "InvalidInputError",
    "NotFoundError",
    "PassError",
    "UpstreamMalformedError",
    "UpstreamUnavailableError",
    "Pass",
    "PassResolution",
    "PassSource",
    "PersonKind",
    "SearchEntry",
]
