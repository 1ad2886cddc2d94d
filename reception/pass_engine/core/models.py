"""Core domain models for pass resolution.

These models are request-scoped value objects built from upstream payloads.
None of them are persisted or shared between resolutions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PersonKind(Enum):
    """Kinds of people a pass can be resolved for"""

    VISITOR = "visitor"
    COWORKER = "coworker"

    @classmethod
    def parse(cls, value: str | None) -> PersonKind | None:
        """Parse a case-insensitive kind name, returning None when unknown."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class PassSource(Enum):
    """How a pass was derived"""

    BOOKING = "booking"
    VISITOR_FALLBACK = "visitor-fallback"
    NONE = "none"


@dataclass(frozen=True)
class PersonRef:
    """A located visitor or coworker.

    `raw` keeps the upstream record so the visitor fallback pass and search
    labels can read profile fields without another fetch.
    """

    kind: PersonKind
    id: int | None
    display_name: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class BookingCandidate:
    """A booking that may become the pass.

    from_time/to_time are the upstream wall-clock strings, interpreted as UTC.
    """

    booking_id: int | None
    resource_name: str | None
    from_time: str | None
    to_time: str | None
    owner_name: str | None = None


@dataclass(frozen=True)
class BookingVisitorLink:
    """Join row connecting a visitor to a booking"""

    booking_id: int | None
    visitor_id: int | None
    visitor_full_name: str | None


@dataclass
class PersonMatch:
    """Result of a Person Locator lookup.

    `candidates` is ranked best-first; `person` is the winner.
    """

    person: PersonRef
    candidates: list[PersonRef]
    strategy: str

    @property
    def match_count(self) -> int:
        return len(self.candidates)


@dataclass(frozen=True)
class Pass:
    """The displayable pass returned to the kiosk"""

    source: PassSource
    name: str
    resource: str
    from_time: str | None
    to_time: str | None
    booking_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "resource": self.resource,
            "fromTime": self.from_time,
            "toTime": self.to_time,
            "bookingId": self.booking_id,
        }


@dataclass(frozen=True)
class PassResolution:
    """Outcome of resolve_pass: the pass (or None) plus how many people matched"""

    source: PassSource
    pass_: Pass | None
    matches: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source.value,
            "pass": self.pass_.to_dict() if self.pass_ else None,
            "matches": self.matches,
        }


@dataclass(frozen=True)
class SearchEntry:
    """One autocomplete row for the reception search box"""

    kind: PersonKind
    id: int | None
    label: str
    sub: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "id": self.id, "label": self.label, "sub": self.sub}
