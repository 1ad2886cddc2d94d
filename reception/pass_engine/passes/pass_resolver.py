"""Pass resolver: the two operations the HTTP boundary calls.

resolve_pass turns (person type, id or name) into a PassResolution;
search_people lists matching visitors and coworkers for the kiosk's
autocomplete box."""

from __future__ import annotations

import logging
from datetime import datetime

from nexudus.client import NexudusClient
from nexudus.pagination import PageResult

from ..core.clock import Clock, SystemClock
from ..core.config import EngineConfig
from ..core.errors import InvalidInputError
from ..core.models import (
    BookingCandidate,
    PassResolution,
    PassSource,
    PersonKind,
    PersonRef,
    SearchEntry,
)
from ..data.record_adapters import booking_coworker_ids, booking_from_record, is_numeric_id, to_text
from ..data.repositories import (
    BookingRepository,
    BookingVisitorRepository,
    CoworkerRepository,
    VisitorRepository,
)
from ..resolution import PersonLocator
from ..shared.time_window import format_clock_time
from .booking_linker import BookingLinker
from .pass_selector import PassSelector

logger = logging.getLogger(__name__)


def _parse_kind(kind: PersonKind | str | None) -> PersonKind:
    parsed = kind if isinstance(kind, PersonKind) else PersonKind.parse(kind)
    if parsed is None:
        raise InvalidInputError("Missing or invalid type (expected 'visitor' or 'coworker')", field="type")
    return parsed


class PassResolver:
    """Resolves people to passes against one Nexudus account."""

    def __init__(self, client: NexudusClient, clock: Clock | None = None, config: EngineConfig | None = None):
        self.clock = clock or SystemClock()
        self.config = config or EngineConfig()

        visitor_repo = VisitorRepository(client, self.config)
        coworker_repo = CoworkerRepository(client, self.config)
        self.locator = PersonLocator(visitor_repo, coworker_repo)
        self.linker = BookingLinker(
            BookingRepository(client, self.config),
            BookingVisitorRepository(client, self.config),
            self.config,
        )
        self.selector = PassSelector(self.config.active_margin_minutes)

    # ------------------------------------------------------------------
    # resolve_pass
    # ------------------------------------------------------------------

    def resolve_pass(
        self,
        kind: PersonKind | str | None,
        person_id: str | int | None = None,
        name: str | None = None,
    ) -> PassResolution:
        """Resolve one person to their current pass.

        Exactly one of person_id or name identifies the person. An id is
        looked up directly; a name goes through the widening lookup chain.

        Raises:
            InvalidInputError: missing/invalid type or identifier
            NotFoundError: no person matches
            UpstreamUnavailableError: a required upstream call failed
        """
        person_kind = _parse_kind(kind)
        identifier = str(person_id).strip() if person_id is not None else ""
        query = (name or "").strip()

        if not identifier and not query:
            raise InvalidInputError("Missing id or name", field="id")

        now = self.clock.now()

        if identifier:
            return self._resolve_by_id(person_kind, identifier, now)
        return self._resolve_by_name(person_kind, query, now)

    def _resolve_by_id(self, kind: PersonKind, identifier: str, now: datetime) -> PassResolution:
        if kind is PersonKind.COWORKER:
            if not is_numeric_id(identifier):
                raise InvalidInputError("id must be numeric", field="id")
            coworker_id = int(identifier)
            person = PersonRef(kind=kind, id=coworker_id, display_name="")
            bookings = self.linker.for_coworker(coworker_id, now)
        else:
            person = self.locator.locate_visitor_by_id(identifier)
            bookings = self.linker.for_visitor(person, now)

        return self._to_resolution(person, bookings, now, matches=1)

    def _resolve_by_name(self, kind: PersonKind, query: str, now: datetime) -> PassResolution:
        """Resolve a name, preferring a candidate that holds an active booking.

        Candidates are linked in rank order (up to max_name_candidates): the
        first with an active booking wins, else the first with any booking
        today, else the top-ranked candidate.
        """
        match = self.locator.locate_by_name(kind, query, now)
        shortlist = match.candidates[: self.config.max_name_candidates]

        todays: PageResult | None = None
        if kind is PersonKind.COWORKER:
            todays = self.linker.todays_bookings(now)

        first_with_bookings: tuple[PersonRef, list[BookingCandidate]] | None = None
        for person in shortlist:
            bookings = self._bookings_for(person, now, todays)
            if self.selector.active(bookings, now):
                logger.debug(f"'{query}' resolved to {kind.value} {person.id} with an active booking")
                return self._to_resolution(person, bookings, now, match.match_count)
            if bookings and first_with_bookings is None:
                first_with_bookings = (person, bookings)

        if first_with_bookings is not None:
            person, bookings = first_with_bookings
            return self._to_resolution(person, bookings, now, match.match_count)

        return self._to_resolution(match.person, [], now, match.match_count)

    def _bookings_for(self, person: PersonRef, now: datetime, todays: PageResult | None) -> list[BookingCandidate]:
        if person.kind is PersonKind.VISITOR:
            return self.linker.for_visitor(person, now)
        if person.id is None:
            return []
        return self.linker.for_coworker(person.id, now, todays)

    def _to_resolution(
        self, person: PersonRef, bookings: list[BookingCandidate], now: datetime, matches: int
    ) -> PassResolution:
        chosen = self.selector.select(person, bookings, now)
        if chosen is None:
            return PassResolution(source=PassSource.NONE, pass_=None, matches=matches)
        return PassResolution(source=chosen.source, pass_=chosen, matches=matches)

    # ------------------------------------------------------------------
    # search_people
    # ------------------------------------------------------------------

    def search_people(self, query: str | None, kind: PersonKind | str | None = None) -> list[SearchEntry]:
        """List visitors and/or coworkers matching a free-text name.

        Visitors come first when both kinds are searched.

        Raises:
            InvalidInputError: empty query or unknown type
            UpstreamUnavailableError: no lookup step could reach the upstream
        """
        text = (query or "").strip()
        if not text:
            raise InvalidInputError("Missing or invalid name", field="name")

        kinds = [_parse_kind(kind)] if kind else [PersonKind.VISITOR, PersonKind.COWORKER]
        now = self.clock.now()
        limit = self.config.search_page_size

        entries: list[SearchEntry] = []
        for person_kind in kinds:
            candidates, strategy = self.locator.find_candidates(person_kind, text, now)
            logger.debug(f"Search '{text}' found {len(candidates)} {person_kind.value}(s) via {strategy}")
            candidates = candidates[:limit]

            if person_kind is PersonKind.VISITOR:
                entries.extend(self._visitor_entry(p) for p in candidates)
            elif candidates:
                todays = self.linker.todays_bookings(now)
                entries.extend(self._coworker_entry(p, todays, now) for p in candidates)

        return entries

    def _visitor_entry(self, person: PersonRef) -> SearchEntry:
        code = to_text(person.raw.get("VisitorCode"))
        label = f"{person.display_name} (#{code})" if code else person.display_name
        host = to_text(person.raw.get("CoworkerFullName")) or "No host"
        arrival = to_text(person.raw.get("ExpectedArrival")) or "n/a"
        return SearchEntry(kind=PersonKind.VISITOR, id=person.id, label=label, sub=f"{host} • Expected {arrival}")

    def _coworker_entry(self, person: PersonRef, todays: PageResult, now: datetime) -> SearchEntry:
        """Coworker row; the sub line shows today's booking window when there is one.

        A failed bookings fetch only drops the booking window from the sub line.
        """
        label = person.display_name or f"Coworker {person.id}"
        sub = to_text(person.raw.get("Email")) or ""

        if person.id is not None:
            mine = [booking_from_record(r) for r in todays.records if person.id in booking_coworker_ids(r)]
            chosen = self.selector.choose(mine, now)
            if chosen is not None:
                window = (
                    f"Booked {chosen.resource_name or 'N/A'} "
                    f"{format_clock_time(chosen.from_time)}-{format_clock_time(chosen.to_time)}"
                )
                sub = f"{sub} • {window}" if sub else window

        return SearchEntry(kind=PersonKind.COWORKER, id=person.id, label=label, sub=sub)
