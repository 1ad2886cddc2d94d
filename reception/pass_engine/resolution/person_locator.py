"""Person Locator: turns an id or a free-text name into upstream person records.

Name lookups widen step by step (exact filter, windowed fuzzy, broad fuzzy)
and stop at the first step that yields candidates."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

from ..core.errors import InvalidInputError, NotFoundError, UpstreamUnavailableError
from ..core.models import PersonKind, PersonMatch, PersonRef
from ..data.record_adapters import is_numeric_id, person_from_record, visitor_from_record
from ..data.repositories import CoworkerRepository, VisitorRepository
from ..shared.name_utils import normalize_name
from ..shared.time_window import parse_upstream_time, today_window_utc
from .interfaces import LookupContext, LookupStrategy
from .strategies import BroadFuzzyStrategy, ExactFilterStrategy, WindowedFuzzyStrategy

logger = logging.getLogger(__name__)

GUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE)


def _rank_visitors(candidates: list[PersonRef], now: datetime) -> list[PersonRef]:
    """Earliest upcoming arrival first, then most recent past, then unknown arrival."""
    upcoming: list[tuple[datetime, int, PersonRef]] = []
    past: list[tuple[datetime, int, PersonRef]] = []
    unknown: list[PersonRef] = []

    for index, person in enumerate(candidates):
        arrival = parse_upstream_time(person.raw.get("ExpectedArrival"))
        if arrival is None:
            unknown.append(person)
        elif arrival >= now:
            upcoming.append((arrival, index, person))
        else:
            past.append((arrival, index, person))

    upcoming.sort(key=lambda item: (item[0], item[1]))
    past.sort(key=lambda item: (-item[0].timestamp(), item[1]))
    return [p for _, _, p in upcoming] + [p for _, _, p in past] + unknown


def _rank_coworkers(candidates: list[PersonRef], query: str) -> list[PersonRef]:
    """Exact case-insensitive full-name matches first, upstream order otherwise."""
    wanted = query.strip().casefold()
    exact = [c for c in candidates if c.display_name.strip().casefold() == wanted]
    rest = [c for c in candidates if c.display_name.strip().casefold() != wanted]
    return exact + rest


def rank_candidates(kind: PersonKind, candidates: list[PersonRef], query: str, now: datetime) -> list[PersonRef]:
    """Order located people best-first; the head of the list is the winner."""
    if kind is PersonKind.VISITOR:
        return _rank_visitors(candidates, now)
    return _rank_coworkers(candidates, query)


def _dedupe(people: list[PersonRef]) -> list[PersonRef]:
    seen: set[Any] = set()
    unique = []
    for person in people:
        key = person.id if person.id is not None else ("name", normalize_name(person.display_name))
        if key in seen:
            continue
        seen.add(key)
        unique.append(person)
    return unique


class PersonLocator:
    """Locates visitors and coworkers for pass resolution and search."""

    def __init__(
        self,
        visitor_repository: VisitorRepository,
        coworker_repository: CoworkerRepository,
        strategies: list[LookupStrategy] | None = None,
    ):
        """Initialize the locator.

        Args:
            visitor_repository: Repository for visitor records
            coworker_repository: Repository for coworker records
            strategies: Lookup chain override, narrowest first
        """
        self.visitor_repo = visitor_repository
        self.coworker_repo = coworker_repository
        self.strategies = strategies or [
            ExactFilterStrategy(visitor_repository, coworker_repository),
            WindowedFuzzyStrategy(visitor_repository),
            BroadFuzzyStrategy(visitor_repository, coworker_repository),
        ]

    def locate_visitor_by_id(self, identifier: str) -> PersonRef:
        """Fetch a visitor directly by numeric id or GUID. No fallback.

        Raises:
            InvalidInputError: identifier is neither numeric nor a GUID
            NotFoundError: the upstream has no such visitor
            UpstreamUnavailableError: any other non-success response
        """
        identifier = identifier.strip()

        if GUID_PATTERN.match(identifier):
            record = self.visitor_repo.find_by_unique_id(identifier)
            if record is None:
                raise NotFoundError("Visitor not found")
            return visitor_from_record(record)

        if not is_numeric_id(identifier):
            raise InvalidInputError("id must be numeric", field="id")

        try:
            record = self.visitor_repo.get_by_id(int(identifier))
        except UpstreamUnavailableError as e:
            if e.upstream_status == 404:
                raise NotFoundError("Visitor not found") from e
            raise
        return visitor_from_record(record)

    def find_candidates(self, kind: PersonKind, query: str, now: datetime) -> tuple[list[PersonRef], str]:
        """Run the lookup chain and return ranked candidates plus the strategy that found them.

        A failing step counts as "no candidates" and the chain widens; this is
        also how an account that rejects the name filter reaches the fuzzy steps.
        Only when no step could run at all is the first failure raised.
        """
        start, end = today_window_utc(now)
        context = LookupContext(kind=kind, query=query, now=now, window_start=start, window_end=end)

        first_failure: UpstreamUnavailableError | None = None
        any_succeeded = False

        for strategy in self.strategies:
            if not strategy.applies_to(kind):
                continue
            try:
                records = strategy.find(context)
            except UpstreamUnavailableError as e:
                logger.warning(f"{strategy.name} lookup for {kind.value} '{query}' failed: {e.message}")
                first_failure = first_failure or e
                continue

            any_succeeded = True
            people = _dedupe([person_from_record(kind, r) for r in records])
            logger.debug(f"{strategy.name} lookup for {kind.value} '{query}' found {len(people)} candidate(s)")
            if people:
                return rank_candidates(kind, people, query, now), strategy.name

        if not any_succeeded and first_failure is not None:
            raise first_failure
        return [], "none"

    def locate_by_name(self, kind: PersonKind, name: str, now: datetime) -> PersonMatch:
        """Locate the best-ranked person for a name.

        Raises:
            NotFoundError: no strategy produced a candidate
        """
        candidates, strategy = self.find_candidates(kind, name, now)
        if not candidates:
            raise NotFoundError(f"No {kind.value} matching '{name}'")
        return PersonMatch(person=candidates[0], candidates=candidates, strategy=strategy)
