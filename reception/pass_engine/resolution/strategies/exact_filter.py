"""Exact server-side name filter."""

from __future__ import annotations

from typing import Any

from ...core.models import PersonKind
from ...data.repositories import CoworkerRepository, VisitorRepository
from ..interfaces import LookupContext, LookupStrategy


class ExactFilterStrategy(LookupStrategy):
    """Ask the upstream to filter by full name.

    Visitors are additionally narrowed to today's expected-arrival window.
    """

    def __init__(self, visitor_repository: VisitorRepository, coworker_repository: CoworkerRepository):
        self.visitor_repo = visitor_repository
        self.coworker_repo = coworker_repository

    @property
    def name(self) -> str:
        return "exact_filter"

    def find(self, context: LookupContext) -> list[dict[str, Any]]:
        if context.kind is PersonKind.VISITOR:
            return self.visitor_repo.search_by_name(context.query, context.window_start, context.window_end)
        return self.coworker_repo.search_by_name(context.query)
