"""Arrival-window listing with local fuzzy matching (visitors only)."""

from __future__ import annotations

from typing import Any

from ...core.models import PersonKind
from ...data.record_adapters import VISITOR_NAME_PATHS, first_present
from ...data.repositories import VisitorRepository
from ...shared.name_utils import name_matches
from ..interfaces import LookupContext, LookupStrategy


class WindowedFuzzyStrategy(LookupStrategy):
    """Drop the name filter, keep today's window, match names locally.

    Coworkers have no arrival time, so this step is skipped for them.
    """

    def __init__(self, visitor_repository: VisitorRepository):
        self.visitor_repo = visitor_repository

    @property
    def name(self) -> str:
        return "windowed_fuzzy"

    def applies_to(self, kind: PersonKind) -> bool:
        return kind is PersonKind.VISITOR

    def find(self, context: LookupContext) -> list[dict[str, Any]]:
        records = self.visitor_repo.list_in_window(context.window_start, context.window_end)
        return [r for r in records if name_matches(first_present(r, VISITOR_NAME_PATHS), context.query)]
