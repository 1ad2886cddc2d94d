"""Unfiltered listing with local fuzzy matching."""

from __future__ import annotations

from typing import Any

from ...core.models import PersonKind
from ...data.record_adapters import COWORKER_NAME_PATHS, VISITOR_NAME_PATHS, all_present
from ...data.repositories import CoworkerRepository, VisitorRepository
from ...shared.name_utils import name_matches
from ..interfaces import LookupContext, LookupStrategy


class BroadFuzzyStrategy(LookupStrategy):
    """Last resort: one bounded unfiltered page, matched locally.

    Coworkers match on either FullName or BillingName.
    """

    def __init__(self, visitor_repository: VisitorRepository, coworker_repository: CoworkerRepository):
        self.visitor_repo = visitor_repository
        self.coworker_repo = coworker_repository

    @property
    def name(self) -> str:
        return "broad_fuzzy"

    def find(self, context: LookupContext) -> list[dict[str, Any]]:
        if context.kind is PersonKind.VISITOR:
            records = self.visitor_repo.list_recent()
            paths = VISITOR_NAME_PATHS
        else:
            records = self.coworker_repo.list_all()
            paths = COWORKER_NAME_PATHS

        return [r for r in records if any(name_matches(str(n), context.query) for n in all_present(r, paths))]
