"""Interfaces for the person lookup chain."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.models import PersonKind


@dataclass(frozen=True)
class LookupContext:
    """What a strategy needs to search for one person"""

    kind: PersonKind
    query: str
    now: datetime
    window_start: datetime
    window_end: datetime


class LookupStrategy(ABC):
    """One step of the widening name lookup"""

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name for logging and the PersonMatch record"""
        pass

    def applies_to(self, kind: PersonKind) -> bool:
        """Whether this strategy is part of the chain for the given kind."""
        return True

    @abstractmethod
    def find(self, context: LookupContext) -> list[dict[str, Any]]:
        """Return raw upstream records matching the query.

        Raises:
            UpstreamUnavailableError: the underlying fetch failed
        """
        pass
