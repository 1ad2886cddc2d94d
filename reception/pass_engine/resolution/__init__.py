"""Person lookup for pass resolution.

Provides the lookup strategy chain and the Person Locator that runs it."""

from __future__ import annotations

from .interfaces import LookupContext, LookupStrategy
from .person_locator import PersonLocator, rank_candidates
from .strategies import BroadFuzzyStrategy, ExactFilterStrategy, WindowedFuzzyStrategy

__all__ = [
    "LookupContext",
    "LookupStrategy",
    "PersonLocator",
    "rank_candidates",
    "BroadFuzzyStrategy",
    "ExactFilterStrategy",
    "WindowedFuzzyStrategy",
]
