"""Lookup strategies, narrowest first."""

from __future__ import annotations

from .broad_fuzzy import BroadFuzzyStrategy
from .exact_filter import ExactFilterStrategy
from .windowed_fuzzy import WindowedFuzzyStrategy

__all__ = [
    "BroadFuzzyStrategy",
    "ExactFilterStrategy",
    "WindowedFuzzyStrategy",
]
