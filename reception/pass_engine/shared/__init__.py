"""Shared pure helpers: time windows and fuzzy name matching."""

from __future__ import annotations

from .name_utils import edit_distance, edit_threshold, name_matches, normalize_name
from .time_window import (
    MINUTE,
    SECOND_Z,
    TimeFormat,
    format_upstream_time,
    is_active_now,
    overlaps_window,
    parse_upstream_time,
    today_window_utc,
)

__all__ = [
    "edit_distance",
    "edit_threshold",
    "name_matches",
    "normalize_name",
    "MINUTE",
    "SECOND_Z",
    "TimeFormat",
    "format_upstream_time",
    "is_active_now",
    "overlaps_window",
    "parse_upstream_time",
    "today_window_utc",
]
