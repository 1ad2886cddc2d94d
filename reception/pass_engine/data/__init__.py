"""Upstream data access: record adapters and per-entity repositories."""

from __future__ import annotations
