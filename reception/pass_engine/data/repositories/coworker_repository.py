"""Coworker repository for data access."""

from __future__ import annotations

from typing import Any

from nexudus.client import COWORKERS, NexudusClient
from nexudus.pagination import records_of

from ...core.config import EngineConfig


class CoworkerRepository:
    """Repository for coworker (member) records"""

    def __init__(self, client: NexudusClient, config: EngineConfig | None = None) -> None:
        self.client = client
        self.config = config or EngineConfig()

    def search_by_name(self, name: str) -> list[dict[str, Any]]:
        """Server-side full-name filter."""
        params = {
            "page": 1,
            "size": self.config.search_page_size,
            "Coworker_FullName": name,
            "orderBy": "FullName",
            "dir": "Ascending",
        }
        return records_of(self.client.list_records(COWORKERS, params))

    def list_all(self) -> list[dict[str, Any]]:
        """One bounded page of coworkers ordered by name."""
        params = {
            "page": 1,
            "size": self.config.broad_search_page_size,
            "orderBy": "FullName",
            "dir": "Ascending",
        }
        return records_of(self.client.list_records(COWORKERS, params))
