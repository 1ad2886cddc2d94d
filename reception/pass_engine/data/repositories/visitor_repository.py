"""Visitor repository for data access."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from nexudus.client import VISITORS, NexudusClient
from nexudus.pagination import records_of

from ...core.config import EngineConfig
from ...shared.time_window import SECOND_Z, format_upstream_time

logger = logging.getLogger(__name__)


class VisitorRepository:
    """Repository for visitor records

    Expected-arrival filters take second precision with a Z suffix.
    """

    def __init__(self, client: NexudusClient, config: EngineConfig | None = None) -> None:
        self.client = client
        self.config = config or EngineConfig()

    def get_by_id(self, visitor_id: int) -> dict[str, Any]:
        """Fetch a visitor by numeric id via the single-record endpoint."""
        return self.client.get_record(VISITORS, visitor_id)

    def find_by_unique_id(self, unique_id: str) -> dict[str, Any] | None:
        """Find a visitor by GUID; the single-record endpoint only takes numeric ids."""
        payload = self.client.list_records(VISITORS, {"page": 1, "size": 1, "UniqueId": unique_id})
        records = records_of(payload)
        if not records:
            logger.debug(f"No visitor with UniqueId {unique_id}")
            return None
        return records[0]

    def _arrival_window(self, start: datetime, end: datetime) -> dict[str, Any]:
        return {
            "from_Visitor_ExpectedArrival": format_upstream_time(start, SECOND_Z),
            "to_Visitor_ExpectedArrival": format_upstream_time(end, SECOND_Z),
        }

    def search_by_name(self, name: str, start: datetime, end: datetime) -> list[dict[str, Any]]:
        """Server-side full-name filter within the expected-arrival window."""
        params = {
            "page": 1,
            "size": self.config.search_page_size,
            "Visitor_FullName": name,
            "orderBy": "ExpectedArrival",
            "dir": "Ascending",
            **self._arrival_window(start, end),
        }
        return records_of(self.client.list_records(VISITORS, params))

    def list_in_window(self, start: datetime, end: datetime) -> list[dict[str, Any]]:
        """One bounded page of visitors expected within the window."""
        params = {
            "page": 1,
            "size": self.config.broad_search_page_size,
            "orderBy": "ExpectedArrival",
            "dir": "Ascending",
            **self._arrival_window(start, end),
        }
        return records_of(self.client.list_records(VISITORS, params))

    def list_recent(self) -> list[dict[str, Any]]:
        """One bounded page of visitors with no filter, latest arrivals first."""
        params = {
            "page": 1,
            "size": self.config.broad_search_page_size,
            "orderBy": "ExpectedArrival",
            "dir": "Descending",
        }
        return records_of(self.client.list_records(VISITORS, params))
