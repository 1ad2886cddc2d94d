"""Capped page walker for Nexudus list endpoints.

Failures are captured on the result together with whatever was already
accumulated; callers decide whether partial data is acceptable."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from reception.pass_engine.core.errors import UpstreamUnavailableError

if TYPE_CHECKING:
    from .client import NexudusClient

logger = logging.getLogger(__name__)

DEFAULT_PAGE_CAP = 10


def records_of(payload: Any) -> list[dict[str, Any]]:
    """Return the Records list of a payload; missing or malformed means empty."""
    if not isinstance(payload, dict):
        return []
    records = payload.get("Records")
    if not isinstance(records, list):
        return []
    return [r for r in records if isinstance(r, dict)]


def has_next_page(payload: dict[str, Any], page: int) -> bool:
    """Read the upstream "more pages" signal.

    HasNextPage wins when present; otherwise PageNumber/TotalPages; with
    neither, the page is treated as the last one.
    """
    if "HasNextPage" in payload and payload["HasNextPage"] is not None:
        return bool(payload["HasNextPage"])

    total_pages = payload.get("TotalPages")
    if isinstance(total_pages, int):
        page_number = payload.get("PageNumber")
        current = page_number if isinstance(page_number, int) else page
        return current < total_pages

    return False


@dataclass
class PageResult:
    """Records accumulated by fetch_all_pages plus how the walk ended"""

    records: list[dict[str, Any]] = field(default_factory=list)
    pages_fetched: int = 0
    failure: UpstreamUnavailableError | None = None
    truncated: bool = False

    @property
    def failed(self) -> bool:
        return self.failure is not None

    @property
    def complete(self) -> bool:
        """True when the upstream said there were no more pages."""
        return not self.failed and not self.truncated

    def raise_for_failure(self, allow_partial: bool = True) -> None:
        """Raise the captured failure when the data is unusable.

        With allow_partial, a failure after some records were gathered is
        tolerated (the result is "possibly incomplete").
        """
        if self.failure is None:
            return
        if allow_partial and self.records:
            return
        raise self.failure


def fetch_all_pages(
    client: NexudusClient,
    entity: str,
    fixed_params: dict[str, Any] | None = None,
    page_size: int = 100,
    page_cap: int = DEFAULT_PAGE_CAP,
) -> PageResult:
    """Walk pages 1..page_cap of a list endpoint, preserving upstream order.

    Stops on a fetch failure (recorded on the result), on the upstream's
    "no more pages" signal, or at page_cap regardless of what the upstream says.
    """
    result = PageResult()

    for page in range(1, page_cap + 1):
        params = dict(fixed_params or {})
        params["page"] = page
        params["size"] = page_size

        try:
            payload = client.list_records(entity, params)
        except UpstreamUnavailableError as e:
            logger.warning(
                f"Stopped paging {entity} at page {page} after {len(result.records)} records: {e.message}"
            )
            result.failure = e
            return result

        result.pages_fetched = page
        result.records.extend(records_of(payload))

        if not has_next_page(payload, page):
            logger.debug(f"Fetched {len(result.records)} {entity} records over {page} page(s)")
            return result

    result.truncated = True
    logger.warning(f"Page cap {page_cap} reached for {entity}; {len(result.records)} records may be incomplete")
    return result
