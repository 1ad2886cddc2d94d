"""Nexudus record API client for visitors, coworkers, bookings and booking visitors."""

from __future__ import annotations

import base64
import itertools
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, cast

import requests
from dotenv import load_dotenv

# Import TRACE constant for upstream parameter dumps
from reception.logging_config import TRACE
from reception.pass_engine.core.errors import (
    UpstreamMalformedError,
    UpstreamUnavailableError,
    truncate_detail,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://spaces.nexudus.com/api/spaces"

# Entity endpoints (list at /{entity}, single record at /{entity}/{id})
VISITORS = "visitors"
COWORKERS = "coworkers"
BOOKINGS = "bookings"
BOOKING_VISITORS = "bookingvisitors"

# Monotonic part of the cache-defeating token; time_ns alone can repeat on coarse clocks
_request_counter = itertools.count(1)


def build_basic_auth(username: str, password: str) -> str:
    """Build the HTTP Basic credential header value."""
    token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return f"Basic {token}"


def cache_buster() -> str:
    """Return a unique token so intermediate caches never serve stale list pages."""
    return f"{time.time_ns()}-{next(_request_counter)}"


@dataclass
class NexudusConfig:
    """Configuration for Nexudus API access.

    auth_header is an opaque, pre-built Authorization header value.
    """

    auth_header: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0


class NexudusClient:
    """Read-only client for the Nexudus spaces API."""

    def __init__(self, config: NexudusConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or requests.Session()

    def _make_request(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make an authenticated GET request and decode the JSON body.

        Raises:
            UpstreamUnavailableError: non-2xx response or transport failure
            UpstreamMalformedError: body is not a JSON object
        """
        url = f"{self.config.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        headers = {
            "Authorization": self.config.auth_header,
            "Accept": "application/json",
            "X-Request-ID": f"REQ-{endpoint.replace('/', '-')}-{int(time.time())}",
        }
        logger.log(TRACE, f"GET {endpoint} params={params}")

        try:
            response = self.session.get(url, headers=headers, params=params, timeout=self.config.timeout_seconds)
        except requests.exceptions.RequestException as e:
            raise UpstreamUnavailableError(f"Upstream request to {endpoint} failed", None, str(e)) from e

        if not response.ok:
            raise UpstreamUnavailableError(
                f"Upstream {endpoint} returned {response.status_code}",
                response.status_code,
                truncate_detail(response.text),
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamMalformedError(
                f"Upstream {endpoint} returned a non-JSON body",
                response.status_code,
                truncate_detail(response.text),
            ) from e

        if not isinstance(data, dict):
            raise UpstreamMalformedError(
                f"Upstream {endpoint} returned {type(data).__name__}, expected an object",
                response.status_code,
                truncate_detail(data),
            )
        return cast(dict[str, Any], data)

    def list_records(self, entity: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Fetch one page of a list endpoint.

        Returns the raw payload: {"Records": [...], "HasNextPage": ..., ...}
        """
        query = dict(params or {})
        query["_"] = cache_buster()
        return self._make_request(entity, params=query)

    def get_record(self, entity: str, record_id: int | str) -> dict[str, Any]:
        """Fetch a single record by its numeric id."""
        return self._make_request(f"{entity}/{record_id}")


def load_config_from_env() -> NexudusConfig | None:
    """Load Nexudus configuration from environment variables (and a local .env file).

    For standalone scripts; the API reads the same variables through api.settings.
    """
    load_dotenv()
    username = os.getenv("NEXUDUS_API_USERNAME")
    password = os.getenv("NEXUDUS_API_PASSWORD")

    if not username or not password:
        return None

    return NexudusConfig(
        auth_header=build_basic_auth(username, password),
        base_url=os.getenv("NEXUDUS_BASE_URL", DEFAULT_BASE_URL),
        timeout_seconds=float(os.getenv("NEXUDUS_TIMEOUT_SECONDS", "10")),
    )
