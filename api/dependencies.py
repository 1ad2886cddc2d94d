"""
Shared dependencies for the reception pass API.

Builds the Nexudus client once per process and a PassResolver per request
(the resolver holds no state between resolutions).
"""

from __future__ import annotations

from functools import lru_cache

from nexudus.client import NexudusClient, NexudusConfig, build_basic_auth
from reception.pass_engine.core.config import EngineConfig
from reception.pass_engine.passes import PassResolver

from .settings import Settings, get_settings


def engine_config_from_settings(settings: Settings) -> EngineConfig:
    """Map flat settings onto the engine's limits."""
    return EngineConfig(
        active_margin_minutes=settings.pass_active_margin_minutes,
        page_cap=settings.pass_page_cap,
        bookings_page_size=settings.pass_bookings_page_size,
        booking_visitors_page_size=settings.pass_booking_visitors_page_size,
        search_page_size=settings.pass_search_page_size,
        broad_search_page_size=settings.pass_broad_search_page_size,
        max_booking_detail_fetches=settings.pass_max_booking_detail_fetches,
        max_name_candidates=settings.pass_max_name_candidates,
    )


@lru_cache
def get_nexudus_client() -> NexudusClient:
    """Process-wide Nexudus client (one requests.Session for connection reuse)."""
    settings = get_settings()
    config = NexudusConfig(
        auth_header=build_basic_auth(settings.nexudus_api_username, settings.nexudus_api_password),
        base_url=settings.nexudus_base_url,
        timeout_seconds=settings.nexudus_timeout_seconds,
    )
    return NexudusClient(config)


def get_pass_resolver() -> PassResolver:
    """FastAPI dependency returning a resolver bound to the shared client."""
    return PassResolver(get_nexudus_client(), config=engine_config_from_settings(get_settings()))


__all__ = [
    "engine_config_from_settings",
    "get_nexudus_client",
    "get_pass_resolver",
]
