"""
Passes Router - Pass resolution and people search endpoints.

The engine is synchronous (requests); handlers run it in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from reception.pass_engine.passes import PassResolver

from ..dependencies import get_pass_resolver
from ..schemas import ErrorResponse, PassResponse, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["passes"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@router.get("/get-pass", response_model=PassResponse, response_model_by_alias=True, responses=ERROR_RESPONSES)
async def get_pass(
    type: str | None = Query(default=None, description="visitor or coworker"),
    id: str | None = Query(default=None, description="Numeric id (or visitor GUID)"),
    name: str | None = Query(default=None, description="Free-text name when no id is known"),
    resolver: PassResolver = Depends(get_pass_resolver),
) -> dict[str, Any]:
    """Resolve a visitor or coworker to their current pass."""
    logger.info(f"Pass request type={type} id={id} name={name!r}")
    resolution = await asyncio.to_thread(resolver.resolve_pass, type, id, name)
    logger.info(f"Pass resolved: source={resolution.source.value} matches={resolution.matches}")
    return resolution.to_dict()


@router.get("/search", response_model=SearchResponse, responses=ERROR_RESPONSES)
async def search(
    name: str | None = Query(default=None, description="Free-text name to search for"),
    type: str | None = Query(default=None, description="Limit to visitor or coworker"),
    resolver: PassResolver = Depends(get_pass_resolver),
) -> dict[str, Any]:
    """List visitors and coworkers matching a name."""
    entries = await asyncio.to_thread(resolver.search_people, name, type or None)
    return {"results": [entry.to_dict() for entry in entries]}
