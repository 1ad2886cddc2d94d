"""
Pydantic schemas for pass and search endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PassBody(BaseModel):
    """The pass shown on the kiosk."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    resource: str
    from_time: str | None = Field(default=None, alias="fromTime")
    to_time: str | None = Field(default=None, alias="toTime")
    booking_id: int | None = Field(default=None, alias="bookingId")


class PassResponse(BaseModel):
    """Response for GET /api/get-pass."""

    source: Literal["booking", "visitor-fallback", "none"]
    pass_: PassBody | None = Field(default=None, alias="pass")
    matches: int = 1

    model_config = ConfigDict(populate_by_name=True)


class SearchResult(BaseModel):
    """One autocomplete row."""

    type: Literal["visitor", "coworker"]
    id: int | None
    label: str
    sub: str


class SearchResponse(BaseModel):
    """Response for GET /api/search."""

    results: list[SearchResult]


class ErrorResponse(BaseModel):
    """Error envelope for 4xx/5xx responses."""

    error: str
    status: int | None = None
    detail: str | None = None
