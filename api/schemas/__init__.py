"""
Pydantic schemas for the reception pass API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .passes import (
    ErrorResponse,
    PassBody,
    PassResponse,
    SearchResponse,
    SearchResult,
)

__all__ = [
    "ErrorResponse",
    "PassBody",
    "PassResponse",
    "SearchResponse",
    "SearchResult",
]
