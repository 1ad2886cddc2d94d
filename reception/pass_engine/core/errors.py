"""Error classes for pass resolution.

Each error knows the HTTP status the API boundary reports for it."""

from __future__ import annotations

from typing import Any

DETAIL_LIMIT = 400


def truncate_detail(text: object, limit: int = DETAIL_LIMIT) -> str:
    """Render text for diagnostics, capped at `limit` characters."""
    return str(text)[:limit]


class PassError(Exception):
    """Base exception for pass resolution errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class InvalidInputError(PassError):
    """Raised when the identifier or person type is missing or ill-typed."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(PassError):
    """Raised when no person matches the identifier."""

    status_code = 404


class UpstreamUnavailableError(PassError):
    """Raised when a required upstream call fails.

    upstream_status is None for transport failures (timeouts, refused connections).
    """

    status_code = 502

    def __init__(self, message: str, upstream_status: int | None = None, detail: str = ""):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.detail = truncate_detail(detail)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "status": self.upstream_status, "detail": self.detail}


class UpstreamMalformedError(UpstreamUnavailableError):
    """Raised when an upstream body cannot be decoded as JSON at all."""
