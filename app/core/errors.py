"""Error taxonomy shared by the review sources, services and routes."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ReviewServiceError(Exception):
    """Base error carrying a machine-readable code and the HTTP status to surface."""

    code: str = "error"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        **extra: Any,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.extra: Dict[str, Any] = {k: v for k, v in extra.items() if v is not None}

    def to_payload(self) -> Dict[str, Any]:
        return {"status": "error", "code": self.code, "message": self.message, **self.extra}


class ConfigurationError(ReviewServiceError):
    """A required credential or setting is missing; no upstream call was made."""

    code = "MISSING_CREDENTIALS"
    status_code = 400


class UpstreamError(ReviewServiceError):
    """An upstream API failed: transport, body parsing, HTTP status, or logical status."""

    code = "UPSTREAM_ERROR"
    status_code = 502


class MalformedReviewError(ValueError):
    """A source review cannot be normalized (missing id or listing name)."""
