from typing import Any, Literal, Optional

from pydantic import Field

from app.schemas.normalized import ApprovedListing, CamelModel, NormalizedMeta


class HostawayReviewsResponse(CamelModel):
    status: Literal["success"] = "success"
    mode: Literal["live", "mock"]
    endpoint: str
    listings: dict[str, ApprovedListing]
    meta: NormalizedMeta
    persistence: str


class PlaceReview(CamelModel):
    id: str
    author: Optional[str] = None
    rating: Optional[float] = None
    time: Optional[int] = None
    text: str = ""


class PlaceReviewsResponse(CamelModel):
    status: Literal["success"] = "success"
    mode: Literal["live"] = "live"
    place_id: str
    rating: Optional[float] = None
    user_ratings_total: int = 0
    reviews: list[PlaceReview] = []


class PlaceReviewsError(CamelModel):
    """Structured failure of the place-reviews aggregator; never raised."""

    status: Literal["error"] = "error"
    code: str
    message: str
    place_id: Optional[str] = None
    raw: Optional[str] = None
    upstream: Optional[Any] = None
    detail: Optional[str] = None
    http_status: int = Field(default=502, exclude=True)


class ApprovalsResponse(CamelModel):
    approved_review_ids: list[str]
    persistence: str


class ErrorResponse(CamelModel):
    status: Literal["error"] = "error"
    message: str
    detail: Optional[Any] = None


class HealthResponse(CamelModel):
    status: Literal["ok"] = "ok"
