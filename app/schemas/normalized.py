"""Canonical review models shared by the normalizer, the overlay and the API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CanonicalReview(CamelModel):
    id: str
    listing_name: str
    channel: str = "unknown"
    rating: Optional[float] = None
    categories: dict[str, float] = {}
    public_review: str = ""
    submitted_at: Optional[str] = None
    guest_name: Optional[str] = None
    type: Optional[str] = None


class ApprovedReview(CanonicalReview):
    """Canonical review joined with the approval state read for this response."""

    approved: bool = False


class ListingAggregates(CamelModel):
    avg_overall: Optional[float] = None
    count: int = 0
    per_category_averages: dict[str, float] = {}


class Listing(CamelModel):
    listing_name: str
    reviews: list[CanonicalReview] = []
    aggregates: ListingAggregates = Field(default_factory=ListingAggregates)


class ApprovedListing(CamelModel):
    listing_name: str
    reviews: list[ApprovedReview] = []
    aggregates: ListingAggregates = Field(default_factory=ListingAggregates)


class NormalizedMeta(CamelModel):
    listing_count: int = 0
    review_count: int = 0


class NormalizedReviews(CamelModel):
    """Normalizer output: listings keyed by listing name plus dataset counts."""

    listings: dict[str, Listing] = {}
    meta: NormalizedMeta = Field(default_factory=NormalizedMeta)


class ReviewsWithApprovals(CamelModel):
    """Overlay output: same shape as NormalizedReviews, reviews carry `approved`."""

    listings: dict[str, ApprovedListing] = {}
    meta: NormalizedMeta = Field(default_factory=NormalizedMeta)


class ApprovalSnapshot(CamelModel):
    """Point-in-time copy of the approved review ids (unique, insertion ordered)."""

    approved_review_ids: list[str] = []
