"""Raw source schemas (upstream-native shapes, loosely validated)."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class HostawayReviewCategory(BaseModel):
    """One category sub-rating, e.g. {"category": "cleanliness", "rating": 10}."""

    model_config = ConfigDict(extra="ignore")

    category: str
    rating: Optional[float] = None


class HostawayReview(BaseModel):
    """A review record as returned by the Hostaway reviews API (or its fixture)."""

    model_config = ConfigDict(extra="ignore")

    id: Union[int, str, None] = None
    type: Optional[str] = None
    status: Optional[str] = None
    rating: Optional[float] = None
    publicReview: Optional[str] = None
    reviewCategory: list[HostawayReviewCategory] = []
    submittedAt: Optional[str] = None
    guestName: Optional[str] = None
    listingName: Optional[str] = None
    channel: Optional[str] = None


class GooglePlaceReview(BaseModel):
    """A single entry of `result.reviews` in a Places details response."""

    model_config = ConfigDict(extra="ignore")

    author_name: Optional[str] = None
    rating: Optional[float] = None
    time: Optional[int] = None
    text: Optional[str] = None
