"""Place Review Service - live Google Places rating and reviews."""

from __future__ import annotations

import random
from typing import Callable, Optional, Sequence, Union

from app.core.errors import ReviewServiceError
from app.core.logging import get_logger
from app.ingestion.places_source import GooglePlacesSource
from app.schemas.api import PlaceReview, PlaceReviewsError, PlaceReviewsResponse
from app.schemas.raw import GooglePlaceReview

log = get_logger("places_service")

REVIEW_TEXT_CHARS = 400

PlaceSelector = Callable[[], str]


def random_place_selector(candidates: Sequence[str], rng: Optional[random.Random] = None) -> PlaceSelector:
    """Uniform choice over ``candidates``; pass a seeded ``rng`` for repeatable picks."""
    if not candidates:
        raise ValueError("At least one candidate place id is required")
    chooser = rng or random.Random()
    pool = list(candidates)
    return lambda: chooser.choice(pool)


def to_place_review(entry: GooglePlaceReview) -> PlaceReview:
    return PlaceReview(
        id="" if entry.time is None else str(entry.time),
        author=entry.author_name,
        rating=entry.rating,
        time=entry.time,
        text=(entry.text or "")[:REVIEW_TEXT_CHARS],
    )


class PlaceReviewService:
    """Aggregates a place's live rating and reviews; failures come back as values."""

    def __init__(self, source: GooglePlacesSource, selector: PlaceSelector):
        self.source = source
        self.selector = selector

    async def get_place_reviews(
        self, place_id: Optional[str] = None
    ) -> Union[PlaceReviewsResponse, PlaceReviewsError]:
        place_id = place_id or self.selector()
        try:
            result = await self.source.fetch_place(place_id)
            return PlaceReviewsResponse(
                place_id=place_id,
                rating=result.get("rating"),
                user_ratings_total=result.get("user_ratings_total") or 0,
                reviews=[to_place_review(GooglePlaceReview.model_validate(rv)) for rv in result.get("reviews") or []],
            )
        except ReviewServiceError as exc:
            log.warning(f"Place reviews failed for {place_id}: {exc.code} {exc.message}")
            return PlaceReviewsError(
                code=exc.code,
                message=exc.message,
                place_id=place_id,
                http_status=exc.status_code,
                **exc.extra,
            )
        except ValueError as exc:
            # pydantic ValidationError subclasses ValueError
            log.warning(f"Unexpected place payload for {place_id}: {exc}")
            return PlaceReviewsError(code="PARSE", message="Unexpected place payload", place_id=place_id, detail=str(exc))
