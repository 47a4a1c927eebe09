"""Hostaway review normalization: canonical reviews grouped by listing, with aggregates."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from app.core.errors import MalformedReviewError
from app.core.logging import get_logger
from app.schemas.normalized import (
    CanonicalReview,
    Listing,
    ListingAggregates,
    NormalizedMeta,
    NormalizedReviews,
)
from app.schemas.raw import HostawayReview

log = get_logger("normalizer")

UNKNOWN_CHANNEL = "unknown"

SourceRecord = Union[HostawayReview, Mapping[str, Any]]


def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def _round_half_up(value: float, places: str = "0.1") -> float:
    return float(Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP))


def derive_rating(source: HostawayReview) -> Optional[float]:
    """Overall rating verbatim, else the one-decimal half-up mean of the category scores."""
    if source.rating is not None:
        return source.rating
    scores = [c.rating for c in source.reviewCategory if c.rating is not None]
    if not scores:
        return None
    return _round_half_up(_mean(scores))


def normalize_review(record: SourceRecord) -> CanonicalReview:
    if isinstance(record, HostawayReview):
        source = record
    else:
        try:
            source = HostawayReview.model_validate(record)
        except ValidationError as exc:
            raise MalformedReviewError(f"Unreadable review record: {exc}") from exc

    if source.id is None or str(source.id) == "":
        raise MalformedReviewError("Review without id cannot be normalized")
    if not source.listingName:
        raise MalformedReviewError(f"Review {source.id} has no listingName")

    return CanonicalReview(
        id=str(source.id),
        listing_name=source.listingName,
        channel=source.channel or UNKNOWN_CHANNEL,
        rating=derive_rating(source),
        categories={c.category: c.rating for c in source.reviewCategory if c.rating is not None},
        public_review=source.publicReview or "",
        submitted_at=source.submittedAt,
        guest_name=source.guestName,
        type=source.type,
    )


def compute_aggregates(reviews: List[CanonicalReview]) -> ListingAggregates:
    """Null-excluding means: a missing rating or category never counts as zero."""
    per_category: Dict[str, List[float]] = {}
    for review in reviews:
        for category, score in review.categories.items():
            per_category.setdefault(category, []).append(score)

    return ListingAggregates(
        avg_overall=_mean([r.rating for r in reviews if r.rating is not None]),
        count=len(reviews),
        per_category_averages={name: _mean(scores) for name, scores in per_category.items()},
    )


def normalize_hostaway_reviews(records: Iterable[SourceRecord]) -> NormalizedReviews:
    """Normalize source reviews into listings keyed by listing name.

    Reviews keep their source order within a listing. A malformed record aborts
    the whole run with ``MalformedReviewError``; nothing is silently dropped.
    """
    grouped: Dict[str, List[CanonicalReview]] = {}
    seen_ids: set[str] = set()

    for record in records:
        review = normalize_review(record)
        if review.id in seen_ids:
            # Approval is keyed by id alone, so every copy shares one approval state
            log.warning(f"Duplicate review id {review.id} (listing={review.listing_name})")
        seen_ids.add(review.id)
        grouped.setdefault(review.listing_name, []).append(review)

    listings = {
        name: Listing(listing_name=name, reviews=reviews, aggregates=compute_aggregates(reviews))
        for name, reviews in grouped.items()
    }
    meta = NormalizedMeta(
        listing_count=len(listings),
        review_count=sum(listing.aggregates.count for listing in listings.values()),
    )
    log.debug(f"Normalized {meta.review_count} reviews into {meta.listing_count} listings")
    return NormalizedReviews(listings=listings, meta=meta)
