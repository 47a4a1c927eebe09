"""Approval overlay: join normalized listings with an approval snapshot."""

from __future__ import annotations

from app.schemas.normalized import (
    ApprovalSnapshot,
    ApprovedListing,
    ApprovedReview,
    NormalizedReviews,
    ReviewsWithApprovals,
)


def apply_approvals(normalized: NormalizedReviews, snapshot: ApprovalSnapshot) -> ReviewsWithApprovals:
    """Return a copy of ``normalized`` whose reviews carry ``approved``.

    Pure: neither input is modified. The join is by id alone, so a review id
    that appears under two listings reports the same status in both.
    """
    approved_ids = frozenset(snapshot.approved_review_ids)

    listings = {
        name: ApprovedListing(
            listing_name=listing.listing_name,
            reviews=[
                ApprovedReview(**review.model_dump(), approved=review.id in approved_ids)
                for review in listing.reviews
            ],
            aggregates=listing.aggregates.model_copy(deep=True),
        )
        for name, listing in normalized.listings.items()
    }
    return ReviewsWithApprovals(listings=listings, meta=normalized.meta.model_copy())
