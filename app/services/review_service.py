"""Review Service - property reviews with approval state, in one response."""

from __future__ import annotations

from app.core.logging import get_logger
from app.ingestion.runner import IngestionRunner
from app.schemas.api import HostawayReviewsResponse
from app.services.approval_store import ApprovalStore
from app.services.normalizer import normalize_hostaway_reviews
from app.services.overlay import apply_approvals

log = get_logger("review_service")


class ReviewService:
    """Loads source reviews, normalizes them and overlays current approvals.

    Nothing is cached: sources are read and listings rebuilt on every call, and
    the approval snapshot is taken after normalization so it is as fresh as
    possible when the response is assembled.
    """

    def __init__(self, runner: IngestionRunner, store: ApprovalStore):
        self.runner = runner
        self.store = store

    async def get_property_reviews(self) -> HostawayReviewsResponse:
        batch = await self.runner.run()
        normalized = normalize_hostaway_reviews(batch.records)
        overlaid = apply_approvals(normalized, self.store.load())

        log.info(
            f"Served {normalized.meta.review_count} reviews across "
            f"{normalized.meta.listing_count} listings (mode={batch.mode})"
        )
        return HostawayReviewsResponse(
            mode=batch.mode,
            endpoint=batch.endpoint,
            listings=overlaid.listings,
            meta=overlaid.meta,
            persistence=self.store.persistence,
        )
