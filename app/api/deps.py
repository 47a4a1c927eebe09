"""API dependencies"""

from functools import lru_cache

from fastapi import Depends

from app.core.config import settings
from app.ingestion.fixture_source import HostawayFixtureSource
from app.ingestion.hostaway_source import HostawayAPISource
from app.ingestion.places_source import GooglePlacesSource
from app.ingestion.runner import IngestionRunner
from app.services.approval_store import ApprovalStore, InMemoryApprovalStore, JsonFileApprovalStore
from app.services.places_service import PlaceReviewService, random_place_selector
from app.services.review_service import ReviewService


@lru_cache
def get_approval_store() -> ApprovalStore:
    """Process-wide approval store (the only mutable state shared across requests)."""
    if settings.APPROVAL_STORE == "memory":
        return InMemoryApprovalStore()
    return JsonFileApprovalStore(settings.APPROVALS_PATH)


def get_ingestion_runner() -> IngestionRunner:
    primary = None
    if settings.hostaway_configured:
        primary = HostawayAPISource(
            account_id=settings.HOSTAWAY_ACCOUNT_ID,
            api_key=settings.HOSTAWAY_API_KEY,
            base_url=settings.HOSTAWAY_API_URL,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
    return IngestionRunner(fallback=HostawayFixtureSource(settings.HOSTAWAY_FIXTURE_PATH), primary=primary)


def get_review_service(
    runner: IngestionRunner = Depends(get_ingestion_runner),
    store: ApprovalStore = Depends(get_approval_store),
) -> ReviewService:
    return ReviewService(runner, store)


def get_place_review_service() -> PlaceReviewService:
    source = GooglePlacesSource(
        api_key=settings.GOOGLE_PLACES_API_KEY,
        base_url=settings.GOOGLE_PLACES_URL,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
    )
    return PlaceReviewService(source, random_place_selector(settings.GOOGLE_PLACE_IDS))
