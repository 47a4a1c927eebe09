# Services package
from app.services.approval_store import ApprovalStore, InMemoryApprovalStore, JsonFileApprovalStore
from app.services.normalizer import normalize_hostaway_reviews
from app.services.overlay import apply_approvals
from app.services.places_service import PlaceReviewService, random_place_selector
from app.services.review_service import ReviewService

__all__ = [
    "ApprovalStore",
    "InMemoryApprovalStore",
    "JsonFileApprovalStore",
    "normalize_hostaway_reviews",
    "apply_approvals",
    "PlaceReviewService",
    "random_place_selector",
    "ReviewService",
]
