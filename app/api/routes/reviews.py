"""Review routes - property reviews, place reviews and approval mutations."""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_approval_store, get_place_review_service, get_review_service
from app.core.errors import ReviewServiceError
from app.core.logging import get_logger
from app.schemas.api import (
    ApprovalsResponse,
    ErrorResponse,
    HostawayReviewsResponse,
    PlaceReviewsError,
    PlaceReviewsResponse,
)
from app.services.approval_store import ApprovalStore
from app.services.places_service import PlaceReviewService
from app.services.review_service import ReviewService

router = APIRouter(prefix="/api/reviews", tags=["reviews"])
log = get_logger("review_routes")


def _error(status_code: int, message: str, detail=None) -> JSONResponse:
    body = ErrorResponse(message=message, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))


# -----------------------------------------------------------------------------
# Property (Hostaway) Reviews
# -----------------------------------------------------------------------------


@router.get(
    "/hostaway",
    response_model=HostawayReviewsResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_hostaway_reviews(service: ReviewService = Depends(get_review_service)):
    """
    Normalized property reviews grouped by listing, with approval state.

    Live Hostaway data when credentials are configured, otherwise the bundled
    fixture (`mode: "mock"`). Each review carries `approved`, read from the
    approval store for this request.
    """
    try:
        return await service.get_property_reviews()
    except ReviewServiceError as exc:
        log.error(f"Hostaway reviews failed: {exc.code} {exc.message}")
        return _error(500, exc.message, detail={"code": exc.code, **exc.extra})
    except (OSError, ValueError) as exc:
        # Fixture unreadable or a source review that cannot be normalized
        log.exception(f"Hostaway reviews failed: {exc}")
        return _error(500, str(exc))


# -----------------------------------------------------------------------------
# Place (Google) Reviews
# -----------------------------------------------------------------------------


@router.get(
    "/google",
    response_model=PlaceReviewsResponse,
    responses={400: {"model": PlaceReviewsError}, 502: {"model": PlaceReviewsError}},
)
async def get_google_reviews(
    place_id_camel: Optional[str] = Query(None, alias="placeId", description="Place id to query"),
    place_id: Optional[str] = Query(None, description="Alias of placeId"),
    service: PlaceReviewService = Depends(get_place_review_service),
):
    """
    Live rating and reviews for a place.

    Without `placeId` a candidate place is picked at random. Upstream failures
    are returned as `{status: "error", code, message}` with 400 or 502.
    """
    result: Union[PlaceReviewsResponse, PlaceReviewsError] = await service.get_place_reviews(
        place_id_camel or place_id
    )
    if isinstance(result, PlaceReviewsError):
        return JSONResponse(
            status_code=result.http_status,
            content=result.model_dump(by_alias=True, exclude_none=True),
        )
    return result


# -----------------------------------------------------------------------------
# Approvals
# -----------------------------------------------------------------------------


@router.post("/approvals", include_in_schema=False)
@router.post("/approvals/", include_in_schema=False)
@router.delete("/approvals", include_in_schema=False)
@router.delete("/approvals/", include_in_schema=False)
def approval_without_id():
    """The id only comes from the path; nothing to approve or unapprove here."""
    return _error(400, "Missing id")


@router.post("/approvals/{review_id}", response_model=ApprovalsResponse, responses={400: {"model": ErrorResponse}})
def approve_review(review_id: str = Path(...), store: ApprovalStore = Depends(get_approval_store)):
    """Mark a review approved for public display (idempotent)."""
    if not review_id.strip():
        return _error(400, "Missing id")

    snapshot = store.approve(review_id)
    return ApprovalsResponse(approved_review_ids=snapshot.approved_review_ids, persistence=store.persistence)


@router.delete("/approvals/{review_id}", response_model=ApprovalsResponse, responses={400: {"model": ErrorResponse}})
def unapprove_review(review_id: str = Path(...), store: ApprovalStore = Depends(get_approval_store)):
    """Remove a review's approval (idempotent)."""
    if not review_id.strip():
        return _error(400, "Missing id")

    snapshot = store.unapprove(review_id)
    return ApprovalsResponse(approved_review_ids=snapshot.approved_review_ids, persistence=store.persistence)
