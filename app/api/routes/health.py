"""Health routes - liveness check."""

from fastapi import APIRouter

from app.schemas.api import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health():
    """Liveness probe; upstream APIs are deliberately not contacted."""
    return HealthResponse()
