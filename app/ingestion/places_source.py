"""Google Places details source (live place rating and reviews)."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from app.core.errors import ConfigurationError, UpstreamError
from app.core.logging import get_logger

log = get_logger("ingestion.google_places")

PLACE_FIELDS = ("rating", "user_ratings_total", "reviews")
RAW_EXCERPT_CHARS = 400


class GooglePlacesSource:
    """Fetches rating, rating count and reviews for one place id.

    Validation is strict and ordered: transport, JSON body, HTTP status, then
    the body's own ``status`` sentinel. Each failure raises with a distinct code.
    """

    name = "google"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://maps.googleapis.com/maps/api/place/details/json",
        timeout: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def fetch_place(self, place_id: str) -> Dict[str, Any]:
        if not self.api_key:
            raise ConfigurationError("GOOGLE_PLACES_API_KEY missing", code="NO_API_KEY")

        params = {"place_id": place_id, "fields": ",".join(PLACE_FIELDS), "key": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(self.base_url, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(
                "Network error contacting Google Places", code="NETWORK", detail=str(exc)
            ) from exc

        try:
            body = resp.json()
        except ValueError:
            raise UpstreamError(
                "Invalid JSON from Google Places", code="PARSE", raw=resp.text[:RAW_EXCERPT_CHARS]
            ) from None

        if not resp.is_success:
            raise UpstreamError(
                "Non-200 from Google Places", code=f"HTTP_{resp.status_code}", upstream=body
            )

        status = body.get("status") if isinstance(body, dict) else None
        if status != "OK":
            message = body.get("error_message") if isinstance(body, dict) else None
            raise UpstreamError(
                message or "Google Places returned non-OK status",
                code=status or "GOOGLE_ERROR",
                upstream=body,
            )

        result = body.get("result")
        if result is None:
            result = {}
        if not isinstance(result, dict):
            raise UpstreamError("Unexpected 'result' shape from Google Places", code="PARSE", upstream=body)
        reviews = result.get("reviews")
        if reviews is not None and not isinstance(reviews, list):
            raise UpstreamError("Unexpected 'reviews' shape from Google Places", code="PARSE", upstream=body)
        if not all(isinstance(rv, dict) for rv in reviews or []):
            raise UpstreamError("Unexpected review entry from Google Places", code="PARSE", upstream=body)

        log.info(f"Fetched place {place_id}: {len(reviews or [])} reviews")
        return result
