"""Hostaway reviews API source implementation (live mode)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from app.core.errors import ConfigurationError, UpstreamError
from app.core.logging import get_logger
from .base import BaseSource, extract_review_records

log = get_logger("ingestion.hostaway")

RAW_EXCERPT_CHARS = 400


class HostawayAPISource(BaseSource):
    """Fetches the account's reviews from Hostaway in a single request."""

    name = "hostaway"
    mode = "live"

    def __init__(
        self,
        account_id: Optional[str],
        api_key: Optional[str],
        base_url: str = "https://api.hostaway.com/v1/reviews",
        timeout: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.account_id = account_id
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    @property
    def params(self) -> Dict[str, Any]:
        return {"accountId": self.account_id, "limit": 100, "page": 1}

    @property
    def endpoint(self) -> str:
        return str(httpx.URL(self.base_url, params=self.params))

    async def fetch(self) -> List[Dict[str, Any]]:
        if not self.account_id or not self.api_key:
            raise ConfigurationError("HOSTAWAY_ACCOUNT_ID / HOSTAWAY_API_KEY missing", code="MISSING_CREDENTIALS")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "X-Account-Id": self.account_id,
            "Accept": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(self.base_url, params=self.params, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamError("Network error contacting Hostaway", code="NETWORK", detail=str(exc)) from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.is_success:
            raise UpstreamError(
                f"Hostaway returned HTTP {resp.status_code}",
                code=f"HTTP_{resp.status_code}",
                upstream=body if body is not None else resp.text[:RAW_EXCERPT_CHARS],
            )
        if body is None:
            raise UpstreamError("Invalid JSON from Hostaway", code="PARSE", raw=resp.text[:RAW_EXCERPT_CHARS])

        tag, records = extract_review_records(body)
        log.info(f"Fetched {len(records)} reviews from Hostaway (envelope={tag})")
        return records
