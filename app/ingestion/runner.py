"""Orchestration logic for property review ingestion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.core.errors import ConfigurationError, UpstreamError
from app.core.logging import get_logger
from .base import BaseSource

log = get_logger("ingestion.runner")


@dataclass
class SourceBatch:
    records: List[Dict[str, Any]]
    mode: str
    endpoint: str


class IngestionRunner:
    """Runs the live source and falls back to the bundled fixture.

    Only missing credentials and upstream non-2xx statuses trigger the fallback.
    Network and parse failures of the live call propagate to the caller.
    """

    def __init__(self, fallback: BaseSource, primary: Optional[BaseSource] = None):
        self.primary = primary
        self.fallback = fallback

    async def run(self) -> SourceBatch:
        if self.primary is not None:
            try:
                records = await self.primary.fetch()
                return SourceBatch(records=records, mode=self.primary.mode, endpoint=self.primary.endpoint)
            except ConfigurationError as exc:
                log.info(f"Source={self.primary.name} not configured ({exc.code}); using {self.fallback.endpoint}")
            except UpstreamError as exc:
                if not exc.code.startswith("HTTP_"):
                    raise
                log.warning(f"Source={self.primary.name} failed with {exc.code}; using {self.fallback.endpoint}")

        records = await self.fallback.fetch()
        return SourceBatch(records=records, mode=self.fallback.mode, endpoint=self.fallback.endpoint)
