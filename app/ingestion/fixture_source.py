"""Bundled Hostaway fixture source (mock mode)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from app.core.logging import get_logger
from .base import BaseSource, extract_review_records

log = get_logger("ingestion.fixture")


class HostawayFixtureSource(BaseSource):
    """Reads Hostaway-shaped reviews from a local JSON document.

    Unlike the live source, a missing or unreadable fixture is an error: it is
    the fallback of last resort and there is nothing further to fall back to.
    """

    name = "hostaway"
    mode = "mock"

    def __init__(self, file_path: Path | str):
        self.file_path = Path(file_path)

    @property
    def endpoint(self) -> str:
        return f"mock:{self.file_path.name}"

    async def fetch(self) -> List[Dict[str, Any]]:
        with self.file_path.open("r", encoding="utf-8") as f:
            body = json.load(f)

        tag, records = extract_review_records(body)
        if tag == "none":
            raise ValueError(f"Fixture {self.file_path.name} has no 'result' or 'reviews' list")

        log.info(f"Loaded {len(records)} reviews from fixture {self.file_path.name} (envelope={tag})")
        return records
