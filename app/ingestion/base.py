"""Abstract source interface for review ingestion."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

# Envelope keys probed in this order; the first one holding a list wins.
REVIEW_ENVELOPE_KEYS: Tuple[str, ...] = ("result", "reviews")


class BaseSource(ABC):
    """Abstract base class for property review sources."""

    name: str
    mode: str

    @abstractmethod
    async def fetch(self) -> List[Dict[str, Any]]:
        """Fetch source-native review records, uninterpreted."""

    @property
    def endpoint(self) -> str:
        """Human-readable origin reported in the response envelope."""
        return self.name


def extract_review_records(body: Any) -> Tuple[str, List[Dict[str, Any]]]:
    """Pull the review list out of an upstream body.

    Returns ``(tag, records)`` where ``tag`` names the envelope key that matched,
    ``"list"`` for a bare JSON array, or ``"none"`` when nothing matched.
    """
    if isinstance(body, list):
        return "list", body
    if isinstance(body, dict):
        for key in REVIEW_ENVELOPE_KEYS:
            value = body.get(key)
            if isinstance(value, list):
                return key, value
    return "none", []
