"""Shared fixtures: sample source reviews and fake upstream transports."""

import json
from typing import Callable, List

import httpx
import pytest

from app.core.config import settings


def make_review(review_id, listing, rating=None, categories=None, **extra):
    record = {
        "id": review_id,
        "type": "guest-to-host",
        "status": "published",
        "rating": rating,
        "publicReview": extra.pop("publicReview", f"Review {review_id}"),
        "reviewCategory": [{"category": name, "rating": score} for name, score in (categories or {}).items()],
        "submittedAt": "2021-01-01 10:00:00",
        "guestName": "Guest",
        "listingName": listing,
        "channel": "airbnb",
    }
    record.update(extra)
    return record


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording)

    @property
    def call_count(self) -> int:
        return len(self.requests)


def json_transport(body, status_code: int = 200) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(status_code, json=body))


@pytest.fixture
def fixture_path():
    return settings.HOSTAWAY_FIXTURE_PATH


@pytest.fixture
def write_fixture(tmp_path):
    """Write a Hostaway-shaped fixture document and return its path."""

    def _write(records, envelope="result"):
        path = tmp_path / "reviews.json"
        body = records if envelope is None else {"status": "success", envelope: records}
        path.write_text(json.dumps(body), encoding="utf-8")
        return path

    return _write
