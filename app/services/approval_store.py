"""Approval store - the set of review ids marked for public display."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List

from app.core.logging import get_logger
from app.schemas.normalized import ApprovalSnapshot

log = get_logger("approval_store")


def _unique(ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(str(i) for i in ids))


class ApprovalStore(ABC):
    """Set of approved review ids with idempotent, serialized mutations.

    Every method returns a fresh ``ApprovalSnapshot``; callers never hold a
    reference into the store's own state.
    """

    persistence: str

    def __init__(self):
        self._lock = threading.Lock()

    @abstractmethod
    def _read(self) -> List[str]:
        """Return the stored ids (may contain duplicates if written externally)."""

    @abstractmethod
    def _write(self, ids: List[str]) -> None:
        """Replace the stored ids in one step."""

    def load(self) -> ApprovalSnapshot:
        with self._lock:
            return ApprovalSnapshot(approved_review_ids=_unique(self._read()))

    def approve(self, review_id: str) -> ApprovalSnapshot:
        with self._lock:
            ids = _unique(self._read())
            if review_id not in ids:
                ids.append(review_id)
                self._write(ids)
                log.info(f"Approved review {review_id} (total={len(ids)})")
            return ApprovalSnapshot(approved_review_ids=ids)

    def unapprove(self, review_id: str) -> ApprovalSnapshot:
        with self._lock:
            current = _unique(self._read())
            ids = [i for i in current if i != review_id]
            if len(ids) != len(current):
                self._write(ids)
                log.info(f"Unapproved review {review_id} (total={len(ids)})")
            return ApprovalSnapshot(approved_review_ids=ids)


class InMemoryApprovalStore(ApprovalStore):
    """Process-local store; approvals are lost on restart."""

    persistence = "ephemeral"

    def __init__(self, initial: Iterable[str] = ()):
        super().__init__()
        self._ids = _unique(initial)

    def _read(self) -> List[str]:
        return list(self._ids)

    def _write(self, ids: List[str]) -> None:
        self._ids = list(ids)


class JsonFileApprovalStore(ApprovalStore):
    """Stores ``{"approvedReviewIds": [...]}`` in a small JSON document.

    The document is created empty on first use. Writes go through a temp file
    in the same directory followed by ``os.replace``.
    """

    persistence = "file"

    def __init__(self, path: Path | str):
        super().__init__()
        self.path = Path(path)
        if not self.path.exists():
            self._write([])
            log.info(f"Created empty approvals file at {self.path}")

    def _read(self) -> List[str]:
        if not self.path.exists():
            log.warning(f"Approvals file {self.path} missing; treating as empty")
            return []
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return list(data.get("approvedReviewIds", []))

    def _write(self, ids: List[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".approvals-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({"approvedReviewIds": ids}, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
