"""Common utilities for tests."""

import unittest.mock
from typing import Any


class MockBatch:
    """Stands in for a Firestore WriteBatch, applying writes on commit."""

    def __init__(self, db: Any) -> None:
        self.db = db
        self.writes: list[tuple[Any, Any]] = []
        self.commit = unittest.mock.MagicMock(side_effect=self._real_commit)

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        self.writes.append((ref, data))

    def delete(self, ref: Any) -> None:
        self.writes.append((ref, "DELETE"))

    def _real_commit(self) -> None:
        for ref, data in self.writes:
            if data == "DELETE":
                ref.delete()
            else:
                ref.set(data)
