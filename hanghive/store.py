"""Persistence adapters for the single ``{users, groups}`` document.

Every backend exposes the same three operations:

* ``load()`` returns the whole document as plain dicts and lists.
* ``save(data)`` overwrites the whole document.
* ``transaction()`` is a context manager that loads the document, yields it
  for in-memory mutation and saves it only if the block exits cleanly, so a
  failed operation never leaves a partial write behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from .constants import GROUPS, USERS
from .core.types import Database

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)

FIRESTORE_BATCH_LIMIT = 400


def empty_database() -> Database:
    """Return a new, empty document."""
    return {USERS: [], GROUPS: []}


class StorageError(Exception):
    """Raised when the document cannot be read or written."""

    pass


class DocumentStore:
    """Base class for whole-document stores."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def load(self) -> Database:
        raise NotImplementedError

    def save(self, data: Database) -> None:
        raise NotImplementedError

    @contextmanager
    def transaction(self) -> Iterator[Database]:
        """Load, yield for mutation, and write back on success."""
        with self._lock:
            data = self.load()
            yield data
            self.save(data)


class JsonFileStore(DocumentStore):
    """Keeps the document in a single pretty-printed JSON file."""

    def __init__(self, path: str) -> None:
        super().__init__()
        self.path = path

    def _ensure_file(self) -> None:
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        if not os.path.exists(self.path):
            self.save(empty_database())
            logger.info(f"Created empty database at {self.path}")

    def load(self) -> Database:
        with self._lock:
            self._ensure_file()
            try:
                with open(self.path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error loading database from {self.path}: {e}")
                raise StorageError(f"Could not read {self.path}") from e

        if not isinstance(data, dict):
            logger.error(f"Database at {self.path} is not a JSON object")
            raise StorageError(f"Could not read {self.path}")
        data.setdefault(USERS, [])
        data.setdefault(GROUPS, [])
        return cast(Database, data)

    def save(self, data: Database) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        with self._lock:
            os.makedirs(directory, exist_ok=True)
            # Write beside the target and swap, readers never see a partial file.
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except OSError as e:
                logger.error(f"Error saving database to {self.path}: {e}")
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise StorageError(f"Could not write {self.path}") from e


class FirestoreStore(DocumentStore):
    """Keeps users and groups as one Firestore document per entity.

    Hangouts and messages stay nested inside their group document.
    """

    def __init__(self, db: Client | None = None) -> None:
        super().__init__()
        self._db = db

    @property
    def db(self) -> Any:
        if self._db is None:
            self._db = firestore.client()
        return self._db

    def _read_collection(self, name: str) -> list[dict[str, Any]]:
        records = []
        for doc in self.db.collection(name).stream():
            if not doc.exists:
                continue
            record = doc.to_dict() or {}
            record["id"] = doc.id
            records.append(record)
        records.sort(key=lambda r: r.get("createdAt", ""))
        return records

    def load(self) -> Database:
        with self._lock:
            return {
                USERS: self._read_collection(USERS),
                GROUPS: self._read_collection(GROUPS),
            }

    def save(self, data: Database) -> None:
        with self._lock:
            writes: list[tuple[Any, dict[str, Any] | None]] = []
            for name in (USERS, GROUPS):
                collection = self.db.collection(name)
                records = cast("list[dict[str, Any]]", data.get(name, []))
                wanted = {record["id"] for record in records}
                for record in records:
                    writes.append((collection.document(record["id"]), record))
                for doc in collection.stream():
                    if doc.id not in wanted:
                        writes.append((collection.document(doc.id), None))
            self._commit(writes)

    def _commit(self, writes: list[tuple[Any, dict[str, Any] | None]]) -> None:
        for start in range(0, len(writes), FIRESTORE_BATCH_LIMIT):
            batch = self.db.batch()
            for ref, record in writes[start : start + FIRESTORE_BATCH_LIMIT]:
                if record is None:
                    batch.delete(ref)
                else:
                    batch.set(ref, record)
            batch.commit()
