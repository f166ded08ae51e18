"""Application-wide resources attached to the Flask app."""

from __future__ import annotations

import os

from flask import Flask, current_app

from .store import DocumentStore, FirestoreStore, JsonFileStore

STORE_KEY = "hanghive.store"


def init_store(app: Flask) -> DocumentStore:
    """Create the configured document store and attach it to ``app``."""
    backend = app.config["STORAGE_BACKEND"]
    if backend == "firestore":
        store: DocumentStore = FirestoreStore()
    elif backend == "json":
        path = app.config.get("DATA_FILE") or os.path.join(
            app.instance_path, "database.json"
        )
        store = JsonFileStore(path)
    else:
        raise ValueError(f"Unknown storage backend: {backend}")

    app.extensions[STORE_KEY] = store
    app.logger.info(f"Using {backend} storage backend")
    return store


def get_store() -> DocumentStore:
    """Return the document store of the current app."""
    return current_app.extensions[STORE_KEY]
