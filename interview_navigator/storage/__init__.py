"""
Persistence layer for Interview Navigator

Contains:
- DocumentStore interface and store-level errors
- In-memory store (development, tests)
- MongoDB store (motor)
"""

from interview_navigator.config.settings import Settings
from interview_navigator.storage.base import (
    DocumentStore,
    DocumentStoreError,
    DocumentExistsError,
    DocumentNotFoundError,
    INTERVIEWERS,
    BOOKINGS,
    REVIEWS,
    RATINGS,
    SLOT_CLAIMS,
)
from interview_navigator.storage.memory import InMemoryDocumentStore


def create_store(settings: Settings) -> DocumentStore:
    """Build the document store selected by `settings.storage_backend`."""
    backend = settings.storage_backend.lower()

    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "mongo":
        from interview_navigator.storage.mongo import MongoDocumentStore
        return MongoDocumentStore.from_url(settings.mongodb_url, settings.mongodb_database)

    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


__all__ = [
    "DocumentStore",
    "DocumentStoreError",
    "DocumentExistsError",
    "DocumentNotFoundError",
    "InMemoryDocumentStore",
    "create_store",
    "INTERVIEWERS",
    "BOOKINGS",
    "REVIEWS",
    "RATINGS",
    "SLOT_CLAIMS",
]
