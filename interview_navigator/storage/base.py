"""
Document store interface for Interview Navigator

All persistence goes through a DocumentStore. Documents are JSON-compatible
dicts keyed by a string id within a named collection.
"""

from abc import ABC, abstractmethod
from typing import Any


# Collection names
INTERVIEWERS = "interviewers"
BOOKINGS = "bookings"
REVIEWS = "reviews"
RATINGS = "ratings"
SLOT_CLAIMS = "slot_claims"


class DocumentStoreError(Exception):
    """Base class for store-level errors."""
    pass


class DocumentExistsError(DocumentStoreError):
    """Raised by a conditional create when the id or a unique field collides."""

    def __init__(self, collection: str, doc_id: str, field: str | None = None):
        self.collection = collection
        self.doc_id = doc_id
        self.field = field
        target = f"field '{field}'" if field else f"id '{doc_id}'"
        super().__init__(f"Document already exists in '{collection}' ({target})")


class DocumentNotFoundError(DocumentStoreError):
    """Raised when updating a document that does not exist."""

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document '{doc_id}' not found in '{collection}'")


class DocumentStore(ABC):
    """
    Minimal async document store.

    Filters passed to `find` are equality matches; a list or tuple value
    matches any of its members.
    """

    @abstractmethod
    async def ensure_unique(self, collection: str, field: str) -> None:
        """Enforce uniqueness of `field` across documents in `collection`."""

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Fetch one document, or None."""

    @abstractmethod
    async def create(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """
        Insert a new document.

        Raises:
            DocumentExistsError: if the id or a unique field already exists.
        """

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Insert or fully replace a document."""

    @abstractmethod
    async def update(
        self, collection: str, doc_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Merge `fields` into an existing document and return the result.

        Raises:
            DocumentNotFoundError: if the document does not exist.
        """

    @abstractmethod
    async def delete(
        self, collection: str, doc_id: str, expected: dict[str, Any] | None = None
    ) -> bool:
        """
        Delete a document. Returns False if it did not exist.

        With `expected`, the document is only deleted while it still holds
        those field values, as a single atomic step.
        """

    @abstractmethod
    async def find(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Query documents by equality filters."""

    async def close(self) -> None:
        """Release client resources."""
        return None
