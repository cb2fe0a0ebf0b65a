"""
In-memory document store.

Used for local development and tests. Every read and write copies the
document so callers never share state with the store.
"""

import copy
from typing import Any

from interview_navigator.storage.base import (
    DocumentStore,
    DocumentExistsError,
    DocumentNotFoundError,
)


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed DocumentStore."""

    def __init__(self):
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._unique_fields: dict[str, set[str]] = {}

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    async def ensure_unique(self, collection: str, field: str) -> None:
        self._unique_fields.setdefault(collection, set()).add(field)

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self._collection(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def create(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        # No await between the checks and the insert, so this is atomic
        # with respect to other coroutines on the loop.
        docs = self._collection(collection)
        if doc_id in docs:
            raise DocumentExistsError(collection, doc_id)

        for field in self._unique_fields.get(collection, ()):
            value = data.get(field)
            if value is None:
                continue
            if any(existing.get(field) == value for existing in docs.values()):
                raise DocumentExistsError(collection, doc_id, field=field)

        docs[doc_id] = copy.deepcopy(data)

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._collection(collection)[doc_id] = copy.deepcopy(data)

    async def update(
        self, collection: str, doc_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        docs = self._collection(collection)
        if doc_id not in docs:
            raise DocumentNotFoundError(collection, doc_id)
        docs[doc_id].update(copy.deepcopy(fields))
        return copy.deepcopy(docs[doc_id])

    async def delete(
        self, collection: str, doc_id: str, expected: dict[str, Any] | None = None
    ) -> bool:
        docs = self._collection(collection)
        if doc_id not in docs or not _matches(docs[doc_id], expected or {}):
            return False
        del docs[doc_id]
        return True

    async def find(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        results = [
            doc for doc in self._collection(collection).values()
            if _matches(doc, filters or {})
        ]

        if order_by:
            results.sort(key=lambda doc: doc.get(order_by), reverse=descending)
        if limit is not None:
            results = results[:limit]

        return [copy.deepcopy(doc) for doc in results]


def _matches(doc: dict[str, Any], filters: dict[str, Any]) -> bool:
    for field, expected in filters.items():
        value = doc.get(field)
        if isinstance(expected, (list, tuple)):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True
