"""
MongoDB document store backed by motor.

Document ids map to `_id`, so a conditional create is a plain insert that
fails with DuplicateKeyError on collision. Unique fields are enforced with
unique indexes.
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from interview_navigator.storage.base import (
    DocumentStore,
    DocumentExistsError,
    DocumentNotFoundError,
)

logger = logging.getLogger(__name__)


class MongoDocumentStore(DocumentStore):
    """DocumentStore over a motor database."""

    def __init__(self, db: AsyncIOMotorDatabase, client: AsyncIOMotorClient | None = None):
        self.db = db
        self._client = client

    @classmethod
    def from_url(cls, url: str, database: str) -> "MongoDocumentStore":
        client = AsyncIOMotorClient(url)
        logger.info(f"Connected MongoDB store to database '{database}'")
        return cls(client[database], client=client)

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    async def ensure_unique(self, collection: str, field: str) -> None:
        await self.db[collection].create_index(field, unique=True)

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = await self.db[collection].find_one({"_id": doc_id})
        return _strip_id(doc) if doc is not None else None

    async def create(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        try:
            await self.db[collection].insert_one({**data, "_id": doc_id})
        except DuplicateKeyError as e:
            field = _duplicate_field(e)
            raise DocumentExistsError(collection, doc_id, field=field) from e

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        await self.db[collection].replace_one({"_id": doc_id}, {**data, "_id": doc_id}, upsert=True)

    async def update(
        self, collection: str, doc_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        doc = await self.db[collection].find_one_and_update(
            {"_id": doc_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise DocumentNotFoundError(collection, doc_id)
        return _strip_id(doc)

    async def delete(
        self, collection: str, doc_id: str, expected: dict[str, Any] | None = None
    ) -> bool:
        result = await self.db[collection].delete_one({**(expected or {}), "_id": doc_id})
        return result.deleted_count > 0

    async def find(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        query = {
            field: {"$in": list(value)} if isinstance(value, (list, tuple)) else value
            for field, value in (filters or {}).items()
        }
        cursor = self.db[collection].find(query)
        if order_by:
            cursor = cursor.sort(order_by, DESCENDING if descending else ASCENDING)
        if limit is not None:
            cursor = cursor.limit(limit)

        return [_strip_id(doc) for doc in await cursor.to_list(length=None)]


def _strip_id(doc: dict[str, Any]) -> dict[str, Any]:
    doc = dict(doc)
    doc.pop("_id", None)
    return doc


def _duplicate_field(error: DuplicateKeyError) -> str | None:
    """Name of the unique field that collided, None for `_id`."""
    key_pattern = (error.details or {}).get("keyPattern") or {}
    fields = [name for name in key_pattern if name != "_id"]
    return fields[0] if fields else None
