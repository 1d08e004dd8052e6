"""
Pet Adoption Backend — Document Store Adapter
===============================================

What:  Async MongoDB client, per-collection adapter, and FastAPI dependency.
How:   `DocumentStore` owns the pymongo `AsyncMongoClient`; `collection(name)`
       returns a `CollectionStore` exposing the four operations the services
       need (find, find_one, insert_one, update_one). Every driver failure is
       converted into `StoreError` so no pymongo type leaks above this module.
Who:   Created once in the application lifespan and stored on `app.state`;
       handed to services through the `get_store` dependency.

Collections:
    petData             → Pet documents (client-supplied business `id` field)
    adoptionRequests    → AdoptionRequest documents
    DonationCampaigns   → DonationCampaign documents
    users               → User documents, unique by email

Atomicity:
    Each adapter call is a single-document operation, so MongoDB applies it
    atomically. `$inc` is used for donation totals and `$setOnInsert` for the
    default user role; neither needs a read-modify-write on our side.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from pet_adoption.config import Settings
from pet_adoption.exceptions import StoreError

logger = logging.getLogger(__name__)

ASCENDING = 1
DESCENDING = -1

SortSpec = Sequence[Tuple[str, int]]


class Collections:
    """Collection names used by the service."""

    PETS = "petData"
    ADOPTIONS = "adoptionRequests"
    DONATIONS = "DonationCampaigns"
    USERS = "users"


@dataclass(frozen=True)
class UpdateOutcome:
    """Result of `update_one`: how many documents matched, and the upserted id if any."""

    matched_count: int
    upserted_id: Optional[Any] = None


# ── Per-collection Adapter ────────────────────────────────────────────────
class CollectionStore:
    """
    Narrow async interface over a single MongoDB collection.

    All methods raise StoreError on any driver failure. Nothing is retried.
    """

    def __init__(self, collection: Any):
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    async def find(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        *,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
        projection: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Return every document matching `filter`, eagerly loaded.

        Args:
            filter: MongoDB query document (empty = all documents)
            sort: list of (field, ASCENDING|DESCENDING) pairs
            skip: number of documents to skip after sorting
            limit: maximum documents to return (0 = no limit)
            projection: fields to include
        """
        try:
            cursor = self._collection.find(dict(filter or {}), projection)
            if sort:
                cursor = cursor.sort(list(sort))
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list()
        except PyMongoError as e:
            logger.error("find on %s failed: %s", self.name, str(e))
            raise StoreError(context={"collection": self.name, "operation": "find"}) from e

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return await self._collection.find_one(dict(filter))
        except PyMongoError as e:
            logger.error("find_one on %s failed: %s", self.name, str(e))
            raise StoreError(context={"collection": self.name, "operation": "find_one"}) from e

    async def insert_one(self, document: Dict[str, Any]) -> Any:
        """Insert `document` and return the store-generated `_id`."""
        try:
            result = await self._collection.insert_one(document)
            return result.inserted_id
        except PyMongoError as e:
            logger.error("insert_one on %s failed: %s", self.name, str(e))
            raise StoreError(context={"collection": self.name, "operation": "insert_one"}) from e

    async def update_one(
        self,
        filter: Mapping[str, Any],
        *,
        set_fields: Optional[Mapping[str, Any]] = None,
        set_on_insert: Optional[Mapping[str, Any]] = None,
        inc: Optional[Mapping[str, Any]] = None,
        upsert: bool = False,
    ) -> UpdateOutcome:
        """
        Apply `$set` / `$setOnInsert` / `$inc` to the first matching document.

        With `upsert=True` a missing document is created from the filter
        equality fields plus `$set` and `$setOnInsert`.
        """
        update: Dict[str, Any] = {}
        if set_fields:
            update["$set"] = dict(set_fields)
        if set_on_insert:
            update["$setOnInsert"] = dict(set_on_insert)
        if inc:
            update["$inc"] = dict(inc)
        if not update:
            raise ValueError("update_one requires at least one update operator")

        try:
            result = await self._collection.update_one(dict(filter), update, upsert=upsert)
        except PyMongoError as e:
            logger.error("update_one on %s failed: %s", self.name, str(e))
            raise StoreError(context={"collection": self.name, "operation": "update_one"}) from e
        return UpdateOutcome(matched_count=result.matched_count, upserted_id=result.upserted_id)


# ── Client Wrapper ────────────────────────────────────────────────────────
class DocumentStore:
    """
    Owns the MongoDB client and hands out collection adapters.

    The pymongo client is connection-pooled and safe to share across
    concurrent requests; one instance lives for the whole process.
    """

    def __init__(self, client: Any, database_name: str):
        self._client = client
        self._database = client[database_name]

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        """
        Build a store from configuration. The driver connects lazily.

        Raises:
            StoreError: the connection string or client options are invalid
        """
        try:
            client = AsyncMongoClient(
                settings.mongodb_uri,
                server_api=ServerApi("1", strict=True, deprecation_errors=True),
                serverSelectionTimeoutMS=settings.db_server_selection_timeout_ms,
                tz_aware=True,
            )
        except PyMongoError as e:
            raise StoreError(
                message="Invalid database configuration",
                context={"error_type": type(e).__name__},
            ) from e
        return cls(client, settings.database_name)

    def collection(self, name: str) -> CollectionStore:
        return CollectionStore(self._database[name])

    async def ping(self) -> None:
        """Round-trip to the server; raises StoreError when unreachable."""
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            raise StoreError(
                message="Database is not reachable",
                context={"error_type": type(e).__name__},
            ) from e

    async def close(self) -> None:
        await self._client.close()


# ── Helpers ───────────────────────────────────────────────────────────────
def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse a path id into an ObjectId; None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a fresh id
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None


def serialize_document(value: Any) -> Any:
    """Render ObjectIds as hex strings, recursing through dicts and lists."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value


@contextmanager
def store_failure(message: str) -> Iterator[None]:
    """
    Re-label any StoreError raised inside the block with an operation message.

    Usage:
        with store_failure("Failed to save user"):
            await users.update_one(...)
    """
    try:
        yield
    except StoreError as e:
        raise StoreError(message=message, context=e.context) from e


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> DocumentStore:
    """
    FastAPI dependency returning the process-wide store.

    Raises:
        StoreError: the store failed to come up at startup (degraded mode)
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreError(message="Database is not available")
    return store
