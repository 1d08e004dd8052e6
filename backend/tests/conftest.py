"""
Pet Adoption Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── store: in-memory DocumentStore stand-in (no MongoDB needed)
    ├── app: create_app() wired to that store
    ├── test_client: HTTPX AsyncClient for API endpoint testing
    ├── admin_email / user_email: seeded callers for gated routes
    └── pet_payload / adoption_payload / campaign_payload: valid request bodies
"""

import copy
import os
import re
from typing import Any, Dict, List, Mapping

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "mongodb://localhost:27017"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from pet_adoption.database import UpdateOutcome
from pet_adoption.exceptions import StoreError


# ══════════════════════════════════════════════════════════════════════════
# In-memory Store
# ══════════════════════════════════════════════════════════════════════════

def _matches(document: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    for key, condition in query.items():
        value = document.get(key)
        if isinstance(condition, dict) and "$regex" in condition:
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                return False
        elif value != condition:
            return False
    return True


class FakeCollection:
    """
    Implements the CollectionStore contract over a list of dicts.

    Supports equality and $regex filters, sort, skip/limit, inclusion
    projections, and $set / $setOnInsert / $inc with upsert.
    """

    def __init__(self, name: str):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StoreError(context={"collection": self.name})

    async def find(self, filter=None, *, sort=None, skip=0, limit=0, projection=None):
        self._check()
        found = [doc for doc in self.documents if _matches(doc, filter or {})]
        for field, direction in reversed(list(sort or [])):
            found.sort(key=lambda doc: doc.get(field), reverse=direction < 0)
        found = found[skip:]
        if limit:
            found = found[:limit]
        if projection:
            keep = {"_id", *(k for k, v in projection.items() if v)}
            found = [{k: v for k, v in doc.items() if k in keep} for doc in found]
        return copy.deepcopy(found)

    async def find_one(self, filter):
        self._check()
        for doc in self.documents:
            if _matches(doc, filter):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, document):
        self._check()
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return document["_id"]

    async def update_one(self, filter, *, set_fields=None, set_on_insert=None, inc=None, upsert=False):
        self._check()
        for doc in self.documents:
            if _matches(doc, filter):
                doc.update(copy.deepcopy(set_fields or {}))
                for field, delta in (inc or {}).items():
                    doc[field] = doc.get(field, 0) + delta
                return UpdateOutcome(matched_count=1)

        if not upsert:
            return UpdateOutcome(matched_count=0)

        doc = {k: v for k, v in filter.items() if not isinstance(v, dict)}
        doc["_id"] = ObjectId()
        doc.update(copy.deepcopy(set_fields or {}))
        doc.update(copy.deepcopy(set_on_insert or {}))
        for field, delta in (inc or {}).items():
            doc[field] = doc.get(field, 0) + delta
        self.documents.append(doc)
        return UpdateOutcome(matched_count=0, upserted_id=doc["_id"])


class FakeStore:
    """Stand-in for DocumentStore: one FakeCollection per name."""

    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}
        self.reachable = True
        self.closed = False

    def collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    async def ping(self) -> None:
        if not self.reachable:
            raise StoreError(message="Database is not reachable")

    async def close(self) -> None:
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def app(store):
    from pet_adoption.main import create_app
    return create_app(store=store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def admin_email(store):
    email = "admin@example.com"
    await store.collection("users").insert_one(
        {"name": "Admin", "email": email, "profileImage": None, "role": "admin"}
    )
    return email


@pytest_asyncio.fixture
async def user_email(store):
    email = "user@example.com"
    await store.collection("users").insert_one(
        {"name": "Regular", "email": email, "profileImage": None, "role": "user"}
    )
    return email


@pytest.fixture
def pet_payload():
    return {
        "id": "pet-001",
        "name": "Buddy",
        "age": 3,
        "category": "dog",
        "image": "https://img.example.com/buddy.jpg",
        "location": "Dhaka",
        "userEmail": "owner@example.com",
    }


@pytest.fixture
def adoption_payload():
    return {
        "petId": "pet-001",
        "petName": "Buddy",
        "requesterName": "Rafi",
        "requesterEmail": "rafi@example.com",
    }


@pytest.fixture
def campaign_payload():
    return {
        "petName": "Buddy",
        "image": "https://img.example.com/buddy.jpg",
        "maxDonation": "500",
        "lastDate": "2030-12-31",
        "shortDescription": "Surgery fund",
        "longDescription": "Buddy needs a leg surgery.",
        "creatorEmail": "owner@example.com",
        "location": "Dhaka",
    }
