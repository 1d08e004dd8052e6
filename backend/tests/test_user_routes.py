"""
Pet Adoption Backend — User Endpoint Tests
============================================

What:  POST /api/users, GET /api/users, PATCH /api/users/{id}/role through HTTP.

What we test:
    ✅ Upsert is idempotent per email and never changes role
    ✅ Listing and role changes require an admin caller header
    ✅ Role changes validate the role and report unknown users
"""

import pytest
from bson import ObjectId

ADMIN_HEADER = "x-user-email"


class TestUpsertUser:

    @pytest.mark.asyncio
    async def test_creates_user_with_default_role(self, test_client, store):
        response = await test_client.post(
            "/api/users", json={"name": "Mina", "email": "mina@example.com", "profileImage": "p.png"}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "User saved/updated successfully"}
        [doc] = store.collection("users").documents
        assert doc["role"] == "user"
        assert doc["profileImage"] == "p.png"

    @pytest.mark.asyncio
    async def test_upsert_twice_updates_name_keeps_role(self, test_client, store):
        await test_client.post("/api/users", json={"name": "Mina", "email": "mina@example.com"})
        store.collection("users").documents[0]["role"] = "admin"

        response = await test_client.post("/api/users", json={"name": "Mina K", "email": "mina@example.com"})

        assert response.status_code == 200
        docs = store.collection("users").documents
        assert len(docs) == 1
        assert docs[0]["name"] == "Mina K"
        assert docs[0]["role"] == "admin"

    @pytest.mark.asyncio
    async def test_client_cannot_choose_role(self, test_client, store):
        await test_client.post(
            "/api/users", json={"name": "Eve", "email": "eve@example.com", "role": "admin"}
        )
        assert store.collection("users").documents[0]["role"] == "user"

    @pytest.mark.asyncio
    async def test_missing_fields(self, test_client, store):
        response = await test_client.post("/api/users", json={"email": "mina@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Name and email are required"
        assert store.collection("users").documents == []

    @pytest.mark.asyncio
    async def test_store_failure(self, test_client, store):
        store.collection("users").fail = True
        response = await test_client.post("/api/users", json={"name": "Mina", "email": "mina@example.com"})

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to save user"


class TestListUsers:

    @pytest.mark.asyncio
    async def test_requires_caller_header(self, test_client):
        response = await test_client.get("/api/users")
        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"

    @pytest.mark.asyncio
    async def test_non_admin_forbidden(self, test_client, user_email):
        response = await test_client.get("/api/users", headers={ADMIN_HEADER: user_email})
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Admins only."

    @pytest.mark.asyncio
    async def test_admin_sees_projected_users(self, test_client, store, admin_email, user_email):
        store.collection("users").documents[1]["secret"] = "hidden"

        response = await test_client.get("/api/users", headers={ADMIN_HEADER: admin_email})

        assert response.status_code == 200
        users = response.json()
        assert {u["email"] for u in users} == {admin_email, user_email}
        for user in users:
            assert set(user) == {"_id", "name", "email", "profileImage", "role"}
            assert ObjectId.is_valid(user["_id"])


class TestChangeRole:

    def user_id(self, store, email):
        for doc in store.collection("users").documents:
            if doc["email"] == email:
                return str(doc["_id"])

    @pytest.mark.asyncio
    async def test_admin_promotes_user(self, test_client, store, admin_email, user_email):
        user_id = self.user_id(store, user_email)

        response = await test_client.patch(
            f"/api/users/{user_id}/role", json={"role": "admin"}, headers={ADMIN_HEADER: admin_email}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "User role updated to admin"}
        assert store.collection("users").documents[1]["role"] == "admin"

    @pytest.mark.asyncio
    async def test_invalid_role(self, test_client, store, admin_email, user_email):
        user_id = self.user_id(store, user_email)
        response = await test_client.patch(
            f"/api/users/{user_id}/role", json={"role": "root"}, headers={ADMIN_HEADER: admin_email}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid role"

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_client, admin_email):
        response = await test_client.patch(
            f"/api/users/{ObjectId()}/role", json={"role": "user"}, headers={ADMIN_HEADER: admin_email}
        )
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_guard_runs_before_validation(self, test_client, store, user_email):
        user_id = self.user_id(store, user_email)
        response = await test_client.patch(
            f"/api/users/{user_id}/role", json={"role": "root"}, headers={ADMIN_HEADER: user_email}
        )
        assert response.status_code == 403
        assert store.collection("users").documents[0]["role"] == "user"

    @pytest.mark.asyncio
    async def test_missing_header(self, test_client, store, user_email):
        user_id = self.user_id(store, user_email)
        response = await test_client.patch(f"/api/users/{user_id}/role", json={"role": "admin"})
        assert response.status_code == 401
