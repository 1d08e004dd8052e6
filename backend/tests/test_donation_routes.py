"""
Pet Adoption Backend — Donation Campaign Endpoint Tests
=========================================================

What:  /api/donations (list, create, donate, search, lookup) and
       /api/my-donations through HTTP.

What we test:
    ✅ Pagination windows over newest-first ordering
    ✅ New campaigns start at donatedAmount 0, not paused
    ✅ Concurrent donations all land in the total
    ✅ `/donations/search` is not swallowed by `/donations/{id}`
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from pet_adoption.services.donation_service import DonationService
from pet_adoption.services.validation import MAX_INT64


async def seed_campaigns(store, count, **fields):
    """Insert `count` campaigns named pet-0 (oldest) .. pet-N (newest)."""
    base = datetime(2030, 1, 1, tzinfo=timezone.utc)
    campaigns = store.collection("DonationCampaigns")
    for i in range(count):
        await campaigns.insert_one(
            {
                "petName": f"pet-{i}",
                "location": "Dhaka",
                "creatorEmail": "owner@example.com",
                "createdAt": base + timedelta(hours=i),
                **fields,
            }
        )


class TestListCampaigns:

    @pytest.mark.asyncio
    async def test_second_page(self, test_client, store):
        await seed_campaigns(store, 15)

        response = await test_client.get("/api/donations", params={"page": "2", "limit": "6"})

        assert response.status_code == 200
        # newest first: pet-14..pet-9 on page 1, pet-8..pet-3 on page 2
        assert [c["petName"] for c in response.json()] == [f"pet-{i}" for i in range(8, 2, -1)]

    @pytest.mark.asyncio
    async def test_default_page_size(self, test_client, store):
        await seed_campaigns(store, 10)

        response = await test_client.get("/api/donations")

        assert len(response.json()) == 6
        assert response.json()[0]["petName"] == "pet-9"

    @pytest.mark.asyncio
    async def test_unparseable_paging_uses_defaults(self, test_client, store):
        await seed_campaigns(store, 10)

        response = await test_client.get("/api/donations", params={"page": "abc", "limit": "-3"})

        assert response.status_code == 200
        assert len(response.json()) == 6

    @pytest.mark.asyncio
    async def test_oversized_paging_values(self, test_client, store):
        await seed_campaigns(store, 3)

        far_page = await test_client.get("/api/donations", params={"page": "9" * 40})
        huge_limit = await test_client.get("/api/donations", params={"limit": "9" * 40})

        assert far_page.status_code == 200
        assert far_page.json() == []
        assert huge_limit.status_code == 200
        assert len(huge_limit.json()) == 3

    @pytest.mark.asyncio
    async def test_skip_stays_within_int64(self):
        collection = MagicMock()
        collection.find = AsyncMock(return_value=[])
        store = MagicMock()
        store.collection.return_value = collection

        await DonationService(store).list_campaigns(page="9" * 40, limit="6")

        assert collection.find.await_args.kwargs["skip"] == MAX_INT64
        assert collection.find.await_args.kwargs["limit"] == 6

    @pytest.mark.asyncio
    async def test_filter_by_creator(self, test_client, store):
        await seed_campaigns(store, 2)
        await seed_campaigns(store, 3, creatorEmail="other@example.com")

        response = await test_client.get("/api/donations", params={"email": "other@example.com"})

        assert len(response.json()) == 3
        assert {c["creatorEmail"] for c in response.json()} == {"other@example.com"}

    @pytest.mark.asyncio
    async def test_my_donations(self, test_client, store):
        await seed_campaigns(store, 8)

        response = await test_client.get("/api/my-donations", params={"email": "owner@example.com"})

        # not paginated
        assert len(response.json()) == 8

    @pytest.mark.asyncio
    async def test_my_donations_requires_email(self, test_client):
        response = await test_client.get("/api/my-donations")
        assert response.status_code == 400
        assert response.json()["message"] == "Email query param is required"


class TestCreateAndDonate:

    async def create(self, test_client, payload):
        response = await test_client.post("/api/donations", json=payload)
        assert response.status_code == 201
        return response.json()["id"]

    @pytest.mark.asyncio
    async def test_create_initializes_counters(self, test_client, campaign_payload):
        campaign_id = await self.create(test_client, {**campaign_payload, "donatedAmount": 999, "paused": True})

        campaign = (await test_client.get(f"/api/donations/{campaign_id}")).json()

        assert campaign["_id"] == campaign_id
        assert campaign["donatedAmount"] == 0
        assert campaign["paused"] is False
        assert campaign["maxDonation"] == 500
        assert campaign["lastDate"].startswith("2030-12-31")

    @pytest.mark.asyncio
    async def test_location_defaults_to_empty(self, test_client, store, campaign_payload):
        del campaign_payload["location"]
        await self.create(test_client, campaign_payload)
        assert store.collection("DonationCampaigns").documents[0]["location"] == ""

    @pytest.mark.asyncio
    async def test_create_rejects_bad_date(self, test_client, campaign_payload):
        response = await test_client.post("/api/donations", json={**campaign_payload, "lastDate": "someday"})
        assert response.status_code == 400
        assert response.json()["message"] == "lastDate must be a valid date"

    @pytest.mark.asyncio
    async def test_donate_accumulates(self, test_client, campaign_payload):
        campaign_id = await self.create(test_client, campaign_payload)

        response = await test_client.patch(f"/api/donations/{campaign_id}/donate", json={"amount": 10})
        assert response.status_code == 200
        assert response.json() == {"message": "Donation recorded successfully"}

        await test_client.patch(f"/api/donations/{campaign_id}/donate", json={"amount": "2.5"})

        campaign = (await test_client.get(f"/api/donations/{campaign_id}")).json()
        assert campaign["donatedAmount"] == 12.5

    @pytest.mark.asyncio
    async def test_concurrent_donations(self, test_client, campaign_payload):
        campaign_id = await self.create(test_client, campaign_payload)

        responses = await asyncio.gather(
            *(test_client.patch(f"/api/donations/{campaign_id}/donate", json={"amount": 5}) for _ in range(10))
        )

        assert all(r.status_code == 200 for r in responses)
        campaign = (await test_client.get(f"/api/donations/{campaign_id}")).json()
        assert campaign["donatedAmount"] == 50

    @pytest.mark.asyncio
    async def test_over_funding_is_accepted(self, test_client, campaign_payload):
        campaign_id = await self.create(test_client, campaign_payload)
        response = await test_client.patch(f"/api/donations/{campaign_id}/donate", json={"amount": 10_000})
        assert response.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["ten", None, 0, -5, True])
    async def test_invalid_amount(self, test_client, campaign_payload, amount):
        campaign_id = await self.create(test_client, campaign_payload)

        response = await test_client.patch(f"/api/donations/{campaign_id}/donate", json={"amount": amount})

        assert response.status_code == 400
        assert response.json()["message"] == "Amount must be a valid number"

    @pytest.mark.asyncio
    async def test_donate_unknown_campaign(self, test_client):
        response = await test_client.patch(f"/api/donations/{ObjectId()}/donate", json={"amount": 10})
        assert response.status_code == 404
        assert response.json()["message"] == "Campaign not found"

    @pytest.mark.asyncio
    async def test_donate_store_failure(self, test_client, store, campaign_payload):
        campaign_id = await self.create(test_client, campaign_payload)
        store.collection("DonationCampaigns").fail = True

        response = await test_client.patch(f"/api/donations/{campaign_id}/donate", json={"amount": 10})

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to update donation amount"

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, test_client):
        response = await test_client.get("/api/donations/xyz")
        assert response.status_code == 404


class TestSearchCampaigns:

    @pytest.mark.asyncio
    async def test_search_by_pet_name(self, test_client, store):
        await seed_campaigns(store, 1, petName="Buddy")
        await seed_campaigns(store, 1, petName="Milo")

        response = await test_client.get("/api/donations/search", params={"pet": "bud"})

        assert response.status_code == 200
        assert [c["petName"] for c in response.json()] == ["Buddy"]

    @pytest.mark.asyncio
    async def test_search_by_pet_and_location(self, test_client, store):
        await seed_campaigns(store, 1, petName="Buddy", location="Dhaka")
        await seed_campaigns(store, 1, petName="Buddy Jr", location="Chittagong")

        response = await test_client.get("/api/donations/search", params={"pet": "buddy", "location": "CHITT"})

        assert [c["location"] for c in response.json()] == ["Chittagong"]

    @pytest.mark.asyncio
    async def test_search_without_filters_returns_all(self, test_client, store):
        await seed_campaigns(store, 3)
        response = await test_client.get("/api/donations/search")
        assert len(response.json()) == 3

    @pytest.mark.asyncio
    async def test_search_terms_are_literal(self, test_client, store):
        await seed_campaigns(store, 1, petName="Buddy")
        response = await test_client.get("/api/donations/search", params={"pet": ".*"})
        assert response.json() == []
