"""
Pet Adoption Backend — Donation Campaign Service
==================================================

What:  Campaign listing (paginated), per-creator listing, creation, donation
       recording, lookup and search.

Donation totals:
    `donatedAmount` starts at 0 and only ever moves through `$inc`, so
    concurrent donations to one campaign add up regardless of interleaving.
    There is no cap against `maxDonation`; over-funding is accepted.

Pagination:
    page/limit come from the query string and default to 1/6. Values that
    do not start with a positive integer fall back to the default.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pet_adoption.database import DESCENDING, Collections, DocumentStore, serialize_document, store_failure, to_object_id
from pet_adoption.exceptions import NotFoundError, ValidationError
from pet_adoption.schemas.common import CreatedResponse, MessageResponse
from pet_adoption.services.validation import MAX_INT64, parse_positive_int, validate_amount, validate_donation_campaign

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 6

NEWEST_FIRST = [("createdAt", DESCENDING)]


class DonationService:
    """
    Business logic for donation campaigns.

    Responsibilities:
        - list_campaigns() / list_my_campaigns(): newest-first listings
        - create_campaign(): new campaign with zeroed counters
        - record_donation(): atomic `$inc` on donatedAmount
        - get_campaign() / search_campaigns(): lookup and filtering
    """

    def __init__(self, store: DocumentStore):
        self._campaigns = store.collection(Collections.DONATIONS)

    async def list_campaigns(
        self,
        email: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
    ) -> List[Dict[str, Any]]:
        """
        One page of campaigns, newest first.

        Args:
            email: restrict to campaigns created by this email when given
            page: 1-based page number (raw query value)
            limit: page size (raw query value)
        """
        page_number = parse_positive_int(page, DEFAULT_PAGE)
        page_size = parse_positive_int(limit, DEFAULT_LIMIT)
        query = {"creatorEmail": email} if email else {}

        with store_failure("Internal server error"):
            campaigns = await self._campaigns.find(
                query,
                sort=NEWEST_FIRST,
                skip=min((page_number - 1) * page_size, MAX_INT64),
                limit=page_size,
            )
        return serialize_document(campaigns)

    async def list_my_campaigns(self, email: Optional[str]) -> List[Dict[str, Any]]:
        """All campaigns created by `email`, newest first, unpaginated."""
        if not email:
            raise ValidationError(message="Email query param is required", field="email")

        with store_failure("Internal server error"):
            campaigns = await self._campaigns.find({"creatorEmail": email}, sort=NEWEST_FIRST)
        return serialize_document(campaigns)

    async def create_campaign(self, payload: Any) -> CreatedResponse:
        """
        Store a new campaign.

        How:  `maxDonation` and `lastDate` are coerced by the validator;
              `donatedAmount`, `paused` and `createdAt` are set here.

        Args:
            payload: raw request body

        Returns:
            CreatedResponse carrying the new campaign id

        Raises:
            ValidationError: missing field, non-numeric maxDonation or bad lastDate
            StoreError: insert failed
        """
        campaign = validate_donation_campaign(payload)

        document = {
            "petName": campaign.petName,
            "image": campaign.image,
            "maxDonation": campaign.maxDonation,
            "donatedAmount": 0,
            "location": campaign.location,
            "shortDescription": campaign.shortDescription,
            "longDescription": campaign.longDescription,
            "lastDate": campaign.lastDate,
            "createdAt": datetime.now(timezone.utc),
            "creatorEmail": campaign.creatorEmail,
            "paused": False,
        }

        with store_failure("Internal server error"):
            inserted_id = await self._campaigns.insert_one(document)

        logger.info("Donation campaign %s created by %s", inserted_id, campaign.creatorEmail)
        return CreatedResponse(message="Donation campaign created", id=str(inserted_id))

    async def record_donation(self, campaign_id: str, payload: Any) -> MessageResponse:
        """
        Add `amount` to a campaign's donatedAmount.

        Args:
            campaign_id: store id of the campaign (hex string)
            payload: raw request body with `amount`

        Raises:
            ValidationError: amount is not a positive number
            NotFoundError: malformed id or no such campaign
            StoreError: "Failed to update donation amount"
        """
        amount = validate_amount(payload)

        object_id = to_object_id(campaign_id)
        if object_id is None:
            raise NotFoundError(resource="Campaign", resource_id=campaign_id)

        with store_failure("Failed to update donation amount"):
            outcome = await self._campaigns.update_one({"_id": object_id}, inc={"donatedAmount": amount})

        if outcome.matched_count == 0:
            raise NotFoundError(resource="Campaign", resource_id=campaign_id)

        logger.info("Recorded donation of %s to campaign %s", amount, campaign_id)
        return MessageResponse(message="Donation recorded successfully")

    async def get_campaign(self, campaign_id: str) -> Dict[str, Any]:
        object_id = to_object_id(campaign_id)
        if object_id is None:
            raise NotFoundError(resource="Campaign", resource_id=campaign_id)

        with store_failure("Internal server error"):
            campaign = await self._campaigns.find_one({"_id": object_id})

        if campaign is None:
            raise NotFoundError(resource="Campaign", resource_id=campaign_id)
        return serialize_document(campaign)

    async def search_campaigns(
        self,
        pet: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Case-insensitive substring match on petName and/or location, newest first."""
        query: Dict[str, Any] = {}
        if pet:
            query["petName"] = {"$regex": re.escape(pet), "$options": "i"}
        if location:
            query["location"] = {"$regex": re.escape(location), "$options": "i"}

        with store_failure("Failed to fetch filtered campaigns"):
            campaigns = await self._campaigns.find(query, sort=NEWEST_FIRST)
        return serialize_document(campaigns)
