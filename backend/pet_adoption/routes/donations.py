"""
Pet Adoption Backend — Donation Campaign Route Handlers
=========================================================

What:  Campaign listing/pagination, per-creator listing, creation, donation
       recording, search and lookup.

Route order:
    `/donations/search` is registered before `/donations/{campaign_id}` so
    the literal path is not captured as an id.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from pet_adoption.routes.dependencies import get_donation_service
from pet_adoption.schemas.common import CreatedResponse, ErrorResponse, MessageResponse
from pet_adoption.services.donation_service import DonationService

router = APIRouter(prefix="/api", tags=["Donations"])


@router.get("/donations", summary="List donation campaigns, paginated")
async def list_donation_campaigns(
    email: Optional[str] = Query(default=None, description="Only campaigns created by this email"),
    # Raw strings: unparseable values fall back to the defaults instead of failing
    page: Optional[str] = Query(default=None, description="1-based page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Page size (default 6)"),
    service: DonationService = Depends(get_donation_service),
) -> List[Dict[str, Any]]:
    return await service.list_campaigns(email=email, page=page, limit=limit)


@router.get(
    "/my-donations",
    responses={400: {"description": "Email missing", "model": ErrorResponse}},
    summary="List campaigns created by one user",
)
async def list_my_donation_campaigns(
    email: Optional[str] = Query(default=None),
    service: DonationService = Depends(get_donation_service),
) -> List[Dict[str, Any]]:
    return await service.list_my_campaigns(email)


@router.post(
    "/donations",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: {"description": "Missing or invalid required fields", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create a donation campaign",
)
async def create_donation_campaign(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: DonationService = Depends(get_donation_service),
) -> CreatedResponse:
    return await service.create_campaign(payload)


@router.patch(
    "/donations/{campaign_id}/donate",
    response_model=MessageResponse,
    responses={
        400: {"description": "Amount is not a valid number", "model": ErrorResponse},
        404: {"description": "Campaign not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Record a donation against a campaign",
)
async def donate(
    campaign_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: DonationService = Depends(get_donation_service),
) -> MessageResponse:
    return await service.record_donation(campaign_id, payload)


@router.get("/donations/search", summary="Search campaigns by pet name and/or location")
async def search_donation_campaigns(
    pet: Optional[str] = Query(default=None, description="Substring of petName, case-insensitive"),
    location: Optional[str] = Query(default=None, description="Substring of location, case-insensitive"),
    service: DonationService = Depends(get_donation_service),
) -> List[Dict[str, Any]]:
    return await service.search_campaigns(pet=pet, location=location)


@router.get(
    "/donations/{campaign_id}",
    responses={404: {"description": "Campaign not found", "model": ErrorResponse}},
    summary="Get a donation campaign",
)
async def get_donation_campaign(
    campaign_id: str,
    service: DonationService = Depends(get_donation_service),
) -> Dict[str, Any]:
    return await service.get_campaign(campaign_id)
