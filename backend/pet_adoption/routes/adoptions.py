"""Adoption request route handlers."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from pet_adoption.routes.dependencies import get_adoption_service
from pet_adoption.schemas.common import CreatedResponse, ErrorResponse, MessageResponse
from pet_adoption.services.adoption_service import AdoptionService

router = APIRouter(prefix="/api", tags=["Adoptions"])


@router.post(
    "/adopt",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: {"description": "Missing required fields", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Submit an adoption request",
)
async def submit_adoption_request(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: AdoptionService = Depends(get_adoption_service),
) -> CreatedResponse:
    return await service.submit_request(payload)


@router.get("/adoptions", summary="List adoption requests, newest first")
async def list_adoption_requests(
    service: AdoptionService = Depends(get_adoption_service),
) -> List[Dict[str, Any]]:
    return await service.list_requests()


@router.patch(
    "/adoptions/{request_id}/status",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid status value", "model": ErrorResponse},
        404: {"description": "Adoption request not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Set an adoption request's status",
)
async def update_adoption_status(
    request_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: AdoptionService = Depends(get_adoption_service),
) -> MessageResponse:
    return await service.update_status(request_id, payload)
