"""
Pet Adoption Backend — Pet Route Handlers
===========================================

What:  Pet listing, owner listing (`/mypets?email=`), lookup by business id,
       and creation.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from pet_adoption.routes.dependencies import get_pet_service
from pet_adoption.schemas.common import CreatedResponse, ErrorResponse
from pet_adoption.services.pet_service import PetService

router = APIRouter(prefix="/api", tags=["Pets"])


@router.get("/pets", summary="List all pets")
async def list_pets(service: PetService = Depends(get_pet_service)) -> List[Dict[str, Any]]:
    return await service.list_pets()


@router.get(
    "/mypets",
    responses={400: {"description": "Email missing", "model": ErrorResponse}},
    summary="List pets listed by one owner",
)
async def list_my_pets(
    email: Optional[str] = Query(default=None, description="Owner email (matches `userEmail`)"),
    service: PetService = Depends(get_pet_service),
) -> List[Dict[str, Any]]:
    return await service.list_pets_by_owner(email)


@router.get(
    "/pets/{pet_id}",
    responses={404: {"description": "Pet not found", "model": ErrorResponse}},
    summary="Get a pet by its business id",
)
async def get_pet(pet_id: str, service: PetService = Depends(get_pet_service)) -> Dict[str, Any]:
    return await service.get_pet(pet_id)


@router.post(
    "/pets",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: {"description": "Missing or invalid required fields", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Add a pet for adoption",
)
async def create_pet(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: PetService = Depends(get_pet_service),
) -> CreatedResponse:
    return await service.create_pet(payload)
