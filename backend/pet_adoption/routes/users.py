"""
Pet Adoption Backend — User Route Handlers
============================================

What:  POST /api/users (open), GET /api/users and PATCH /api/users/{id}/role
       (both admin-gated through `require_permission`).
Who:   Called by the frontend on login/registration and by the admin dashboard.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from pet_adoption.routes.dependencies import get_user_service, require_permission
from pet_adoption.schemas.common import ErrorResponse, MessageResponse
from pet_adoption.services.auth import Permission
from pet_adoption.services.user_service import UserService

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    response_model=MessageResponse,
    responses={
        400: {"description": "Name or email missing", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create or refresh a user by email",
)
async def upsert_user(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    return await service.upsert_user(payload)


@router.get(
    "/users",
    dependencies=[Depends(require_permission(Permission.LIST_USERS))],
    responses={
        401: {"description": "Caller email header missing", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="List all users (admin only)",
)
async def list_users(service: UserService = Depends(get_user_service)) -> List[Dict[str, Any]]:
    return await service.list_users()


@router.patch(
    "/users/{user_id}/role",
    response_model=MessageResponse,
    dependencies=[Depends(require_permission(Permission.CHANGE_USER_ROLE))],
    responses={
        400: {"description": "Role is not 'user' or 'admin'", "model": ErrorResponse},
        401: {"description": "Caller email header missing", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Change a user's role (admin only)",
)
async def change_user_role(
    user_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    return await service.change_role(user_id, payload)
