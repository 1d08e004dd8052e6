"""
Pet Adoption Backend — Route Dependencies
===========================================

What:  FastAPI dependency providers shared by the routers.
How:   Services are built per request around the process-wide store from
       `get_store`. `require_permission` turns a permission tag into a
       dependency that runs the authorization guard before the handler.
"""

from typing import Awaitable, Callable

from fastapi import Depends, Request

from pet_adoption.config import settings
from pet_adoption.database import DocumentStore, get_store
from pet_adoption.schemas.user import Role
from pet_adoption.services.adoption_service import AdoptionService
from pet_adoption.services.auth import AuthorizationGuard, Permission
from pet_adoption.services.donation_service import DonationService
from pet_adoption.services.pet_service import PetService
from pet_adoption.services.user_service import UserService


def get_user_service(store: DocumentStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_pet_service(store: DocumentStore = Depends(get_store)) -> PetService:
    return PetService(store)


def get_adoption_service(store: DocumentStore = Depends(get_store)) -> AdoptionService:
    return AdoptionService(store)


def get_donation_service(store: DocumentStore = Depends(get_store)) -> DonationService:
    return DonationService(store)


def require_permission(permission: Permission) -> Callable[..., Awaitable[Role]]:
    """
    Build a dependency that admits only callers whose role grants `permission`.

    Usage:
        @router.get("/users", dependencies=[Depends(require_permission(Permission.LIST_USERS))])
    """

    async def check_permission(request: Request, store: DocumentStore = Depends(get_store)) -> Role:
        caller_email = request.headers.get(settings.admin_header)
        return await AuthorizationGuard(store).authorize(caller_email, permission)

    return check_permission
