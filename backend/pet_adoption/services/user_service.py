"""
Pet Adoption Backend — User Service
=====================================

What:  Registration upsert, admin user listing, and role changes.

Role invariant:
    `role` is written by `$setOnInsert` only, so repeated upserts for the
    same email update name/profileImage but never touch an existing role.
    `change_role` is the only other writer and is admin-gated at the route.
"""

import logging
from typing import Any, Dict, List

from pet_adoption.database import Collections, DocumentStore, serialize_document, store_failure, to_object_id
from pet_adoption.exceptions import NotFoundError
from pet_adoption.schemas.common import MessageResponse
from pet_adoption.schemas.user import Role
from pet_adoption.services.validation import validate_role, validate_user

logger = logging.getLogger(__name__)

USER_PROJECTION = {"name": 1, "email": 1, "profileImage": 1, "role": 1}


class UserService:
    """
    Business logic for the users collection.

    Responsibilities:
        - upsert_user(): open registration, keyed by email
        - list_users(): projected listing for the admin dashboard
        - change_role(): admin role assignment

    Authorization is not checked here; routes gate the last two through
    `require_permission`.
    """

    def __init__(self, store: DocumentStore):
        self._users = store.collection(Collections.USERS)

    async def upsert_user(self, payload: Any) -> MessageResponse:
        """
        Create the user on first sight, otherwise refresh name and profileImage.

        Args:
            payload: raw request body (`name`, `email`, optional `profileImage`)

        Returns:
            MessageResponse acknowledging the save

        Raises:
            ValidationError: name or email missing
            StoreError: "Failed to save user"
        """
        user = validate_user(payload)

        with store_failure("Failed to save user"):
            outcome = await self._users.update_one(
                {"email": user.email},
                set_fields=user.model_dump(),
                set_on_insert={"role": Role.USER.value},
                upsert=True,
            )

        if outcome.upserted_id is not None:
            logger.info("Registered new user %s", user.email)
        return MessageResponse(message="User saved/updated successfully")

    async def list_users(self) -> List[Dict[str, Any]]:
        """Every user with only name, email, profileImage and role (plus `_id`)."""
        with store_failure("Failed to fetch users"):
            users = await self._users.find({}, projection=USER_PROJECTION)
        return serialize_document(users)

    async def change_role(self, user_id: str, payload: Any) -> MessageResponse:
        """
        Set a user's role.

        The role is validated before the id is looked at, so a bad role on a
        bad id reports the role.

        Args:
            user_id: store id of the target user (hex string)
            payload: raw request body with `role`

        Raises:
            ValidationError: role is not "user" or "admin"
            NotFoundError: malformed id or no such user
            StoreError: "Failed to update user role"
        """
        role = validate_role(payload)

        object_id = to_object_id(user_id)
        if object_id is None:
            raise NotFoundError(resource="User", resource_id=user_id)

        with store_failure("Failed to update user role"):
            outcome = await self._users.update_one({"_id": object_id}, set_fields={"role": role.value})

        if outcome.matched_count == 0:
            raise NotFoundError(resource="User", resource_id=user_id)

        logger.info("User %s role set to %s", user_id, role.value)
        return MessageResponse(message=f"User role updated to {role.value}")
