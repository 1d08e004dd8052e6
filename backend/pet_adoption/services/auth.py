"""
Pet Adoption Backend — Authorization Guard
============================================

What:  Resolves a caller's role from the users collection and decides whether
       the role grants a permission.
How:   Routes declare the permission they need as data
       (`require_permission(Permission.LIST_USERS)` in routes/dependencies.py);
       that single dependency calls `AuthorizationGuard.authorize`. The
       role → permission table below is the complete allow-list.

Identity:
    The caller's email arrives in a request header and is trusted at face
    value. There is no signature or session check.

Outcomes:
    no email                          → AuthenticationError (401)
    unknown email / role lacks grant  → PermissionDeniedError (403)
    role grants permission            → the caller's Role
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet, Optional

from pet_adoption.database import Collections, DocumentStore, store_failure
from pet_adoption.exceptions import AuthenticationError, PermissionDeniedError
from pet_adoption.schemas.user import Role

logger = logging.getLogger(__name__)


class Permission(str, Enum):
    LIST_USERS = "users:list"
    CHANGE_USER_ROLE = "users:change_role"


ROLE_PERMISSIONS: Dict[Role, FrozenSet[Permission]] = {
    Role.USER: frozenset(),
    Role.ADMIN: frozenset({Permission.LIST_USERS, Permission.CHANGE_USER_ROLE}),
}


class AuthorizationGuard:
    """Role lookup and permission check against the users collection."""

    def __init__(self, store: DocumentStore):
        self._users = store.collection(Collections.USERS)

    async def authorize(self, caller_email: Optional[str], permission: Permission) -> Role:
        if not caller_email:
            raise AuthenticationError()

        with store_failure("Server error verifying admin"):
            user = await self._users.find_one({"email": caller_email})

        if user is None:
            logger.warning("Denied %s: unknown caller %s", permission.value, caller_email)
            raise PermissionDeniedError(context={"permission": permission.value})

        try:
            role = Role(user.get("role"))
        except ValueError:
            role = None

        if role is None or permission not in ROLE_PERMISSIONS[role]:
            logger.warning("Denied %s: %s has role %r", permission.value, caller_email, user.get("role"))
            raise PermissionDeniedError(context={"permission": permission.value})

        return role
