"""User and role schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserUpsert(BaseModel):
    """
    What:  Body of POST /api/users, sent on every login/registration.
    How:   `role` is deliberately absent; it is only ever written by
           `$setOnInsert` on first creation or by the admin role endpoint.
    """

    name: str
    email: str
    profileImage: Optional[str] = None
