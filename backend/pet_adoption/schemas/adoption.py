"""Adoption request schemas."""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class AdoptionStatus(str, Enum):
    """
    Flat status enum. Any status may be set from any other, including
    re-setting the current one; no transition graph is enforced.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class AdoptionRequestCreate(BaseModel):
    """
    References and contact details are stored as the client sent them:
    a numeric `petId` or phone number stays numeric.
    """

    petId: Any
    petName: str
    petImage: Any = ""
    requesterName: str
    requesterEmail: str
    requesterPhone: Any = ""
    requesterAddress: Any = ""
    ownerEmail: Any = ""
