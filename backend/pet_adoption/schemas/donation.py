"""
Pet Adoption Backend — Donation Campaign Schemas
==================================================

What:  Validated payload for POST /api/donations.

Campaign lifecycle fields (server-assigned on insert, never read from input):
    donatedAmount = 0      only ever changed by an atomic $inc
    createdAt     = now
    paused        = False  stored for the frontend; no endpoint sets it
"""

from datetime import datetime
from typing import Union

from pydantic import BaseModel

Number = Union[int, float]


class DonationCampaignCreate(BaseModel):
    petName: str
    image: str
    maxDonation: Number
    location: str = ""
    shortDescription: str
    longDescription: str
    lastDate: datetime
    creatorEmail: str
