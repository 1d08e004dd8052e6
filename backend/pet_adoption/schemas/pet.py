"""
Pet Adoption Backend — Pet Schema
===================================

What:  Validated payload for POST /api/pets.
How:   Unknown client fields (business `id`, `description`, ...) are kept and
       stored as-is. `adopted` and `createdAt` are never accepted from the
       client; the service assigns them on insert.
"""

from typing import Optional, Union

from pydantic import BaseModel


class PetCreate(BaseModel):
    name: str
    age: Union[int, float]
    category: str
    image: str
    location: str
    userEmail: Optional[str] = None

    model_config = {"extra": "allow"}
