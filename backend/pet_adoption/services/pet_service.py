"""
Pet Adoption Backend — Pet Service
====================================

What:  Pet listing, owner filtering, lookup and creation.

Keys:
    Pets are fetched by their client-supplied business `id` field, not by
    the store-generated `_id` returned from create. Both exist on every
    document created with an `id`.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pet_adoption.database import Collections, DocumentStore, serialize_document, store_failure
from pet_adoption.exceptions import NotFoundError, ValidationError
from pet_adoption.schemas.common import CreatedResponse
from pet_adoption.services.validation import validate_pet

logger = logging.getLogger(__name__)


class PetService:
    """Read and create pets. Pets are never updated or deleted here."""

    def __init__(self, store: DocumentStore):
        self._pets = store.collection(Collections.PETS)

    async def list_pets(self) -> List[Dict[str, Any]]:
        with store_failure("Failed to fetch pets"):
            pets = await self._pets.find({})
        return serialize_document(pets)

    async def list_pets_by_owner(self, email: Optional[str]) -> List[Dict[str, Any]]:
        """
        Pets whose `userEmail` equals `email`.

        Raises:
            ValidationError: `email` missing or empty
        """
        if not email:
            raise ValidationError(message="Email query param is required", field="email")

        with store_failure("Internal server error"):
            pets = await self._pets.find({"userEmail": email})
        return serialize_document(pets)

    async def get_pet(self, pet_id: str) -> Dict[str, Any]:
        """
        Look up a pet by its business `id`.

        Args:
            pet_id: the client-supplied `id`, not the store `_id`

        Raises:
            NotFoundError: no pet has that `id`
        """
        with store_failure("Internal server error"):
            pet = await self._pets.find_one({"id": pet_id})

        if pet is None:
            raise NotFoundError(resource="Pet", resource_id=pet_id)
        return serialize_document(pet)

    async def create_pet(self, payload: Any) -> CreatedResponse:
        """
        Insert a new pet.

        Client fields are stored as sent (after validation and `age`
        coercion); `adopted` and `createdAt` are always overwritten here.
        """
        pet = validate_pet(payload)

        document = pet.model_dump(exclude_unset=True)
        document["adopted"] = False
        document["createdAt"] = datetime.now(timezone.utc)

        with store_failure("Failed to add pet"):
            inserted_id = await self._pets.insert_one(document)

        logger.info("Pet %s added (%s)", inserted_id, pet.name)
        return CreatedResponse(message="Pet added successfully", id=str(inserted_id))
