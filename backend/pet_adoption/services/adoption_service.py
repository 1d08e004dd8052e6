"""
Pet Adoption Backend — Adoption Request Service
=================================================

What:  Adoption request submission, listing and status updates.
How:   `petId`, `requesterEmail` and `ownerEmail` are stored as given; nothing
       checks that the referenced pet or users exist.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pet_adoption.database import DESCENDING, Collections, DocumentStore, serialize_document, store_failure, to_object_id
from pet_adoption.exceptions import NotFoundError
from pet_adoption.schemas.adoption import AdoptionStatus
from pet_adoption.schemas.common import CreatedResponse, MessageResponse
from pet_adoption.services.validation import validate_adoption_request, validate_status

logger = logging.getLogger(__name__)


class AdoptionService:
    """Adoption request lifecycle: submit, list, set status."""

    def __init__(self, store: DocumentStore):
        self._requests = store.collection(Collections.ADOPTIONS)

    async def submit_request(self, payload: Any) -> CreatedResponse:
        """
        Store a new adoption request with status `pending`.

        What:    Called by POST /api/adopt from the pet detail page.
        How:     Required fields are checked in order; the four optional
                 fields default to "". Any client `status` is ignored.

        Args:
            payload: raw request body

        Returns:
            CreatedResponse carrying the new request id

        Raises:
            ValidationError: a required field is missing
            StoreError: "Failed to submit adoption request"
        """
        request = validate_adoption_request(payload)

        document = request.model_dump()
        document["status"] = AdoptionStatus.PENDING.value
        document["createdAt"] = datetime.now(timezone.utc)

        with store_failure("Failed to submit adoption request"):
            inserted_id = await self._requests.insert_one(document)

        logger.info("Adoption request %s for pet %s", inserted_id, request.petId)
        return CreatedResponse(message="Adoption request submitted", id=str(inserted_id))

    async def list_requests(self) -> List[Dict[str, Any]]:
        """All requests, newest first."""
        with store_failure("Internal server error"):
            requests = await self._requests.find({}, sort=[("createdAt", DESCENDING)])
        return serialize_document(requests)

    async def update_status(self, request_id: str, payload: Any) -> MessageResponse:
        """
        Overwrite a request's status.

        Raises:
            ValidationError: status is not pending, accepted or rejected
            NotFoundError: malformed id or no such request
            StoreError: "Failed to update status"
        """
        # TODO: restrict transitions out of accepted/rejected once product rules exist
        status = validate_status(payload)

        object_id = to_object_id(request_id)
        if object_id is None:
            raise NotFoundError(resource="Adoption request", resource_id=request_id)

        with store_failure("Failed to update status"):
            outcome = await self._requests.update_one({"_id": object_id}, set_fields={"status": status.value})

        if outcome.matched_count == 0:
            raise NotFoundError(resource="Adoption request", resource_id=request_id)

        return MessageResponse(message=f"Request status updated to {status.value}")
