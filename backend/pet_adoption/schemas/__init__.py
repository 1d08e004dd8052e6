"""
Pet Adoption Backend — Pydantic Schemas
=========================================

What:  Typed input models (one per resource) and shared response models.
How:   Raw request bodies are checked and coerced by
       `pet_adoption.services.validation`, which returns these models;
       services persist `model_dump()` output.

Schema Inventory:
    - common.py:    MessageResponse, CreatedResponse, ErrorResponse, HealthResponse
    - user.py:      Role, UserUpsert
    - pet.py:       PetCreate
    - adoption.py:  AdoptionStatus, AdoptionRequestCreate
    - donation.py:  DonationCampaignCreate
"""
