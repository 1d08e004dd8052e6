# Services package init
"""
Pet Adoption Backend — Services Layer
=======================================

What:  Business logic between routes (HTTP) and the document store.
How:   Each service is constructed with the `DocumentStore` it uses and runs
       validate → persist/query → shape for one resource. Services hold no
       state between calls.

Service Inventory:
    - validation.py:        pure validators, one per resource
    - auth.py:              AuthorizationGuard, Permission, role → permission table
    - user_service.py:      UserService (upsert, list, change role)
    - pet_service.py:       PetService (list, list by owner, get, create)
    - adoption_service.py:  AdoptionService (submit, list, update status)
    - donation_service.py:  DonationService (list/paginate, mine, create, donate, get, search)
"""
