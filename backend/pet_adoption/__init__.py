"""
Pet Adoption Backend — Application Package
============================================

What: REST API for a pet adoption platform: pets, adoption requests,
      donation campaigns, and a minimal user/role store on MongoDB.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (validate, authorize)    │  ← one per resource
    ├─────────────────────────────────────┤
    │          Schemas (Pydantic)         │  ← typed input per resource
    ├─────────────────────────────────────┤
    │      Database (store adapter)       │  ← pymongo async client
    └─────────────────────────────────────┘

    Every request runs validate → (authorize) → persist/query → shape.
    Nothing but the store keeps state between requests.
"""

__version__ = "1.0.0"
