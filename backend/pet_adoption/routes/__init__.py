# Routes package init
"""
Pet Adoption Backend — API Routes Package
===========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one resource; handlers extract path/query/
       body values and delegate to the matching service.

Route Inventory:
    - health.py:     GET  /                           (liveness text)
                     GET  /health                     (store connectivity)
    - users.py:      POST /api/users                  (register / refresh user)
                     GET  /api/users                  (admin: list users)
                     PATCH /api/users/{id}/role       (admin: change role)
    - pets.py:       GET  /api/pets, GET /api/mypets, GET /api/pets/{id}, POST /api/pets
    - adoptions.py:  POST /api/adopt, GET /api/adoptions, PATCH /api/adoptions/{id}/status
    - donations.py:  GET  /api/donations, GET /api/my-donations, POST /api/donations,
                     PATCH /api/donations/{id}/donate, GET /api/donations/search,
                     GET  /api/donations/{id}

Admin-only routes declare `dependencies=[Depends(require_permission(...))]`;
no other route consults the authorization guard.
"""
