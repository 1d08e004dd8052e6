# Middleware package init
"""
Pet Adoption Backend — Middleware Package
===========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the correlation id;
    the id is echoed back in the `X-Request-ID` response header.
"""
