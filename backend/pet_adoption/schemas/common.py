"""
Pet Adoption Backend — Shared Response Schemas
================================================

What:  Response envelopes reused by every router.
Who:   Route decorators (`response_model=` / `responses=`) and the global
       exception handlers in main.py.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Acknowledgement returned by update endpoints."""

    message: str = Field(description="Human-readable outcome")


class CreatedResponse(BaseModel):
    """
    What:  Returned with HTTP 201 by every create endpoint.
    How:   `id` is the store-generated document id rendered as a hex string.
    """

    message: str = Field(description="Human-readable outcome")
    id: str = Field(description="Store-generated document id")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "forbidden",
            "message": "Access denied. Admins only.",
            "request_id": "3f2a9c1d"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
