"""
Pastebin Backend — Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract between the UI and backend.
Why:   Input validation, serialization, and OpenAPI doc generation.
How:   Fields are snake_case in Python and camelCase on the wire
       (expiresIn, burnAfterRead, isPrivate, expiresAt, createdAt).
       Both spellings are accepted on input.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every wire model: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PasteCreate(CamelModel):
    """
    Body of POST /api/pastes.

    content is required; the non-empty rule is a business rule enforced by
    PasteService (400), not by the schema (which would answer 422).
    expires_in is milliseconds from now; 0 or negative yields an already
    expired paste, null means never.
    """
    content: str = Field(description="Paste text")
    language: Optional[str] = Field(
        default=None,
        max_length=32,
        description="Syntax tag; defaults to 'plain'",
    )
    expires_in: Optional[int] = Field(
        default=None,
        description="Lifetime in milliseconds from now (null = never expires)",
    )
    burn_after_read: bool = Field(default=False)
    is_private: bool = Field(default=False)

    @field_validator("burn_after_read", "is_private", mode="before")
    @classmethod
    def null_means_false(cls, v):
        return False if v is None else v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PasteCreated(CamelModel):
    """Returned by POST /api/pastes."""
    id: str = Field(description="Identifier of the new paste")


class PasteResponse(CamelModel):
    """Full paste as returned by GET /api/pastes/{id} (content never truncated)."""
    id: str
    content: str
    language: str
    expires_at: Optional[datetime] = None
    burn_after_read: bool
    is_private: bool
    views: int
    created_at: datetime


class PasteSummary(CamelModel):
    """
    One entry of GET /api/pastes.

    content is a preview: the first 100 characters, followed by "..." when
    the stored text is longer.
    """
    id: str
    content: str
    language: str
    created_at: datetime
    views: int
    is_private: bool
    burn_after_read: bool
    expires_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    """Returned by DELETE /api/pastes/{id}."""
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "paste with ID 'ab12cd34' was not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
