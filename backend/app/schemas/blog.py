"""
CascadeBlog Backend - Pydantic Request/Response Schemas
========================================================

What:  Pydantic models for the fixed-shape parts of the API contract.
Why:   Input validation, serialization and OpenAPI docs for comments, wishlist
       toggles, write receipts, errors and health.
How:   Wire names are camelCase (blogId, userEmail, insertedId) to match the
       stored documents; Python attributes stay snake_case through an alias
       generator.

Blog posts themselves are NOT modeled: authors may store arbitrary fields, so
blog bodies travel as plain JSON objects and stored documents are returned
through `serialize_document`.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for models exchanged with the frontend in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CommentCreate(CamelModel):
    """
    What:  Body of POST /comments.
    Note:  blog_id is a string here; it is validated as an ObjectId by the
           comment service (400 on malformed ids).
    """
    blog_id: str = Field(description="Identifier of the commented blog post")
    user_name: str = Field(description="Display name of the comment author")
    user_photo: Optional[str] = Field(default=None, description="Author photo URL")
    user_email: str = Field(description="Email of the comment author")
    comment: str = Field(description="Comment text")


class WishlistToggleRequest(CamelModel):
    """Body of POST /wishlist."""
    blog_id: str = Field(description="Identifier of the blog post to (un)wish")
    user_email: str = Field(description="Email of the user owning the wishlist")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class InsertReceipt(CamelModel):
    """Acknowledgment of a single-document insert."""
    acknowledged: bool = Field(description="Whether the write was acknowledged")
    inserted_id: str = Field(description="Identifier assigned to the new document")


class UpdateReceipt(CamelModel):
    """
    Acknowledgment of a $set update with upsert.

    upserted_id is set only when the update created the document.
    """
    acknowledged: bool
    matched_count: int = Field(description="Documents matched by the filter")
    modified_count: int = Field(description="Documents actually changed")
    upserted_id: Optional[str] = Field(default=None, description="Id of an upserted document")


class WishlistToggleResponse(BaseModel):
    wished: bool = Field(description="True when the pair is now in the wishlist")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for every non-2xx response.

    Example:
        {
            "error": "validation_error",
            "message": "'abc' is not a valid identifier",
            "details": {"field": "blogId"},
            "request_id": "1f0e9c2a"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
