"""
Book API - Pydantic Request/Response Schemas
============================================

What:  Pydantic models defining the JSON contract of the API.
How:   The book routes decode request bodies into BookPayload; FastAPI
       serializes responses through the response models and generates the
       OpenAPI document served under /swagger from all of them.

Binding rules for BookPayload are loose: missing or null
strings become "", a null body is an empty book, unknown fields are
ignored. A wrong JSON type (including a quoted or boolean id), or a body
that is neither a JSON object nor null, is a malformed body.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BookPayload(BaseModel):
    """
    Body of POST /books and PUT /books/{id}.

    The id field is accepted so existing clients can send whole records,
    but the server always ignores it.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"title": "X", "author": "Y"}},
    )

    id: Optional[StrictInt] = Field(
        default=None,
        description="Ignored. The server assigns ids on create and uses the path id on update.",
    )
    title: str = Field(default="", description="Book title")
    author: str = Field(default="", description="Book author")

    @field_validator("title", "author", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        """A JSON null decodes to the empty string."""
        return "" if v is None else v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookResponse(BaseModel):
    """A stored book as returned by every book endpoint."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": {"id": 1, "title": "Go Programming", "author": "John Doe"}},
    )

    id: int = Field(description="Server-assigned book id")
    title: str = Field(description="Book title")
    author: str = Field(description="Book author")


class MessageResponse(BaseModel):
    """Plain message body: welcome text, delete confirmation, not found."""

    message: str


class ErrorResponse(BaseModel):
    """
    Body of 400/429/500 responses.

    For malformed request bodies `error` carries the decoder's own text.
    """

    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    book_count: int = Field(description="Number of books currently stored")
    uptime_seconds: float = Field(description="Seconds since service started")
