"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


def _require_http(v: str) -> str:
    if not v.startswith(('http://', 'https://')):
        raise ValueError('URL must start with http:// or https://')
    return v


class CreateLinkRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1, max_length=2048)
    short_url: Optional[str] = Field(
        None,
        description="Optional caller-chosen short URL; autogenerated when omitted",
        min_length=1,
        max_length=75,
    )

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        return _require_http(v)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "short_url": None
                },
                {
                    "url": "https://github.com/user/repo",
                    "short_url": "myrepo"
                }
            ]
        }
    }


class UpdateLinkRequest(BaseModel):
    """Request to update an entry."""

    url: str = Field(..., description="The original URL", min_length=1, max_length=2048)
    short_url: str = Field(..., description="The short URL", min_length=1, max_length=75)
    active: bool = Field(True, description="Whether the short URL resolves")

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        return _require_http(v)


class LinkResponse(BaseModel):
    """A short-link entry."""

    id: int = Field(..., description="Entry id")
    short_url: str = Field(..., description="The short URL (alias)")
    short_link: str = Field(..., description="The complete public link")
    original_url: str = Field(..., description="The original long URL")
    autogenerated: bool = Field(..., description="Whether the short URL was derived from the id")
    active: bool = Field(..., description="Whether the short URL resolves")
    create_date: datetime = Field(..., description="Creation timestamp")
    modified_date: datetime = Field(..., description="Last modification timestamp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 42,
                    "short_url": "_G",
                    "short_link": "https://short.link/_G",
                    "original_url": "https://example.com/very/long/path",
                    "autogenerated": True,
                    "active": True,
                    "create_date": "2024-01-01T12:00:00Z",
                    "modified_date": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class LinkListResponse(BaseModel):
    """A page of entries of one kind."""

    autogenerated: bool
    start: int
    end: Optional[int] = None
    items: List[LinkResponse]


class ExpireResponse(BaseModel):
    """Result of an expiry sweep."""

    older_than: datetime = Field(..., description="Entries modified before this time were removed")
    deleted: int = Field(..., description="Number of removed entries")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_entries: int
    active_entries: int
    autogenerated_entries: int
    database: str
