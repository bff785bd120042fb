# src/campus_market/schemas/request.py
"""Request-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .common import ProfileSummary


class RequestCreate(BaseModel):
    """Schema for creating a new resource request."""

    title: str = Field(..., min_length=4)
    description: str = Field(..., min_length=5)
    image: str | None = Field(None, description="Optional image URL")

    model_config = ConfigDict(extra="forbid")


class RequestUpdate(BaseModel):
    """Owner edits to a request; the upvote counter is not editable."""

    title: str | None = Field(None, min_length=4)
    description: str | None = Field(None, min_length=5)
    image: str | None = None

    model_config = ConfigDict(extra="forbid")


class RequestResponse(BaseModel):
    """Schema for request information returned by the API."""

    id: int
    user_id: str
    title: str
    description: str
    image_url: str | None
    upvotes: int
    created_at: datetime
    user: ProfileSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class UpvoteOutcome(BaseModel):
    """Result of toggling an upvote."""

    request_id: int
    state: Literal["added", "removed"]
    upvotes: int


class MyUpvote(BaseModel):
    """Whether the caller currently upvotes a request."""

    request_id: int
    upvoted: bool
