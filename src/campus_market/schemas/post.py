# src/campus_market/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from campus_market.core.settings import settings


class PostCreate(BaseModel):
    """Schema for creating a new listing."""

    title: str = Field(..., min_length=4, description="Listing title")
    description: str = Field(..., min_length=5, description="Listing description")
    price: str = Field(..., min_length=1, max_length=64)
    images: list[str] = Field(
        ...,
        min_length=1,
        max_length=settings.post_max_images,
        description="Image URLs; at least one is required",
    )
    category: str = Field("OTHER", min_length=1, max_length=64)

    model_config = ConfigDict(extra="forbid")


class PostUpdate(BaseModel):
    """Owner edits to a listing.

    Moderation fields are absent and unknown keys are rejected, so
    ``is_approved`` can never be set through this path.
    """

    title: str | None = Field(None, min_length=4)
    description: str | None = Field(None, min_length=5)
    price: str | None = Field(None, min_length=1, max_length=64)
    images: list[str] | None = Field(None, min_length=1, max_length=settings.post_max_images)
    category: str | None = Field(None, min_length=1, max_length=64)

    model_config = ConfigDict(extra="forbid")


class PostSold(BaseModel):
    """Payload for marking a listing as sold."""

    customer_id: str = Field(..., min_length=1, description="Profile id of the buyer")


class FeedbackCreate(BaseModel):
    """Buyer feedback on a sold listing."""

    rating: int = Field(..., ge=1, le=5)
    remark: str | None = Field(None, max_length=1000)


class PostResponse(BaseModel):
    """Schema for listing information returned by the API."""

    id: int
    seller_id: str
    title: str
    description: str
    category: str
    price: str
    images: list[str]
    is_available: bool
    is_approved: bool
    sold_to_user_id: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FeedbackResponse(BaseModel):
    """Stored feedback entry."""

    id: int
    post_id: int
    customer_id: str
    rating: int
    text: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
