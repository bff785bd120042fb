# src/campus_market/schemas/moderation.py
"""Moderation-related Pydantic schemas."""

from pydantic import BaseModel, Field

from .post import PostResponse
from .request import RequestResponse


class RejectAction(BaseModel):
    """Schema for rejecting a submission."""

    reason: str = Field(..., description="Why the submission was rejected")


class ModerationOutcome(BaseModel):
    """Schema for a moderation decision returned by the API."""

    entity_kind: str
    entity_id: int
    status: str
    notified_user_id: str


class ReviewQueue(BaseModel):
    """Submissions still waiting for an admin decision."""

    posts: list[PostResponse]
    requests: list[RequestResponse]
