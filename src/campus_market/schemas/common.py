"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ProfileSummary(BaseModel):
    """Minimal public view of a profile embedded in other payloads."""

    id: str
    name: str | None = None
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ActionMessage(BaseModel):
    """Plain confirmation payload for actions without a richer result."""

    message: str
