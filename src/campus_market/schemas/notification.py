"""Notification-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    """Schema for a notification returned by the API."""

    id: int
    target_id: str
    actor_id: str | None
    kind: str
    message: str
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UnreadCount(BaseModel):
    """Number of unread notifications for the caller."""

    unread: int
