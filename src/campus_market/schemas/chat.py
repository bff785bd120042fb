# src/campus_market/schemas/chat.py
"""Chat and message Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import ProfileSummary


class ChatStart(BaseModel):
    """Schema for opening (or re-opening) a chat with another user."""

    other_user_id: str = Field(..., min_length=1)


class MessageCreate(BaseModel):
    """Schema for sending a message; length is enforced by the registry."""

    text: str


class MessageResponse(BaseModel):
    """Schema for a chat message returned by the API."""

    id: int
    chat_id: int
    sender_id: str
    text: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatStarted(BaseModel):
    """Identifier of the chat shared by the caller and another user."""

    chat_id: int


class ChatSummary(BaseModel):
    """Inbox entry: a chat with its latest message for preview."""

    id: int
    participants: list[ProfileSummary]
    updated_at: datetime
    last_message: MessageResponse | None = None


class ChatDetail(BaseModel):
    """Full chat with messages in conversation order."""

    id: int
    participants: list[ProfileSummary]
    created_at: datetime
    updated_at: datetime
    messages: list[MessageResponse]
