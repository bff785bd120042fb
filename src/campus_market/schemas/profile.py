"""Profile-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ProfileResponse(BaseModel):
    """Schema for the caller's own profile."""

    id: str
    role: str
    full_name: str | None
    email: str | None
    avatar_url: str | None
    college: str | None
    phone_no: str | None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    """Self-service profile edits; the role is never client-writable."""

    full_name: str | None = Field(None, min_length=5)
    phone_no: str | None = Field(None, min_length=10, max_length=15)
    avatar_url: str | None = None
    college: str | None = Field(None, min_length=5)

    model_config = ConfigDict(extra="forbid")
