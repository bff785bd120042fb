"""SQLAlchemy models for user profiles."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base
from campus_market.db.time import utcnow


class Role(str, enum.Enum):
    """Roles a profile can hold; ADMIN unlocks moderation."""

    USER = "USER"
    ADMIN = "ADMIN"


class Profile(Base):
    """Public profile keyed by the identifier issued by the auth provider."""

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("role IN ('USER', 'ADMIN')", name="ck_profiles_role"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=Role.USER.value)
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    college: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone_no: Mapped[str | None] = mapped_column(String(16), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    @property
    def is_admin(self) -> bool:
        """Return True when the profile holds the ADMIN role."""
        return self.role == Role.ADMIN.value
