"""Models tracking admin moderation decisions."""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base
from campus_market.db.time import utcnow


class ModeratedKind(str, enum.Enum):
    """Entity kinds that pass through moderation."""

    POST = "POST"
    REQUEST = "REQUEST"


class ModerationStatus(str, enum.Enum):
    """Moderation states; PENDING is represented by the absence of a decision."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ModerationDecision(Base):
    """Terminal admin decision for one submission.

    The composite primary key allows a single decision per entity, so
    concurrent approve/reject calls cannot both succeed.
    """

    __tablename__ = "moderation_decisions"
    __table_args__ = (
        CheckConstraint("entity_kind IN ('POST', 'REQUEST')", name="ck_moderation_kind"),
        CheckConstraint("status IN ('APPROVED', 'REJECTED')", name="ck_moderation_status"),
    )

    entity_kind: Mapped[str] = mapped_column(String(16), primary_key=True)
    entity_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    decided_by: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    decided_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
