"""Models for targeted user notifications."""

import enum
from datetime import datetime

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base
from campus_market.db.time import utcnow


class NotificationKind(str, enum.Enum):
    """Event types that produce a notification."""

    ADMIN_APPROVE = "ADMIN_APPROVE"
    ADMIN_REJECT = "ADMIN_REJECT"
    NEW_MESSAGE = "NEW_MESSAGE"
    NEW_SUBMISSION = "NEW_SUBMISSION"


class Notification(Base):
    """Readable record of an event relevant to one user.

    Rows are written only as side effects of other actions; ``is_read`` only
    ever moves from False to True.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_target_created", "target_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    target_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    actor_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    # Column is named target_type in the database.
    kind: Mapped[str] = mapped_column("target_type", String(32), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
