"""SQLAlchemy models for marketplace listings."""

from datetime import datetime

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base
from campus_market.db.time import utcnow


class Post(Base):
    """A seller's listing.

    New listings start unapproved and unavailable; only the moderation
    workflow flips ``is_approved``.
    """

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_public", "is_approved", "is_available", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    seller_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(64), nullable=False, default="OTHER")
    # Free-form price string as entered by the seller.
    price: Mapped[str] = mapped_column(String(64), nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    is_available: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_approved: Mapped[bool] = mapped_column(default=False, nullable=False)
    sold_to_user_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
