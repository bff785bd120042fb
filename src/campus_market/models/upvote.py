# src/campus_market/models/upvote.py
"""Models capturing upvotes on requests."""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_market.db.session import Base


class Upvote(Base):
    """Per-user upvote on a request.

    Existence-based: a row means the user currently upvotes the request.
    """

    __tablename__ = "upvotes"
    __table_args__ = (
        Index("ix_upvotes_request_id", "request_id"),
    )

    # Composite primary key prevents duplicate upvotes from the same user.
    request_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("requests.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
