"""Models describing two-party chat threads and their messages."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_market.db.session import Base
from campus_market.db.time import utcnow


def canonical_pair(first: str, second: str) -> tuple[str, str]:
    """Return the participant pair in the order stored on a chat row."""
    return (first, second) if first <= second else (second, first)


class Chat(Base):
    """Message thread between exactly two users.

    The pair is stored canonically ordered so that the unique constraint
    covers the unordered pair.
    """

    __tablename__ = "chats"
    __table_args__ = (
        UniqueConstraint("participant_low_id", "participant_high_id", name="uq_chats_pair"),
        CheckConstraint("participant_low_id < participant_high_id", name="ck_chats_pair_order"),
        Index("ix_chats_updated_at", "updated_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    participant_low_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    participant_high_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    # Equals the newest message's created_at, or created_at when empty.
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    participants: Mapped[list[ChatParticipant]] = relationship(
        "ChatParticipant",
        back_populates="chat",
        cascade="all, delete-orphan",
    )

    @property
    def participant_ids(self) -> tuple[str, str]:
        """Return both participant ids."""
        return (self.participant_low_id, self.participant_high_id)

    def other_participant(self, user_id: str) -> str:
        """Return the participant that is not ``user_id``."""
        if user_id == self.participant_low_id:
            return self.participant_high_id
        return self.participant_low_id


class ChatParticipant(Base):
    """Membership row linking a profile to a chat."""

    __tablename__ = "chat_participants"

    chat_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("chats.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    chat: Mapped[Chat] = relationship("Chat", back_populates="participants")


class Message(Base):
    """Append-only chat message, ordered by (created_at, id)."""

    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_chat_order", "chat_id", "created_at", "id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chat_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
