# src/campus_market/services/store.py
"""Data access for marketplace entities.

``EntityStore`` is the only component that talks to SQLAlchemy. Every other
service receives one at construction time, so tests can hand in a store bound
to an in-memory database or a mock.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_market.db.time import utcnow
from campus_market.models import (
    Chat,
    ChatParticipant,
    Feedback,
    Message,
    ModeratedKind,
    ModerationDecision,
    ModerationStatus,
    Notification,
    Post,
    Profile,
    ResourceRequest,
    Role,
    Upvote,
    canonical_pair,
)
from campus_market.services.results import StoreFailure

__all__ = ["EntityStore"]

logger = logging.getLogger(__name__)


def _contains(term: str) -> str:
    """Build an ILIKE substring pattern that matches ``%`` and ``_`` literally."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class EntityStore:
    """Thin wrapper around database access for marketplace entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the store with a SQLAlchemy session."""
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run the enclosed writes as one unit of work.

        Commits on success and rolls back on any error. Uniqueness violations
        propagate as ``IntegrityError`` so callers can treat them as "already
        exists"; other driver errors become :class:`StoreFailure`.
        """
        try:
            yield self.session
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Store transaction failed: %s", exc)
            raise StoreFailure(str(exc)) from exc
        except Exception:
            self.session.rollback()
            raise

    def add(self, instance: object) -> None:
        self.session.add(instance)

    def delete(self, instance: object) -> None:
        self.session.delete(instance)

    def flush(self) -> None:
        self.session.flush()

    def refresh(self, instance: object) -> None:
        self.session.refresh(instance)

    # Profiles

    def get_profile(self, profile_id: str) -> Profile | None:
        """Return a profile by identifier."""
        return self.session.get(Profile, profile_id)

    def get_profiles(self, profile_ids: Iterable[str]) -> dict[str, Profile]:
        """Return the profiles for the given ids keyed by id."""
        ids = set(profile_ids)
        if not ids:
            return {}
        rows = self.session.scalars(select(Profile).where(Profile.id.in_(ids)))
        return {profile.id: profile for profile in rows}

    def admin_ids(self) -> list[str]:
        """Return the ids of every admin profile."""
        return list(
            self.session.scalars(
                select(Profile.id).where(Profile.role == Role.ADMIN.value).order_by(Profile.id)
            )
        )

    # Posts

    def get_post(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def list_posts(
        self,
        *,
        category: str | None = None,
        query: str | None = None,
        public_only: bool = True,
    ) -> list[Post]:
        """Return posts newest first, optionally filtered.

        Args:
            category: Exact category match; ``None`` or ``"ALL"`` disables it.
            query: Case-insensitive substring matched against the title.
            public_only: Restrict to approved, available listings.
        """
        stmt = select(Post)
        if public_only:
            stmt = stmt.where(Post.is_approved.is_(True), Post.is_available.is_(True))
        if category and category.upper() != "ALL":
            stmt = stmt.where(Post.category == category)
        if query:
            stmt = stmt.where(Post.title.ilike(_contains(query), escape="\\"))
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
        return list(self.session.scalars(stmt))

    def delete_post(self, post: Post) -> None:
        """Delete a post together with its feedback and moderation decision."""
        self.session.execute(delete(Feedback).where(Feedback.post_id == post.id))
        self.clear_decision(ModeratedKind.POST, post.id)
        self.session.delete(post)

    def pending_posts(self) -> list[Post]:
        """Return posts without a moderation decision, newest first."""
        decided = select(ModerationDecision.entity_id).where(
            ModerationDecision.entity_kind == ModeratedKind.POST.value
        )
        stmt = (
            select(Post)
            .where(Post.id.not_in(decided))
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return list(self.session.scalars(stmt))

    # Requests

    def get_request(self, request_id: int) -> ResourceRequest | None:
        """Return a request by identifier."""
        return self.session.get(ResourceRequest, request_id)

    def list_requests(self, *, query: str | None = None) -> list[ResourceRequest]:
        """Return requests newest first, hiding rejected ones."""
        rejected = select(ModerationDecision.entity_id).where(
            ModerationDecision.entity_kind == ModeratedKind.REQUEST.value,
            ModerationDecision.status == ModerationStatus.REJECTED.value,
        )
        stmt = select(ResourceRequest).where(ResourceRequest.id.not_in(rejected))
        if query:
            pattern = _contains(query)
            stmt = stmt.where(
                or_(
                    ResourceRequest.title.ilike(pattern, escape="\\"),
                    ResourceRequest.description.ilike(pattern, escape="\\"),
                )
            )
        stmt = stmt.order_by(ResourceRequest.created_at.desc(), ResourceRequest.id.desc())
        return list(self.session.scalars(stmt))

    def delete_request(self, request: ResourceRequest) -> None:
        """Delete a request together with its upvotes and moderation decision."""
        self.session.execute(delete(Upvote).where(Upvote.request_id == request.id))
        self.clear_decision(ModeratedKind.REQUEST, request.id)
        self.session.delete(request)

    def pending_requests(self) -> list[ResourceRequest]:
        """Return requests without a moderation decision, newest first."""
        decided = select(ModerationDecision.entity_id).where(
            ModerationDecision.entity_kind == ModeratedKind.REQUEST.value
        )
        stmt = (
            select(ResourceRequest)
            .where(ResourceRequest.id.not_in(decided))
            .order_by(ResourceRequest.created_at.desc(), ResourceRequest.id.desc())
        )
        return list(self.session.scalars(stmt))

    # Upvotes

    def has_upvote(self, request_id: int, user_id: str) -> bool:
        """Return True if the user currently upvotes the request."""
        return self.session.get(Upvote, (request_id, user_id)) is not None

    def remove_upvote(self, request_id: int, user_id: str) -> bool:
        """Delete the upvote row; return True if one existed."""
        result = self.session.execute(
            delete(Upvote).where(
                Upvote.request_id == request_id,
                Upvote.user_id == user_id,
            )
        )
        return bool(result.rowcount)

    def insert_upvote(self, request_id: int, user_id: str) -> None:
        """Insert the upvote row, surfacing duplicates as ``IntegrityError``."""
        self.session.add(Upvote(request_id=request_id, user_id=user_id))
        self.session.flush()

    def adjust_upvote_count(self, request_id: int, delta: int) -> None:
        """Atomically shift the denormalized counter without going below zero."""
        stmt = (
            update(ResourceRequest)
            .where(ResourceRequest.id == request_id)
            .values(upvotes=ResourceRequest.upvotes + delta)
        )
        if delta < 0:
            stmt = stmt.where(ResourceRequest.upvotes >= -delta)
        self.session.execute(stmt)

    def upvote_count(self, request_id: int) -> int:
        """Read the stored counter straight from the database."""
        count = self.session.scalar(
            select(ResourceRequest.upvotes).where(ResourceRequest.id == request_id)
        )
        return int(count or 0)

    def count_upvote_rows(self, request_id: int) -> int:
        """Count upvote rows for a request."""
        return int(
            self.session.scalar(
                select(func.count()).select_from(Upvote).where(Upvote.request_id == request_id)
            )
            or 0
        )

    # Chats

    def find_chat_between(self, first: str, second: str) -> Chat | None:
        """Return the chat for an unordered participant pair, if any."""
        low, high = canonical_pair(first, second)
        return self.session.scalars(
            select(Chat).where(
                Chat.participant_low_id == low,
                Chat.participant_high_id == high,
            )
        ).first()

    def create_chat(self, first: str, second: str) -> Chat:
        """Insert a chat and its participant rows.

        A concurrent insert for the same pair surfaces as ``IntegrityError``.
        """
        low, high = canonical_pair(first, second)
        chat = Chat(participant_low_id=low, participant_high_id=high)
        chat.updated_at = chat.created_at = utcnow()
        chat.participants = [
            ChatParticipant(user_id=low),
            ChatParticipant(user_id=high),
        ]
        self.session.add(chat)
        self.session.flush()
        return chat

    def get_chat(self, chat_id: int) -> Chat | None:
        """Return a chat by identifier."""
        return self.session.get(Chat, chat_id)

    def chats_for(self, user_id: str) -> list[Chat]:
        """Return the user's chats, most recently active first."""
        stmt = (
            select(Chat)
            .join(ChatParticipant, ChatParticipant.chat_id == Chat.id)
            .where(ChatParticipant.user_id == user_id)
            .order_by(Chat.updated_at.desc(), Chat.id.desc())
        )
        return list(self.session.scalars(stmt))

    def messages_for(self, chat_id: int) -> list[Message]:
        """Return a chat's messages in conversation order."""
        stmt = (
            select(Message)
            .where(Message.chat_id == chat_id)
            .order_by(Message.created_at, Message.id)
        )
        return list(self.session.scalars(stmt))

    def latest_message(self, chat_id: int) -> Message | None:
        """Return the newest message of a chat."""
        stmt = (
            select(Message)
            .where(Message.chat_id == chat_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(1)
        )
        return self.session.scalars(stmt).first()

    def get_message(self, message_id: int) -> Message | None:
        """Return a message by identifier."""
        return self.session.get(Message, message_id)

    def append_message(self, chat: Chat, sender_id: str, text: str) -> Message:
        """Insert a message and move the chat's activity timestamp to it."""
        message = Message(chat_id=chat.id, sender_id=sender_id, text=text, created_at=utcnow())
        self.session.add(message)
        self.session.flush()
        # Only ever move forward; a concurrent newer send keeps its timestamp.
        self.session.execute(
            update(Chat)
            .where(Chat.id == chat.id, Chat.updated_at < message.created_at)
            .values(updated_at=message.created_at)
            .execution_options(synchronize_session=False)
        )
        self.session.expire(chat, ["updated_at"])
        return message

    def refresh_chat_activity(self, chat: Chat) -> None:
        """Recompute ``updated_at`` from the chat's remaining messages in one statement."""
        self.session.flush()
        latest = (
            select(func.max(Message.created_at))
            .where(Message.chat_id == chat.id)
            .scalar_subquery()
        )
        self.session.execute(
            update(Chat)
            .where(Chat.id == chat.id)
            .values(updated_at=func.coalesce(latest, Chat.created_at))
            .execution_options(synchronize_session=False)
        )
        self.session.expire(chat, ["updated_at"])

    # Notifications

    def add_notification(
        self,
        *,
        target_id: str,
        actor_id: str | None,
        kind: str,
        message: str,
    ) -> Notification:
        """Stage a notification row in the current transaction."""
        notification = Notification(
            target_id=target_id,
            actor_id=actor_id,
            kind=kind,
            message=message,
            is_read=False,
            created_at=utcnow(),
        )
        self.session.add(notification)
        return notification

    def get_notification(self, notification_id: int) -> Notification | None:
        """Return a notification by identifier."""
        return self.session.get(Notification, notification_id)

    def notifications_for(self, target_id: str) -> list[Notification]:
        """Return notifications for a user, newest first."""
        stmt = (
            select(Notification)
            .where(Notification.target_id == target_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        return list(self.session.scalars(stmt))

    def mark_notification_read(self, notification_id: int) -> bool:
        """Flip ``is_read`` to True; return False if it already was."""
        result = self.session.execute(
            update(Notification)
            .where(Notification.id == notification_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        return bool(result.rowcount)

    def unread_count(self, target_id: str) -> int:
        """Count unread notifications for a user."""
        return int(
            self.session.scalar(
                select(func.count())
                .select_from(Notification)
                .where(Notification.target_id == target_id, Notification.is_read.is_(False))
            )
            or 0
        )

    # Moderation

    def get_decision(self, kind: ModeratedKind, entity_id: int) -> ModerationDecision | None:
        """Return the moderation decision for an entity, if one was made."""
        return self.session.get(ModerationDecision, (kind.value, entity_id))

    def record_decision(
        self,
        kind: ModeratedKind,
        entity_id: int,
        status: ModerationStatus,
        decided_by: str,
    ) -> ModerationDecision:
        """Insert a decision; a second decision surfaces as ``IntegrityError``."""
        decision = ModerationDecision(
            entity_kind=kind.value,
            entity_id=entity_id,
            status=status.value,
            decided_by=decided_by,
        )
        self.session.add(decision)
        self.session.flush()
        return decision

    def clear_decision(self, kind: ModeratedKind, entity_id: int) -> None:
        """Forget the decision for a deleted entity so its id can be reused."""
        self.session.execute(
            delete(ModerationDecision).where(
                ModerationDecision.entity_kind == kind.value,
                ModerationDecision.entity_id == entity_id,
            )
        )

    # Feedback

    def add_feedback(self, post_id: int, customer_id: str, rating: int, text: str | None) -> Feedback:
        """Insert buyer feedback; duplicates surface as ``IntegrityError``."""
        feedback = Feedback(post_id=post_id, customer_id=customer_id, rating=rating, text=text)
        self.session.add(feedback)
        self.session.flush()
        return feedback
