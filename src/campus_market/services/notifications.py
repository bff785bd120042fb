"""Notification fan-out and inbox operations.

Notifications are derived from other actions: moderation decisions, chat
messages and new submissions. :meth:`NotificationFanout.emit` stages the row
inside the caller's transaction so the notification commits (or rolls back)
together with the state change that caused it.
"""
from __future__ import annotations

import logging

from campus_market.models import ModeratedKind, Notification, NotificationKind
from campus_market.schemas.notification import NotificationResponse, UnreadCount
from campus_market.services.identity import Identity
from campus_market.services.policy import Action, AuthorizationPolicy
from campus_market.services.results import Result, Success, not_found
from campus_market.services.store import EntityStore

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 80

_KIND_LABELS = {
    ModeratedKind.POST: "post",
    ModeratedKind.REQUEST: "request",
}


def _preview(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= PREVIEW_LENGTH:
        return text
    return text[: PREVIEW_LENGTH - 3] + "..."


class NotificationFanout:
    """Create notifications as side effects and serve the user's inbox."""

    def __init__(self, store: EntityStore, policy: AuthorizationPolicy | None = None) -> None:
        self.store = store
        self.policy = policy or AuthorizationPolicy()

    def emit(
        self,
        *,
        target_id: str,
        actor_id: str | None,
        kind: NotificationKind,
        message: str,
    ) -> Notification:
        """Stage one unread notification for ``target_id``."""
        logger.debug("Notify %s (%s) from %s", target_id, kind.value, actor_id)
        return self.store.add_notification(
            target_id=target_id,
            actor_id=actor_id,
            kind=kind.value,
            message=message,
        )

    def moderation_decided(
        self,
        *,
        owner_id: str,
        admin_id: str,
        kind: ModeratedKind,
        title: str,
        approved: bool,
        reason: str | None = None,
    ) -> Notification:
        """Tell the owner of a submission about the admin's decision.

        The rejection reason travels only in the message text.
        """
        label = _KIND_LABELS[kind]
        if approved:
            return self.emit(
                target_id=owner_id,
                actor_id=admin_id,
                kind=NotificationKind.ADMIN_APPROVE,
                message=f'Your {label} "{title}" has been approved.',
            )
        message = f'Your {label} "{title}" has been rejected.'
        if reason:
            message = f"{message} Reason: {reason}"
        return self.emit(
            target_id=owner_id,
            actor_id=admin_id,
            kind=NotificationKind.ADMIN_REJECT,
            message=message,
        )

    def message_received(
        self,
        *,
        recipient_id: str,
        sender_id: str,
        sender_name: str | None,
        text: str,
    ) -> Notification:
        """Tell the other chat participant that a message arrived."""
        who = sender_name or "Someone"
        return self.emit(
            target_id=recipient_id,
            actor_id=sender_id,
            kind=NotificationKind.NEW_MESSAGE,
            message=f"{who} sent you a message: {_preview(text)}",
        )

    def submission_created(
        self,
        *,
        author_id: str,
        kind: ModeratedKind,
        title: str,
    ) -> list[Notification]:
        """Ask every admin other than the author to review a new submission."""
        label = _KIND_LABELS[kind]
        return [
            self.emit(
                target_id=admin_id,
                actor_id=author_id,
                kind=NotificationKind.NEW_SUBMISSION,
                message=f'New {label} awaiting review: "{title}"',
            )
            for admin_id in self.store.admin_ids()
            if admin_id != author_id
        ]

    def list_notifications(self, caller: Identity) -> Result[list[NotificationResponse]]:
        """Return the caller's notifications, newest first."""
        rows = self.store.notifications_for(caller.id)
        return Success([NotificationResponse.model_validate(row) for row in rows])

    def unread_count(self, caller: Identity) -> Result[UnreadCount]:
        """Return how many of the caller's notifications are unread."""
        return Success(UnreadCount(unread=self.store.unread_count(caller.id)))

    def mark_as_read(self, caller: Identity, notification_id: int) -> Result[NotificationResponse]:
        """Mark one of the caller's notifications as read.

        Repeated calls succeed without further changes.
        """
        notification = self.store.get_notification(notification_id)
        if notification is None:
            return not_found("Notification")
        denied = self.policy.check(caller, Action.READ_NOTIFICATION, owner_id=notification.target_id)
        if denied:
            return denied

        with self.store.transaction():
            changed = self.store.mark_notification_read(notification_id)
        if changed:
            logger.debug("Notification %s marked as read", notification_id)
        self.store.refresh(notification)
        return Success(NotificationResponse.model_validate(notification))
