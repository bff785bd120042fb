"""Authorization rules for marketplace actions.

Every gated operation asks :class:`AuthorizationPolicy` whether the caller may
perform an :class:`Action` on a given resource before touching the store.
"""
from __future__ import annotations

import enum
from collections.abc import Iterable

from campus_market.services.identity import Identity
from campus_market.services.results import Failure, unauthorized


class Action(str, enum.Enum):
    """Capabilities checked by the policy."""

    EDIT_LISTING = "edit_listing"
    DELETE_LISTING = "delete_listing"
    MARK_SOLD = "mark_sold"
    MODERATE = "moderate"
    VIEW_CHAT = "view_chat"
    SEND_MESSAGE = "send_message"
    DELETE_MESSAGE = "delete_message"
    READ_NOTIFICATION = "read_notification"
    LEAVE_FEEDBACK = "leave_feedback"


OWNER_OR_ADMIN = frozenset({Action.EDIT_LISTING, Action.DELETE_LISTING, Action.MARK_SOLD})
ADMIN_ONLY = frozenset({Action.MODERATE})
PARTICIPANT_ONLY = frozenset({Action.VIEW_CHAT, Action.SEND_MESSAGE})
OWNER_ONLY = frozenset({Action.DELETE_MESSAGE, Action.READ_NOTIFICATION, Action.LEAVE_FEEDBACK})

_DENIED_MESSAGES = {
    Action.EDIT_LISTING: "Only the owner or an admin can edit this item",
    Action.DELETE_LISTING: "Only the owner or an admin can delete this item",
    Action.MARK_SOLD: "Only the seller or an admin can mark this post as sold",
    Action.MODERATE: "Unauthorized",
    Action.VIEW_CHAT: "You are not a participant of this chat",
    Action.SEND_MESSAGE: "You are not a participant of this chat",
    Action.DELETE_MESSAGE: "You can only delete your own messages",
    Action.READ_NOTIFICATION: "This notification belongs to another user",
    Action.LEAVE_FEEDBACK: "Only the buyer can leave feedback on this post",
}


class AuthorizationPolicy:
    """Single place where role, ownership and membership rules live."""

    def allows(
        self,
        caller: Identity,
        action: Action,
        *,
        owner_id: str | None = None,
        participants: Iterable[str] = (),
    ) -> bool:
        """Return True if ``caller`` may perform ``action``."""
        if action in ADMIN_ONLY:
            return caller.is_admin
        if action in OWNER_OR_ADMIN:
            return caller.is_admin or (owner_id is not None and caller.id == owner_id)
        if action in OWNER_ONLY:
            return owner_id is not None and caller.id == owner_id
        if action in PARTICIPANT_ONLY:
            return caller.id in set(participants)
        return False

    def check(
        self,
        caller: Identity,
        action: Action,
        *,
        owner_id: str | None = None,
        participants: Iterable[str] = (),
    ) -> Failure | None:
        """Return an ``Unauthorized`` failure, or None when the action is allowed."""
        if self.allows(caller, action, owner_id=owner_id, participants=participants):
            return None
        return unauthorized(_DENIED_MESSAGES[action])
