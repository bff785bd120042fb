"""Two-party chat threads: creation, messages and the inbox."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from campus_market.core.settings import settings
from campus_market.models import Chat, Profile
from campus_market.schemas.chat import (
    ChatDetail,
    ChatStarted,
    ChatSummary,
    MessageResponse,
)
from campus_market.schemas.common import ActionMessage, ProfileSummary
from campus_market.services.identity import Identity
from campus_market.services.notifications import NotificationFanout
from campus_market.services.policy import Action, AuthorizationPolicy
from campus_market.services.results import Result, Success, not_found, validation_failed
from campus_market.services.store import EntityStore

logger = logging.getLogger(__name__)


def _summary(profiles: dict[str, Profile], profile_id: str) -> ProfileSummary:
    profile = profiles.get(profile_id)
    if profile is None:
        return ProfileSummary(id=profile_id)
    return ProfileSummary(id=profile.id, name=profile.full_name, image=profile.avatar_url)


class ChatRegistry:
    """Keep exactly one chat per pair of users and append messages to it."""

    def __init__(
        self,
        store: EntityStore,
        notifier: NotificationFanout,
        policy: AuthorizationPolicy | None = None,
        max_message_length: int | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.policy = policy or AuthorizationPolicy()
        self.max_message_length = max_message_length or settings.message_max_length

    def start_chat(self, caller: Identity, other_user_id: str) -> Result[ChatStarted]:
        """Return the chat shared with ``other_user_id``, creating it on first contact.

        Calls by either participant, in any order, converge on one chat id.
        """
        if other_user_id == caller.id:
            return validation_failed("You cannot start a chat with yourself")
        if self.store.get_profile(other_user_id) is None:
            return not_found("User")

        existing = self.store.find_chat_between(caller.id, other_user_id)
        if existing is not None:
            return Success(ChatStarted(chat_id=existing.id))

        try:
            with self.store.transaction():
                chat = self.store.create_chat(caller.id, other_user_id)
                chat_id = chat.id
            logger.info("Created chat %s between %s and %s", chat_id, caller.id, other_user_id)
        except IntegrityError:
            existing = self.store.find_chat_between(caller.id, other_user_id)
            if existing is None:
                raise
            logger.warning(
                "Concurrent chat creation for %s and %s resolved to chat %s",
                caller.id,
                other_user_id,
                existing.id,
            )
            chat_id = existing.id
        return Success(ChatStarted(chat_id=chat_id))

    def send_message(self, caller: Identity, chat_id: int, text: str) -> Result[MessageResponse]:
        """Append a message and notify the other participant."""
        chat = self.store.get_chat(chat_id)
        if chat is None:
            return not_found("Chat")
        denied = self.policy.check(caller, Action.SEND_MESSAGE, participants=chat.participant_ids)
        if denied:
            return denied

        text = (text or "").strip()
        if not text:
            return validation_failed("Message text cannot be empty")
        if len(text) > self.max_message_length:
            return validation_failed(
                f"Message must be at most {self.max_message_length} characters long"
            )

        sender = self.store.get_profile(caller.id)
        with self.store.transaction():
            message = self.store.append_message(chat, caller.id, text)
            self.notifier.message_received(
                recipient_id=chat.other_participant(caller.id),
                sender_id=caller.id,
                sender_name=sender.full_name if sender else None,
                text=text,
            )
            response = MessageResponse.model_validate(message)
        return Success(response)

    def delete_message(self, caller: Identity, chat_id: int, message_id: int) -> Result[ActionMessage]:
        """Hard-delete one of the caller's own messages."""
        chat = self.store.get_chat(chat_id)
        if chat is None:
            return not_found("Chat")
        message = self.store.get_message(message_id)
        if message is None or message.chat_id != chat.id:
            return not_found("Message")
        denied = self.policy.check(caller, Action.DELETE_MESSAGE, owner_id=message.sender_id)
        if denied:
            return denied

        with self.store.transaction():
            self.store.delete(message)
            self.store.refresh_chat_activity(chat)
        return Success(ActionMessage(message="Message deleted"))

    def get_chat(self, caller: Identity, chat_id: int) -> Result[ChatDetail]:
        """Return a chat with its messages in conversation order."""
        chat = self.store.get_chat(chat_id)
        if chat is None:
            return not_found("Chat")
        denied = self.policy.check(caller, Action.VIEW_CHAT, participants=chat.participant_ids)
        if denied:
            return denied

        profiles = self.store.get_profiles(chat.participant_ids)
        return Success(
            ChatDetail(
                id=chat.id,
                participants=[_summary(profiles, pid) for pid in chat.participant_ids],
                created_at=chat.created_at,
                updated_at=chat.updated_at,
                messages=[
                    MessageResponse.model_validate(message)
                    for message in self.store.messages_for(chat.id)
                ],
            )
        )

    def get_all_chats(self, caller: Identity) -> Result[list[ChatSummary]]:
        """Return the caller's inbox, most recently active chat first."""
        chats: list[Chat] = self.store.chats_for(caller.id)
        participant_ids = {pid for chat in chats for pid in chat.participant_ids}
        profiles = self.store.get_profiles(participant_ids)

        inbox = []
        for chat in chats:
            latest = self.store.latest_message(chat.id)
            inbox.append(
                ChatSummary(
                    id=chat.id,
                    participants=[_summary(profiles, pid) for pid in chat.participant_ids],
                    updated_at=chat.updated_at,
                    last_message=MessageResponse.model_validate(latest) if latest else None,
                )
            )
        return Success(inbox)
