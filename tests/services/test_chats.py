# mypy: ignore-errors
# tests/services/test_chats.py
"""Tests for chat creation, messaging and the inbox."""

from datetime import datetime

from sqlalchemy import update

from campus_market.models import Chat, Notification, NotificationKind
from campus_market.services import ErrorKind, Failure


def test_start_chat_is_idempotent_in_both_directions(
    chat_registry,
    db_session,
    user_identity,
    other_identity,
) -> None:
    first = chat_registry.start_chat(user_identity, other_identity.id)
    again = chat_registry.start_chat(user_identity, other_identity.id)
    reverse = chat_registry.start_chat(other_identity, user_identity.id)

    assert first.ok and again.ok and reverse.ok
    assert first.value.chat_id == again.value.chat_id == reverse.value.chat_id
    assert db_session.query(Chat).count() == 1


def test_start_chat_with_self_is_rejected(chat_registry, user_identity) -> None:
    result = chat_registry.start_chat(user_identity, user_identity.id)
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.VALIDATION_FAILED


def test_start_chat_with_unknown_user(chat_registry, user_identity) -> None:
    result = chat_registry.start_chat(user_identity, "ghost")
    assert result.kind is ErrorKind.NOT_FOUND
    assert result.message == "User not found"


def test_concurrent_creation_converges(
    mocker,
    chat_registry,
    store,
    db_session,
    user_identity,
    other_identity,
) -> None:
    """A lost insert race returns the chat created by the winner."""
    winner = chat_registry.start_chat(other_identity, user_identity.id).value.chat_id

    real_lookup = store.find_chat_between
    calls = []

    def miss_first(first, second):
        calls.append((first, second))
        return None if len(calls) == 1 else real_lookup(first, second)

    mocker.patch.object(store, "find_chat_between", side_effect=miss_first)

    result = chat_registry.start_chat(user_identity, other_identity.id)
    assert result.ok
    assert result.value.chat_id == winner
    assert len(calls) == 2
    assert db_session.query(Chat).count() == 1


def test_send_message_notifies_other_participant(
    chat_registry,
    db_session,
    user_identity,
    other_identity,
) -> None:
    chat_id = chat_registry.start_chat(user_identity, other_identity.id).value.chat_id

    sent = chat_registry.send_message(user_identity, chat_id, "  Is the textbook still available?  ")
    assert sent.ok
    assert sent.value.text == "Is the textbook still available?"
    assert sent.value.sender_id == user_identity.id

    notifications = db_session.query(Notification).filter_by(target_id=other_identity.id).all()
    assert len(notifications) == 1
    assert notifications[0].kind == NotificationKind.NEW_MESSAGE.value
    assert notifications[0].actor_id == user_identity.id
    assert "Alice Student" in notifications[0].message


def test_send_message_validation(chat_registry, user_identity, other_identity) -> None:
    chat_id = chat_registry.start_chat(user_identity, other_identity.id).value.chat_id

    empty = chat_registry.send_message(user_identity, chat_id, "   ")
    assert empty.kind is ErrorKind.VALIDATION_FAILED

    too_long = chat_registry.send_message(
        user_identity, chat_id, "x" * (chat_registry.max_message_length + 1)
    )
    assert too_long.kind is ErrorKind.VALIDATION_FAILED


def test_non_participant_cannot_read_or_write(
    chat_registry,
    user_identity,
    other_identity,
    admin_identity,
) -> None:
    chat_id = chat_registry.start_chat(user_identity, other_identity.id).value.chat_id

    read = chat_registry.get_chat(admin_identity, chat_id)
    assert read.kind is ErrorKind.UNAUTHORIZED
    assert read.message == "You are not a participant of this chat"

    write = chat_registry.send_message(admin_identity, chat_id, "hello")
    assert write.kind is ErrorKind.UNAUTHORIZED


def test_messages_are_in_conversation_order(chat_registry, user_identity, other_identity) -> None:
    chat_id = chat_registry.start_chat(user_identity, other_identity.id).value.chat_id
    for index, sender in enumerate([user_identity, other_identity, user_identity]):
        chat_registry.send_message(sender, chat_id, f"message {index}")

    detail = chat_registry.get_chat(other_identity, chat_id).value
    assert [m.text for m in detail.messages] == ["message 0", "message 1", "message 2"]
    assert {p.id for p in detail.participants} == {user_identity.id, other_identity.id}


def test_inbox_orders_by_latest_activity(
    chat_registry,
    user_identity,
    other_identity,
    admin_identity,
) -> None:
    with_bob = chat_registry.start_chat(user_identity, other_identity.id).value.chat_id
    with_carol = chat_registry.start_chat(user_identity, admin_identity.id).value.chat_id

    chat_registry.send_message(user_identity, with_carol, "first")
    chat_registry.send_message(other_identity, with_bob, "second")

    inbox = chat_registry.get_all_chats(user_identity).value
    assert [entry.id for entry in inbox] == [with_bob, with_carol]
    assert inbox[0].last_message.text == "second"

    assert [entry.id for entry in chat_registry.get_all_chats(other_identity).value] == [with_bob]


def test_delete_message_recomputes_activity(
    chat_registry,
    db_session,
    user_identity,
    other_identity,
) -> None:
    chat_id = chat_registry.start_chat(user_identity, other_identity.id).value.chat_id
    kept = chat_registry.send_message(user_identity, chat_id, "kept").value
    dropped = chat_registry.send_message(user_identity, chat_id, "dropped").value

    result = chat_registry.delete_message(user_identity, chat_id, dropped.id)
    assert result.ok

    db_session.expire_all()
    detail = chat_registry.get_chat(user_identity, chat_id).value
    assert [m.id for m in detail.messages] == [kept.id]
    assert detail.updated_at == detail.messages[0].created_at

    chat_registry.delete_message(user_identity, chat_id, kept.id)
    db_session.expire_all()
    detail = chat_registry.get_chat(user_identity, chat_id).value
    assert detail.messages == []
    assert detail.updated_at == detail.created_at


def test_only_sender_can_delete_message(chat_registry, user_identity, other_identity) -> None:
    chat_id = chat_registry.start_chat(user_identity, other_identity.id).value.chat_id
    message = chat_registry.send_message(user_identity, chat_id, "mine").value

    result = chat_registry.delete_message(other_identity, chat_id, message.id)
    assert result.kind is ErrorKind.UNAUTHORIZED

    missing = chat_registry.delete_message(user_identity, chat_id, 9999)
    assert missing.kind is ErrorKind.NOT_FOUND


def test_send_never_rewinds_activity(
    chat_registry,
    db_session,
    user_identity,
    other_identity,
) -> None:
    chat_id = chat_registry.start_chat(user_identity, other_identity.id).value.chat_id
    later = datetime(2100, 1, 1)
    db_session.execute(update(Chat).where(Chat.id == chat_id).values(updated_at=later))
    db_session.commit()

    assert chat_registry.send_message(user_identity, chat_id, "late arrival").ok

    db_session.expire_all()
    assert db_session.get(Chat, chat_id).updated_at == later
