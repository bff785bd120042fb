# mypy: ignore-errors
# tests/v1/test_chats.py
"""Tests for chat endpoints."""

from fastapi import status


def test_start_chat_returns_same_id(client, auth_token, other_auth_token, test_user, other_user) -> None:
    first = client.post("/api/v1/chats/", json={"other_user_id": other_user.id}, headers=auth_token)
    reverse = client.post(
        "/api/v1/chats/", json={"other_user_id": test_user.id}, headers=other_auth_token
    )

    assert first.status_code == status.HTTP_200_OK
    assert first.json()["success"]["chat_id"] == reverse.json()["success"]["chat_id"]


def test_message_flow(client, auth_token, other_auth_token, other_user) -> None:
    chat_id = client.post(
        "/api/v1/chats/", json={"other_user_id": other_user.id}, headers=auth_token
    ).json()["success"]["chat_id"]

    sent = client.post(
        f"/api/v1/chats/{chat_id}/messages", json={"text": "Hi Bob"}, headers=auth_token
    )
    assert sent.status_code == status.HTTP_200_OK
    message_id = sent.json()["success"]["id"]

    detail = client.get(f"/api/v1/chats/{chat_id}", headers=other_auth_token).json()["success"]
    assert [m["text"] for m in detail["messages"]] == ["Hi Bob"]

    inbox = client.get("/api/v1/chats/", headers=other_auth_token).json()["success"]
    assert inbox[0]["id"] == chat_id
    assert inbox[0]["last_message"]["text"] == "Hi Bob"

    unread = client.get("/api/v1/notifications/unread-count", headers=other_auth_token)
    assert unread.json() == {"success": {"unread": 1}}

    not_mine = client.delete(
        f"/api/v1/chats/{chat_id}/messages/{message_id}", headers=other_auth_token
    )
    assert not_mine.status_code == status.HTTP_403_FORBIDDEN

    deleted = client.delete(f"/api/v1/chats/{chat_id}/messages/{message_id}", headers=auth_token)
    assert deleted.json() == {"success": {"message": "Message deleted"}}


def test_outsider_cannot_view_chat(client, auth_token, admin_auth_token, other_user) -> None:
    chat_id = client.post(
        "/api/v1/chats/", json={"other_user_id": other_user.id}, headers=auth_token
    ).json()["success"]["chat_id"]

    response = client.get(f"/api/v1/chats/{chat_id}", headers=admin_auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"error": "You are not a participant of this chat"}


def test_chat_with_self(client, auth_token, test_user) -> None:
    response = client.post("/api/v1/chats/", json={"other_user_id": test_user.id}, headers=auth_token)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json() == {"error": "You cannot start a chat with yourself"}
