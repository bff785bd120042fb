# mypy: ignore-errors
# tests/v1/test_admin.py
"""Tests for admin moderation endpoints."""

from fastapi import status


def test_queue_requires_admin(client, auth_token) -> None:
    response = client.get("/api/v1/admin/queue", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"error": "Unauthorized"}


def test_reject_post_scenario(client, admin_auth_token, auth_token, pending_post) -> None:
    queue = client.get("/api/v1/admin/queue", headers=admin_auth_token).json()["success"]
    assert [p["id"] for p in queue["posts"]] == [pending_post.id]

    rejected = client.post(
        f"/api/v1/admin/posts/{pending_post.id}/reject",
        json={"reason": "low quality photos"},
        headers=admin_auth_token,
    )
    assert rejected.status_code == status.HTTP_200_OK
    assert rejected.json()["success"]["status"] == "REJECTED"

    post = client.get(f"/api/v1/posts/{pending_post.id}").json()["success"]
    assert post["is_available"] is False

    inbox = client.get("/api/v1/notifications/", headers=auth_token).json()["success"]
    assert inbox[0]["kind"] == "ADMIN_REJECT"
    assert "low quality photos" in inbox[0]["message"]

    again = client.post(
        f"/api/v1/admin/posts/{pending_post.id}/approve", headers=admin_auth_token
    )
    assert again.status_code == status.HTTP_409_CONFLICT
    assert again.json() == {"error": "Post has already been rejected"}


def test_approve_request(client, admin_auth_token, resource_request) -> None:
    response = client.post(
        f"/api/v1/admin/requests/{resource_request.id}/approve", headers=admin_auth_token
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["success"] == {
        "entity_kind": "REQUEST",
        "entity_id": resource_request.id,
        "status": "APPROVED",
        "notified_user_id": resource_request.user_id,
    }


def test_reject_requires_reason_field(client, admin_auth_token, pending_post) -> None:
    response = client.post(
        f"/api/v1/admin/posts/{pending_post.id}/reject", json={}, headers=admin_auth_token
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_reject_requires_admin(client, auth_token, pending_post) -> None:
    response = client.post(
        f"/api/v1/admin/posts/{pending_post.id}/reject",
        json={"reason": "spam"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"error": "Unauthorized"}

    queue = client.get("/api/v1/admin/queue", headers=auth_token)
    assert queue.status_code == status.HTTP_403_FORBIDDEN
    public = client.get("/api/v1/posts/").json()["success"]
    assert public == []
