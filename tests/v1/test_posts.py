# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for post endpoints."""

from fastapi import status


def _payload(**overrides):
    data = {
        "title": "Desk chair",
        "description": "Ergonomic, adjustable height",
        "price": "40",
        "images": ["https://img.test/chair.jpg"],
        "category": "FURNITURE",
    }
    data.update(overrides)
    return data


def test_create_post(client, auth_token, test_user) -> None:
    response = client.post("/api/v1/posts/", json=_payload(), headers=auth_token)

    assert response.status_code == status.HTTP_201_CREATED
    post = response.json()["success"]
    assert post["seller_id"] == test_user.id
    assert post["is_approved"] is False
    assert post["is_available"] is False


def test_create_post_requires_images(client, auth_token) -> None:
    response = client.post("/api/v1/posts/", json=_payload(images=[]), headers=auth_token)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert "error" in response.json()


def test_create_post_requires_auth(client) -> None:
    response = client.post("/api/v1/posts/", json=_payload())
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_public_list_hides_pending(client, pending_post) -> None:
    response = client.get("/api/v1/posts/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": []}


def test_list_filters_by_category_and_query(client, db_session, pending_post) -> None:
    pending_post.is_approved = True
    pending_post.is_available = True
    db_session.commit()

    assert len(client.get("/api/v1/posts/?category=BOOKS").json()["success"]) == 1
    assert len(client.get("/api/v1/posts/?category=ALL&q=calculus").json()["success"]) == 1
    assert client.get("/api/v1/posts/?category=FURNITURE").json()["success"] == []


def test_get_post_not_found(client) -> None:
    response = client.get("/api/v1/posts/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Post not found"}


def test_update_cannot_set_moderation_fields(client, auth_token, pending_post) -> None:
    response = client.patch(
        f"/api/v1/posts/{pending_post.id}",
        json={"is_approved": True},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert set(response.json()) == {"error"}


def test_update_by_other_user_is_forbidden(client, other_auth_token, pending_post) -> None:
    response = client.patch(
        f"/api/v1/posts/{pending_post.id}",
        json={"price": "1"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_update_by_owner(client, auth_token, pending_post) -> None:
    response = client.patch(
        f"/api/v1/posts/{pending_post.id}",
        json={"price": "30"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["success"]["price"] == "30"


def test_sell_and_leave_feedback(
    client,
    auth_token,
    other_auth_token,
    other_user,
    pending_post,
) -> None:
    sold = client.post(
        f"/api/v1/posts/{pending_post.id}/sold",
        json={"customer_id": other_user.id},
        headers=auth_token,
    )
    assert sold.status_code == status.HTTP_200_OK
    assert sold.json()["success"]["sold_to_user_id"] == other_user.id

    feedback = client.post(
        f"/api/v1/posts/{pending_post.id}/feedback",
        json={"rating": 5, "remark": "Smooth pickup"},
        headers=other_auth_token,
    )
    assert feedback.status_code == status.HTTP_201_CREATED

    duplicate = client.post(
        f"/api/v1/posts/{pending_post.id}/feedback",
        json={"rating": 3},
        headers=other_auth_token,
    )
    assert duplicate.status_code == status.HTTP_409_CONFLICT


def test_feedback_rating_range(client, other_auth_token, pending_post) -> None:
    response = client.post(
        f"/api/v1/posts/{pending_post.id}/feedback",
        json={"rating": 6},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_delete_post(client, auth_token, pending_post) -> None:
    response = client.delete(f"/api/v1/posts/{pending_post.id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": {"message": "Post deleted"}}
    assert client.get(f"/api/v1/posts/{pending_post.id}").status_code == status.HTTP_404_NOT_FOUND
