# mypy: ignore-errors
# tests/v1/test_requests.py
"""Tests for request and upvote endpoints."""

from fastapi import status


def test_create_and_fetch_request(client, auth_token, test_user) -> None:
    created = client.post(
        "/api/v1/requests/",
        json={"title": "Soldering iron", "description": "For a weekend project"},
        headers=auth_token,
    )
    assert created.status_code == status.HTTP_201_CREATED
    request_id = created.json()["success"]["id"]

    detail = client.get(f"/api/v1/requests/{request_id}").json()["success"]
    assert detail["upvotes"] == 0
    assert detail["user"] == {"id": test_user.id, "name": "Alice Student", "image": None}


def test_create_request_rejects_upvote_field(client, auth_token) -> None:
    response = client.post(
        "/api/v1/requests/",
        json={"title": "Soldering iron", "description": "For a project", "upvotes": 50},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_upvote_toggle(client, auth_token, resource_request) -> None:
    url = f"/api/v1/requests/{resource_request.id}/upvote"

    first = client.post(url, headers=auth_token).json()["success"]
    assert first == {"request_id": resource_request.id, "state": "added", "upvotes": 1}

    mine = client.get(f"/api/v1/requests/{resource_request.id}/my-upvote", headers=auth_token)
    assert mine.json()["success"]["upvoted"] is True

    second = client.post(url, headers=auth_token).json()["success"]
    assert second["state"] == "removed"
    assert second["upvotes"] == 0


def test_upvote_missing_request(client, auth_token) -> None:
    response = client.post("/api/v1/requests/777/upvote", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Request not found"}


def test_list_requests(client, resource_request) -> None:
    response = client.get("/api/v1/requests/?q=lab")
    assert response.status_code == status.HTTP_200_OK
    assert [r["id"] for r in response.json()["success"]] == [resource_request.id]


def test_update_and_delete_request(client, auth_token, other_auth_token, resource_request) -> None:
    forbidden = client.patch(
        f"/api/v1/requests/{resource_request.id}",
        json={"title": "Need two lab coats"},
        headers=auth_token,
    )
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    updated = client.patch(
        f"/api/v1/requests/{resource_request.id}",
        json={"image": "https://img.test/coat.jpg"},
        headers=other_auth_token,
    )
    assert updated.json()["success"]["image_url"] == "https://img.test/coat.jpg"

    deleted = client.delete(f"/api/v1/requests/{resource_request.id}", headers=other_auth_token)
    assert deleted.status_code == status.HTTP_200_OK
