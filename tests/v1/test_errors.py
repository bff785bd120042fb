# mypy: ignore-errors
# tests/v1/test_errors.py
"""Tests for fault handling at the action boundary."""

from fastapi import status

from campus_market.services import EntityStore, StoreFailure


def test_store_failure_maps_to_503(client, mocker) -> None:
    mocker.patch.object(EntityStore, "list_posts", side_effect=StoreFailure("database is locked"))

    response = client.get("/api/v1/posts/")
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json() == {"error": "The data store is unavailable, please retry."}


def test_unexpected_error_maps_to_500(client, mocker, auth_token) -> None:
    mocker.patch.object(EntityStore, "chats_for", side_effect=RuntimeError("boom"))

    response = client.get("/api/v1/chats/", headers=auth_token)
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "An unexpected error occurred."}
