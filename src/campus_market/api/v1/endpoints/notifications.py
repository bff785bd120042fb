# src/campus_market/api/v1/endpoints/notifications.py
"""Notification inbox endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from campus_market.api.v1.dependencies import NotifierDep, StoreDep, TokenDep
from campus_market.api.v1.responses import run_action

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/")
def list_notifications(notifier: NotifierDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    return run_action(store, token, notifier.list_notifications)


@router.get("/unread-count")
def unread_count(notifier: NotifierDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    return run_action(store, token, notifier.unread_count)


@router.post("/{notification_id}/read")
def mark_as_read(
    notification_id: int,
    notifier: NotifierDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    """Mark a notification as read. Calling it again is harmless."""
    return run_action(store, token, lambda caller: notifier.mark_as_read(caller, notification_id))
