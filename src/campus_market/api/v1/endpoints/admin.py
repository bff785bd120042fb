# src/campus_market/api/v1/endpoints/admin.py
"""Admin moderation endpoints for posts and requests."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from campus_market.api.v1.dependencies import ModerationDep, StoreDep, TokenDep
from campus_market.api.v1.responses import run_action
from campus_market.models import ModeratedKind
from campus_market.schemas import RejectAction

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/queue")
def review_queue(moderation: ModerationDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    """Posts and requests waiting for a decision."""
    return run_action(store, token, moderation.review_queue)


@router.post("/posts/{post_id}/approve")
def approve_post(post_id: int, moderation: ModerationDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    return run_action(
        store, token, lambda caller: moderation.approve(caller, ModeratedKind.POST, post_id)
    )


@router.post("/posts/{post_id}/reject")
def reject_post(
    post_id: int,
    payload: RejectAction,
    moderation: ModerationDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    return run_action(
        store,
        token,
        lambda caller: moderation.reject(caller, ModeratedKind.POST, post_id, payload.reason),
    )


@router.post("/requests/{request_id}/approve")
def approve_request(
    request_id: int,
    moderation: ModerationDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    return run_action(
        store, token, lambda caller: moderation.approve(caller, ModeratedKind.REQUEST, request_id)
    )


@router.post("/requests/{request_id}/reject")
def reject_request(
    request_id: int,
    payload: RejectAction,
    moderation: ModerationDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    return run_action(
        store,
        token,
        lambda caller: moderation.reject(caller, ModeratedKind.REQUEST, request_id, payload.reason),
    )
