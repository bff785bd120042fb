# src/campus_market/api/v1/endpoints/posts.py
"""Marketplace post endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from campus_market.api.v1.dependencies import ListingsDep, StoreDep, TokenDep
from campus_market.api.v1.responses import run_action, run_public
from campus_market.schemas import FeedbackCreate, PostCreate, PostSold, PostUpdate

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/")
def list_posts(
    listings: ListingsDep,
    category: str | None = None,
    q: str | None = None,
) -> JSONResponse:
    """List approved, available posts, optionally filtered by category or title."""
    return run_public(lambda: listings.list_posts(category=category, query=q))


@router.get("/{post_id}")
def get_post(post_id: int, listings: ListingsDep) -> JSONResponse:
    return run_public(lambda: listings.get_post(post_id))


@router.post("/")
def create_post(
    post_data: PostCreate,
    listings: ListingsDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    """Submit a new post for admin review."""
    return run_action(
        store,
        token,
        lambda caller: listings.create_post(caller, post_data),
        status.HTTP_201_CREATED,
    )


@router.patch("/{post_id}")
def update_post(
    post_id: int,
    post_data: PostUpdate,
    listings: ListingsDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    return run_action(store, token, lambda caller: listings.update_post(caller, post_id, post_data))


@router.delete("/{post_id}")
def delete_post(post_id: int, listings: ListingsDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    return run_action(store, token, lambda caller: listings.delete_post(caller, post_id))


@router.post("/{post_id}/sold")
def mark_sold(
    post_id: int,
    sale: PostSold,
    listings: ListingsDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    """Mark a post as sold to another user."""
    return run_action(
        store, token, lambda caller: listings.mark_sold(caller, post_id, sale.customer_id)
    )


@router.post("/{post_id}/feedback")
def send_feedback(
    post_id: int,
    feedback: FeedbackCreate,
    listings: ListingsDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    """Leave feedback as the buyer of a sold post."""
    return run_action(
        store,
        token,
        lambda caller: listings.send_feedback(caller, post_id, feedback),
        status.HTTP_201_CREATED,
    )
