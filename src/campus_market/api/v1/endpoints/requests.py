# src/campus_market/api/v1/endpoints/requests.py
"""Resource request and upvote endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from campus_market.api.v1.dependencies import ListingsDep, StoreDep, TokenDep, UpvotesDep
from campus_market.api.v1.responses import run_action, run_public
from campus_market.schemas import RequestCreate, RequestUpdate

router = APIRouter(prefix="/requests", tags=["requests"])


@router.get("/")
def list_requests(listings: ListingsDep, q: str | None = None) -> JSONResponse:
    """List requests that were not rejected, newest first."""
    return run_public(lambda: listings.list_requests(query=q))


@router.get("/{request_id}")
def get_request(request_id: int, listings: ListingsDep) -> JSONResponse:
    return run_public(lambda: listings.get_request(request_id))


@router.post("/")
def create_request(
    request_data: RequestCreate,
    listings: ListingsDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    return run_action(
        store,
        token,
        lambda caller: listings.create_request(caller, request_data),
        status.HTTP_201_CREATED,
    )


@router.patch("/{request_id}")
def update_request(
    request_id: int,
    request_data: RequestUpdate,
    listings: ListingsDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    return run_action(
        store, token, lambda caller: listings.update_request(caller, request_id, request_data)
    )


@router.delete("/{request_id}")
def delete_request(
    request_id: int,
    listings: ListingsDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    return run_action(store, token, lambda caller: listings.delete_request(caller, request_id))


@router.post("/{request_id}/upvote")
def toggle_upvote(request_id: int, upvotes: UpvotesDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    """Add the caller's upvote, or remove it if already present."""
    return run_action(store, token, lambda caller: upvotes.toggle_upvote(caller, request_id))


@router.get("/{request_id}/my-upvote")
def my_upvote(request_id: int, upvotes: UpvotesDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    return run_action(store, token, lambda caller: upvotes.has_upvoted(caller, request_id))
