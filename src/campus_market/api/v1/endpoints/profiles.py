# src/campus_market/api/v1/endpoints/profiles.py
"""Endpoints for the caller's own profile."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from campus_market.api.v1.dependencies import ProfilesDep, StoreDep, TokenDep
from campus_market.api.v1.responses import run_action
from campus_market.schemas import ProfileUpdate

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me")
def get_me(profiles: ProfilesDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    return run_action(store, token, profiles.get_me)


@router.patch("/me")
def update_me(
    payload: ProfileUpdate,
    profiles: ProfilesDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    """Update the caller's profile. The role is not editable."""
    return run_action(store, token, lambda caller: profiles.update_me(caller, payload))
