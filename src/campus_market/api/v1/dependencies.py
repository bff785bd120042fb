# src/campus_market/api/v1/dependencies.py
"""Shared API dependencies: the database session, bearer token and components."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from campus_market.db.session import get_db
from campus_market.services import (
    AuthorizationPolicy,
    ChatRegistry,
    EntityStore,
    ListingService,
    ModerationWorkflow,
    NotificationFanout,
    ProfileService,
    UpvoteLedger,
)

# Missing credentials are reported by the action boundary, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]

policy = AuthorizationPolicy()


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Return the raw bearer token, or None when the header is absent."""
    if credentials is None:
        return None
    return credentials.credentials


def get_store(db: SessionDep) -> EntityStore:
    return EntityStore(db)


TokenDep = Annotated[str | None, Depends(get_bearer_token)]
StoreDep = Annotated[EntityStore, Depends(get_store)]


def get_notifier(store: StoreDep) -> NotificationFanout:
    return NotificationFanout(store, policy)


NotifierDep = Annotated[NotificationFanout, Depends(get_notifier)]


def get_listing_service(store: StoreDep, notifier: NotifierDep) -> ListingService:
    return ListingService(store, notifier, policy)


def get_upvote_ledger(store: StoreDep) -> UpvoteLedger:
    return UpvoteLedger(store)


def get_chat_registry(store: StoreDep, notifier: NotifierDep) -> ChatRegistry:
    return ChatRegistry(store, notifier, policy)


def get_moderation_workflow(store: StoreDep, notifier: NotifierDep) -> ModerationWorkflow:
    return ModerationWorkflow(store, notifier, policy)


def get_profile_service(store: StoreDep) -> ProfileService:
    return ProfileService(store)


ListingsDep = Annotated[ListingService, Depends(get_listing_service)]
UpvotesDep = Annotated[UpvoteLedger, Depends(get_upvote_ledger)]
ChatsDep = Annotated[ChatRegistry, Depends(get_chat_registry)]
ModerationDep = Annotated[ModerationWorkflow, Depends(get_moderation_workflow)]
ProfilesDep = Annotated[ProfileService, Depends(get_profile_service)]
