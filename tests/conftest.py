# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from campus_market.core.security import create_access_token
from campus_market.db.session import Base
from campus_market.db.session import get_db as app_get_session
from campus_market.main import app as fastapi_app
from campus_market.models import Post, Profile, ResourceRequest, Role
from campus_market.services import (
    AuthorizationPolicy,
    ChatRegistry,
    EntityStore,
    Identity,
    ListingService,
    ModerationWorkflow,
    NotificationFanout,
    UpvoteLedger,
)

TEST_DB_URL = "sqlite://"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_profile(db_session: Session, profile_id: str, name: str, role: Role = Role.USER) -> Profile:
    profile = Profile(
        id=profile_id,
        role=role.value,
        full_name=name,
        email=f"{profile_id}@campus.test",
        college="Test University",
    )
    db_session.add(profile)
    db_session.commit()
    return profile


@pytest.fixture()
def test_user(db_session: Session) -> Profile:
    """Primary regular user."""
    return _make_profile(db_session, "user-alice", "Alice Student")


@pytest.fixture()
def other_user(db_session: Session) -> Profile:
    """Secondary regular user."""
    return _make_profile(db_session, "user-bob", "Bob Student")


@pytest.fixture()
def admin_user(db_session: Session) -> Profile:
    return _make_profile(db_session, "admin-carol", "Carol Admin", Role.ADMIN)


def _headers(profile_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(profile_id)}"}


@pytest.fixture()
def auth_token(test_user: Profile) -> dict[str, str]:
    """Authorization headers for the primary test user."""
    return _headers(test_user.id)


@pytest.fixture()
def other_auth_token(other_user: Profile) -> dict[str, str]:
    return _headers(other_user.id)


@pytest.fixture()
def admin_auth_token(admin_user: Profile) -> dict[str, str]:
    return _headers(admin_user.id)


@pytest.fixture()
def user_identity(test_user: Profile) -> Identity:
    return Identity(id=test_user.id, role=Role.USER)


@pytest.fixture()
def other_identity(other_user: Profile) -> Identity:
    return Identity(id=other_user.id, role=Role.USER)


@pytest.fixture()
def admin_identity(admin_user: Profile) -> Identity:
    return Identity(id=admin_user.id, role=Role.ADMIN)


@pytest.fixture()
def pending_post(db_session: Session, test_user: Profile) -> Post:
    """A listing by the primary user that has not been moderated yet."""
    post = Post(
        seller_id=test_user.id,
        title="Calculus textbook",
        description="Barely used, some highlighting",
        category="BOOKS",
        price="25",
        images=["https://img.test/calc.jpg"],
        is_available=False,
        is_approved=False,
    )
    db_session.add(post)
    db_session.commit()
    return post


@pytest.fixture()
def resource_request(db_session: Session, other_user: Profile) -> ResourceRequest:
    """A request by the secondary user with no upvotes."""
    request = ResourceRequest(
        user_id=other_user.id,
        title="Need a lab coat",
        description="Size M for chemistry lab",
        upvotes=0,
    )
    db_session.add(request)
    db_session.commit()
    return request


@pytest.fixture()
def store(db_session: Session) -> EntityStore:
    return EntityStore(db_session)


@pytest.fixture()
def notifier(store: EntityStore) -> NotificationFanout:
    return NotificationFanout(store, AuthorizationPolicy())


@pytest.fixture()
def listings(store: EntityStore, notifier: NotificationFanout) -> ListingService:
    return ListingService(store, notifier)


@pytest.fixture()
def upvote_ledger(store: EntityStore) -> UpvoteLedger:
    return UpvoteLedger(store)


@pytest.fixture()
def chat_registry(store: EntityStore, notifier: NotificationFanout) -> ChatRegistry:
    return ChatRegistry(store, notifier)


@pytest.fixture()
def moderation(store: EntityStore, notifier: NotificationFanout) -> ModerationWorkflow:
    return ModerationWorkflow(store, notifier)
