# mypy: ignore-errors
# tests/services/test_policy.py
"""Tests for the authorization policy."""

import pytest

from campus_market.models import Role
from campus_market.services import Action, AuthorizationPolicy, ErrorKind, Identity

policy = AuthorizationPolicy()
owner = Identity(id="owner", role=Role.USER)
stranger = Identity(id="stranger", role=Role.USER)
admin = Identity(id="admin", role=Role.ADMIN)


@pytest.mark.parametrize("action", [Action.EDIT_LISTING, Action.DELETE_LISTING, Action.MARK_SOLD])
def test_owner_or_admin_actions(action) -> None:
    assert policy.allows(owner, action, owner_id="owner")
    assert policy.allows(admin, action, owner_id="owner")
    assert not policy.allows(stranger, action, owner_id="owner")


def test_moderation_is_admin_only() -> None:
    assert policy.allows(admin, Action.MODERATE)
    denied = policy.check(owner, Action.MODERATE)
    assert denied.kind is ErrorKind.UNAUTHORIZED
    assert denied.message == "Unauthorized"


@pytest.mark.parametrize("action", [Action.VIEW_CHAT, Action.SEND_MESSAGE])
def test_chat_access_requires_membership(action) -> None:
    participants = ("owner", "stranger")
    assert policy.allows(owner, action, participants=participants)
    assert not policy.allows(admin, action, participants=participants)


@pytest.mark.parametrize(
    "action",
    [Action.DELETE_MESSAGE, Action.READ_NOTIFICATION, Action.LEAVE_FEEDBACK],
)
def test_owner_only_actions_exclude_admins(action) -> None:
    assert policy.allows(owner, action, owner_id="owner")
    assert not policy.allows(admin, action, owner_id="owner")
    assert not policy.allows(owner, action, owner_id=None)


def test_check_returns_none_when_allowed() -> None:
    assert policy.check(owner, Action.EDIT_LISTING, owner_id="owner") is None
