"""Resolution of the calling identity from a bearer token."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from campus_market.core.security import JWTError, decode_subject
from campus_market.models import Role
from campus_market.services.results import Result, Success, not_authenticated
from campus_market.services.store import EntityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller of an action."""

    id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class IdentityResolver:
    """Turn a bearer token into an :class:`Identity`.

    The role always comes from the stored profile, never from token claims.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def resolve(self, token: str | None) -> Result[Identity]:
        """Return the caller's identity or a ``NotAuthenticated`` failure."""
        if not token:
            return not_authenticated()
        try:
            subject = decode_subject(token)
        except JWTError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            return not_authenticated("Could not validate credentials")
        if subject is None:
            return not_authenticated("Could not validate credentials")

        profile = self.store.get_profile(subject)
        if profile is None:
            return not_authenticated("User not found")
        return Success(Identity(id=profile.id, role=Role(profile.role)))
