"""Self-service profile reads and edits."""
from __future__ import annotations

from campus_market.schemas.profile import ProfileResponse, ProfileUpdate
from campus_market.services.identity import Identity
from campus_market.services.results import Result, Success, not_found
from campus_market.services.store import EntityStore


class ProfileService:
    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def get_me(self, caller: Identity) -> Result[ProfileResponse]:
        profile = self.store.get_profile(caller.id)
        if profile is None:
            return not_found("User")
        return Success(ProfileResponse.model_validate(profile))

    def update_me(self, caller: Identity, data: ProfileUpdate) -> Result[ProfileResponse]:
        """Update the caller's own profile fields. The role cannot be changed here."""
        profile = self.store.get_profile(caller.id)
        if profile is None:
            return not_found("User")
        with self.store.transaction():
            for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(profile, field, value)
            self.store.flush()
            response = ProfileResponse.model_validate(profile)
        return Success(response)
