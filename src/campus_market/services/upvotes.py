"""Upvote toggling for resource requests."""
from __future__ import annotations

import logging
from typing import Literal

from sqlalchemy.exc import IntegrityError

from campus_market.schemas.request import MyUpvote, UpvoteOutcome
from campus_market.services.identity import Identity
from campus_market.services.results import Result, Success, not_found
from campus_market.services.store import EntityStore

logger = logging.getLogger(__name__)


class UpvoteLedger:
    """Maintain upvote rows and the denormalized counter on each request.

    The row change and the counter change commit in the same transaction, and
    the counter is adjusted with ``SET upvotes = upvotes +/- 1`` so concurrent
    toggles cannot lose updates.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def toggle_upvote(self, caller: Identity, request_id: int) -> Result[UpvoteOutcome]:
        """Add the caller's upvote if absent, remove it if present.

        Applying the toggle twice restores both the row and the counter.
        """
        if self.store.get_request(request_id) is None:
            return not_found("Request")

        state: Literal["added", "removed"]
        try:
            with self.store.transaction():
                if self.store.remove_upvote(request_id, caller.id):
                    self.store.adjust_upvote_count(request_id, -1)
                    state = "removed"
                else:
                    self.store.insert_upvote(request_id, caller.id)
                    self.store.adjust_upvote_count(request_id, 1)
                    state = "added"
        except IntegrityError:
            # Another toggle for the same pair inserted first; its row stands.
            if self.store.has_upvote(request_id, caller.id):
                logger.warning(
                    "Concurrent upvote on request %s by %s resolved to existing row",
                    request_id,
                    caller.id,
                )
                state = "added"
            elif self.store.get_request(request_id) is None:
                return not_found("Request")
            else:
                raise

        return Success(
            UpvoteOutcome(
                request_id=request_id,
                state=state,
                upvotes=self.store.upvote_count(request_id),
            )
        )

    def has_upvoted(self, caller: Identity, request_id: int) -> Result[MyUpvote]:
        """Report whether the caller currently upvotes the request."""
        if self.store.get_request(request_id) is None:
            return not_found("Request")
        return Success(
            MyUpvote(request_id=request_id, upvoted=self.store.has_upvote(request_id, caller.id))
        )
