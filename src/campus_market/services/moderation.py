# src/campus_market/services/moderation.py
"""Admin moderation of posts and requests.

Each submission moves ``PENDING -> APPROVED`` or ``PENDING -> REJECTED`` exactly
once. The decision row, the entity flags and the owner's notification commit
together.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from campus_market.core.settings import settings
from campus_market.models import ModeratedKind, ModerationStatus, Post, ResourceRequest
from campus_market.schemas.moderation import ModerationOutcome, ReviewQueue
from campus_market.schemas.post import PostResponse
from campus_market.schemas.request import RequestResponse
from campus_market.services.identity import Identity
from campus_market.services.notifications import NotificationFanout
from campus_market.services.policy import Action, AuthorizationPolicy
from campus_market.services.results import (
    Result,
    Success,
    conflict,
    not_found,
    validation_failed,
)
from campus_market.services.store import EntityStore

logger = logging.getLogger(__name__)

_LABELS = {
    ModeratedKind.POST: "Post",
    ModeratedKind.REQUEST: "Request",
}


class ModerationWorkflow:
    """Service handling admin approval and rejection of submissions."""

    def __init__(
        self,
        store: EntityStore,
        notifier: NotificationFanout,
        policy: AuthorizationPolicy | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.policy = policy or AuthorizationPolicy()

    def approve(self, caller: Identity, kind: ModeratedKind, entity_id: int) -> Result[ModerationOutcome]:
        """Approve a pending submission.

        Approving a post makes it visible in the public listing.
        """
        denied = self.policy.check(caller, Action.MODERATE)
        if denied:
            return denied
        return self._decide(caller, kind, entity_id, ModerationStatus.APPROVED, reason=None)

    def reject(
        self,
        caller: Identity,
        kind: ModeratedKind,
        entity_id: int,
        reason: str,
    ) -> Result[ModerationOutcome]:
        """Reject a pending submission without deleting it.

        The reason is delivered to the owner inside the rejection
        notification and is not stored anywhere else.
        """
        denied = self.policy.check(caller, Action.MODERATE)
        if denied:
            return denied

        reason = (reason or "").strip()
        if not reason:
            return validation_failed("A rejection reason is required")
        if len(reason) > settings.rejection_reason_max_length:
            return validation_failed(
                f"Reason must be at most {settings.rejection_reason_max_length} characters long"
            )
        return self._decide(caller, kind, entity_id, ModerationStatus.REJECTED, reason=reason)

    def review_queue(self, caller: Identity) -> Result[ReviewQueue]:
        """Return posts and requests still waiting for a decision."""
        denied = self.policy.check(caller, Action.MODERATE)
        if denied:
            return denied
        return Success(
            ReviewQueue(
                posts=[PostResponse.model_validate(p) for p in self.store.pending_posts()],
                requests=[RequestResponse.model_validate(r) for r in self.store.pending_requests()],
            )
        )

    def _load(self, kind: ModeratedKind, entity_id: int) -> Post | ResourceRequest | None:
        if kind is ModeratedKind.POST:
            return self.store.get_post(entity_id)
        return self.store.get_request(entity_id)

    def _decide(
        self,
        caller: Identity,
        kind: ModeratedKind,
        entity_id: int,
        status: ModerationStatus,
        *,
        reason: str | None,
    ) -> Result[ModerationOutcome]:
        label = _LABELS[kind]
        entity = self._load(kind, entity_id)
        if entity is None:
            return not_found(label)

        existing = self.store.get_decision(kind, entity_id)
        if existing is not None:
            return conflict(f"{label} has already been {existing.status.lower()}")

        owner_id = entity.seller_id if isinstance(entity, Post) else entity.user_id
        approved = status is ModerationStatus.APPROVED
        try:
            with self.store.transaction():
                self.store.record_decision(kind, entity_id, status, caller.id)
                if isinstance(entity, Post):
                    if approved:
                        entity.is_approved = True
                        # A post sold while pending stays off the market.
                        entity.is_available = entity.sold_to_user_id is None
                    else:
                        entity.is_available = False
                self.notifier.moderation_decided(
                    owner_id=owner_id,
                    admin_id=caller.id,
                    kind=kind,
                    title=entity.title,
                    approved=approved,
                    reason=reason,
                )
        except IntegrityError:
            logger.warning("Concurrent moderation of %s %s; keeping first decision", kind.value, entity_id)
            return conflict(f"{label} has already been moderated")

        logger.info("%s %s %s by %s", label, entity_id, status.value.lower(), caller.id)
        return Success(
            ModerationOutcome(
                entity_kind=kind.value,
                entity_id=entity_id,
                status=status.value,
                notified_user_id=owner_id,
            )
        )
