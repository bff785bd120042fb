# src/campus_market/services/listings.py
"""Marketplace posts and resource requests.

New submissions start hidden and notify the admins; they only reach the public
listing once :mod:`campus_market.services.moderation` approves them.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from campus_market.models import ModeratedKind, Post, ResourceRequest
from campus_market.schemas.common import ActionMessage, ProfileSummary
from campus_market.schemas.post import (
    FeedbackCreate,
    FeedbackResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from campus_market.schemas.request import RequestCreate, RequestResponse, RequestUpdate
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


class ListingService:
    """CRUD for posts and requests plus the sale and feedback flow."""

    def __init__(
        self,
        store: EntityStore,
        notifier: NotificationFanout,
        policy: AuthorizationPolicy | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.policy = policy or AuthorizationPolicy()

    # Posts

    def list_posts(
        self,
        *,
        category: str | None = None,
        query: str | None = None,
    ) -> Result[list[PostResponse]]:
        """Return approved, available posts, newest first."""
        posts = self.store.list_posts(category=category, query=query)
        return Success([PostResponse.model_validate(post) for post in posts])

    def get_post(self, post_id: int) -> Result[PostResponse]:
        post = self.store.get_post(post_id)
        if post is None:
            return not_found("Post")
        return Success(PostResponse.model_validate(post))

    def create_post(self, caller: Identity, data: PostCreate) -> Result[PostResponse]:
        """Create a listing awaiting moderation and alert the admins."""
        with self.store.transaction():
            post = Post(
                seller_id=caller.id,
                title=data.title,
                description=data.description,
                category=data.category,
                price=data.price,
                images=list(data.images),
                is_available=False,
                is_approved=False,
            )
            self.store.add(post)
            self.store.flush()
            self.notifier.submission_created(
                author_id=caller.id, kind=ModeratedKind.POST, title=post.title
            )
            response = PostResponse.model_validate(post)
        logger.info("Post %s created by %s", response.id, caller.id)
        return Success(response)

    def update_post(self, caller: Identity, post_id: int, data: PostUpdate) -> Result[PostResponse]:
        """Apply owner edits. Moderation state is untouched."""
        post = self.store.get_post(post_id)
        if post is None:
            return not_found("Post")
        denied = self.policy.check(caller, Action.EDIT_LISTING, owner_id=post.seller_id)
        if denied:
            return denied

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with self.store.transaction():
            for field, value in changes.items():
                setattr(post, field, value)
            self.store.flush()
            response = PostResponse.model_validate(post)
        return Success(response)

    def delete_post(self, caller: Identity, post_id: int) -> Result[ActionMessage]:
        post = self.store.get_post(post_id)
        if post is None:
            return not_found("Post")
        denied = self.policy.check(caller, Action.DELETE_LISTING, owner_id=post.seller_id)
        if denied:
            return denied

        with self.store.transaction():
            self.store.delete_post(post)
        logger.info("Post %s deleted by %s", post_id, caller.id)
        return Success(ActionMessage(message="Post deleted"))

    def mark_sold(self, caller: Identity, post_id: int, customer_id: str) -> Result[PostResponse]:
        """Record the buyer and take the listing off the market."""
        post = self.store.get_post(post_id)
        if post is None:
            return not_found("Post")
        denied = self.policy.check(caller, Action.MARK_SOLD, owner_id=post.seller_id)
        if denied:
            return denied
        if customer_id == post.seller_id:
            return validation_failed("The seller cannot buy their own post")
        if self.store.get_profile(customer_id) is None:
            return not_found("Customer")
        if post.sold_to_user_id is not None:
            return conflict("Post has already been sold")

        with self.store.transaction():
            post.is_available = False
            post.sold_to_user_id = customer_id
            self.store.flush()
            response = PostResponse.model_validate(post)
        logger.info("Post %s sold to %s", post_id, customer_id)
        return Success(response)

    def send_feedback(
        self,
        caller: Identity,
        post_id: int,
        data: FeedbackCreate,
    ) -> Result[FeedbackResponse]:
        """Store the buyer's rating for a sold post, once per buyer."""
        post = self.store.get_post(post_id)
        if post is None:
            return not_found("Post")
        denied = self.policy.check(caller, Action.LEAVE_FEEDBACK, owner_id=post.sold_to_user_id)
        if denied:
            return denied

        remark = data.remark.strip() if data.remark else None
        try:
            with self.store.transaction():
                feedback = self.store.add_feedback(post.id, caller.id, data.rating, remark or None)
                response = FeedbackResponse.model_validate(feedback)
        except IntegrityError:
            return conflict("You have already left feedback for this post")
        return Success(response)

    # Requests

    def _request_response(self, request: ResourceRequest, summaries: dict) -> RequestResponse:
        response = RequestResponse.model_validate(request)
        profile = summaries.get(request.user_id)
        if profile is not None:
            response.user = ProfileSummary(
                id=profile.id, name=profile.full_name, image=profile.avatar_url
            )
        return response

    def list_requests(self, *, query: str | None = None) -> Result[list[RequestResponse]]:
        """Return requests that were not rejected, newest first, with their authors."""
        requests = self.store.list_requests(query=query)
        profiles = self.store.get_profiles({r.user_id for r in requests})
        return Success([self._request_response(r, profiles) for r in requests])

    def get_request(self, request_id: int) -> Result[RequestResponse]:
        request = self.store.get_request(request_id)
        if request is None:
            return not_found("Request")
        profiles = self.store.get_profiles([request.user_id])
        return Success(self._request_response(request, profiles))

    def create_request(self, caller: Identity, data: RequestCreate) -> Result[RequestResponse]:
        """Create a request with no upvotes and alert the admins."""
        with self.store.transaction():
            request = ResourceRequest(
                user_id=caller.id,
                title=data.title,
                description=data.description,
                image_url=data.image,
                upvotes=0,
            )
            self.store.add(request)
            self.store.flush()
            self.notifier.submission_created(
                author_id=caller.id, kind=ModeratedKind.REQUEST, title=request.title
            )
            response = RequestResponse.model_validate(request)
        logger.info("Request %s created by %s", response.id, caller.id)
        return Success(response)

    def update_request(
        self,
        caller: Identity,
        request_id: int,
        data: RequestUpdate,
    ) -> Result[RequestResponse]:
        request = self.store.get_request(request_id)
        if request is None:
            return not_found("Request")
        denied = self.policy.check(caller, Action.EDIT_LISTING, owner_id=request.user_id)
        if denied:
            return denied

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "image" in changes:
            changes["image_url"] = changes.pop("image")
        with self.store.transaction():
            for field, value in changes.items():
                setattr(request, field, value)
            self.store.flush()
            response = RequestResponse.model_validate(request)
        return Success(response)

    def delete_request(self, caller: Identity, request_id: int) -> Result[ActionMessage]:
        """Delete a request along with its upvotes."""
        request = self.store.get_request(request_id)
        if request is None:
            return not_found("Request")
        denied = self.policy.check(caller, Action.DELETE_LISTING, owner_id=request.user_id)
        if denied:
            return denied

        with self.store.transaction():
            self.store.delete_request(request)
        logger.info("Request %s deleted by %s", request_id, caller.id)
        return Success(ActionMessage(message="Request deleted"))
