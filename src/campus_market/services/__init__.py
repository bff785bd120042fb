# src/campus_market/services/__init__.py
"""Marketplace components.

Each component receives an :class:`EntityStore` at construction and returns
:class:`Success` or :class:`Failure` values instead of raising for expected
outcomes.
"""

from .chats import ChatRegistry
from .identity import Identity, IdentityResolver
from .listings import ListingService
from .moderation import ModerationWorkflow
from .notifications import NotificationFanout
from .policy import Action, AuthorizationPolicy
from .profiles import ProfileService
from .results import ErrorKind, Failure, Result, StoreFailure, Success
from .store import EntityStore
from .upvotes import UpvoteLedger

__all__ = [
    "Action",
    "AuthorizationPolicy",
    "ChatRegistry",
    "EntityStore",
    "ErrorKind",
    "Failure",
    "Identity",
    "IdentityResolver",
    "ListingService",
    "ModerationWorkflow",
    "NotificationFanout",
    "ProfileService",
    "Result",
    "StoreFailure",
    "Success",
    "UpvoteLedger",
]
