# src/campus_market/models/__init__.py
"""SQLAlchemy models for the Campus Market service."""

from .chat import Chat, ChatParticipant, Message, canonical_pair
from .feedback import Feedback
from .moderation import ModeratedKind, ModerationDecision, ModerationStatus
from .notification import Notification, NotificationKind
from .post import Post
from .profile import Profile, Role
from .request import ResourceRequest
from .upvote import Upvote

__all__ = [
    "Chat", "ChatParticipant", "Message", "canonical_pair",
    "Feedback",
    "ModeratedKind", "ModerationDecision", "ModerationStatus",
    "Notification", "NotificationKind",
    "Post",
    "Profile", "Role",
    "ResourceRequest",
    "Upvote",
]
