# src/campus_market/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .chat import ChatDetail, ChatStart, ChatStarted, ChatSummary, MessageCreate, MessageResponse
from .common import ActionMessage, ProfileSummary
from .moderation import ModerationOutcome, RejectAction, ReviewQueue
from .notification import NotificationResponse, UnreadCount
from .post import FeedbackCreate, FeedbackResponse, PostCreate, PostResponse, PostSold, PostUpdate
from .profile import ProfileResponse, ProfileUpdate
from .request import MyUpvote, RequestCreate, RequestResponse, RequestUpdate, UpvoteOutcome

__all__ = [
    "ChatDetail", "ChatStart", "ChatStarted", "ChatSummary", "MessageCreate", "MessageResponse",
    "ActionMessage", "ProfileSummary",
    "ModerationOutcome", "RejectAction", "ReviewQueue",
    "NotificationResponse", "UnreadCount",
    "FeedbackCreate", "FeedbackResponse", "PostCreate", "PostResponse", "PostSold", "PostUpdate",
    "ProfileResponse", "ProfileUpdate",
    "MyUpvote", "RequestCreate", "RequestResponse", "RequestUpdate", "UpvoteOutcome",
]
