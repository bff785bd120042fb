# src/campus_market/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .chats import router as chats_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .profiles import router as profiles_router
from .requests import router as requests_router

__all__ = [
    "admin_router",
    "chats_router",
    "notifications_router",
    "posts_router",
    "profiles_router",
    "requests_router",
]
