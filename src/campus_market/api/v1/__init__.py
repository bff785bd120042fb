# src/campus_market/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    chats_router,
    notifications_router,
    posts_router,
    profiles_router,
    requests_router,
)

__all__ = [
    "admin_router",
    "chats_router",
    "notifications_router",
    "posts_router",
    "profiles_router",
    "requests_router",
]
