from .auth import router as auth_router
from .moderation import statuses_router
from .posts import router as posts_router, posts_moderation_router, comments_moderation_router

__all__ = [
    "auth_router",
    "statuses_router",
    "posts_router",
    "posts_moderation_router",
    "comments_moderation_router",
]
