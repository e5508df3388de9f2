from .auth import UserLogin, UserResponse, TokenResponse
from .moderation import StatusLabel, ModerationResult
from .posts import PostCreate, PostUpdate, PostResponse, CommentCreate, CommentResponse

__all__ = [
    "UserLogin", "UserResponse", "TokenResponse",
    "StatusLabel", "ModerationResult",
    "PostCreate", "PostUpdate", "PostResponse", "CommentCreate", "CommentResponse",
]
