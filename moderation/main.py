"""
Moderation API - FastAPI application entry point.
"""
from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import get_settings
from .database import engine, Base
from .limiter import limiter
from .logging_config import api_logger
from .routes import (
    auth_router,
    statuses_router,
    posts_router,
    posts_moderation_router,
    comments_moderation_router,
)

settings = get_settings()

# Create tables (in production, use migrations instead)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.app_name,
    description="Moderation workflow for posts and comments",
    version="1.0.0",
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Routes (posts_router first: its static paths must win over /{record_id})
app.include_router(auth_router)
app.include_router(statuses_router)
app.include_router(posts_router)
app.include_router(posts_moderation_router)
app.include_router(comments_moderation_router)

api_logger.info("Application configured", environment=settings.environment)
