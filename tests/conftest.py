"""
Pytest configuration and fixtures for moderation tests.
"""
import os

os.environ.setdefault("MODERATION_DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("MODERATION_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, Column, Integer, SmallInteger, String
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from moderation.behavior import ModerationMixin, ModerationOptions
from moderation.database import Base, get_db
from moderation.limiter import limiter
from moderation.main import app
from moderation.models import Post, User
from moderation.auth import get_password_hash, create_access_token
from moderation.status import Status

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


class Note(ModerationMixin, Base):
    """Moderated model with audit stamping turned off."""

    __tablename__ = "test_notes"
    __moderation__ = ModerationOptions(moderated_by_attribute=None)

    id = Column(Integer, primary_key=True)
    text = Column(String(100), nullable=False, default="")
    status = Column(SmallInteger, nullable=False, default=int(Status.PENDING))
    moderated_by = Column(Integer, nullable=True)


class GuardedNote(ModerationMixin, Base):
    """Moderated model whose own hook can veto moderation."""

    __tablename__ = "test_guarded_notes"

    id = Column(Integer, primary_key=True)
    status = Column(SmallInteger, nullable=False, default=int(Status.PENDING))
    moderated_by = Column(Integer, nullable=True)

    allow_moderation = True

    def before_moderation(self) -> bool:
        self.__dict__.setdefault("hook_calls", []).append(self.status)
        return self.allow_moderation


def get_test_db():
    """Get the shared test database session."""
    global _test_session
    try:
        yield _test_session
    finally:
        pass


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


def make_user(db, email, password="testpassword123", is_moderator=False):
    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        display_name=email.split("@")[0],
        is_active=True,
        is_moderator=is_moderator,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_post(db, user, title="A post", status=None):
    post = Post(user_id=user.id, title=title, content=f"{title} content")
    if status is not None:
        post.status = int(status)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


@pytest.fixture(scope="function")
def test_user(db):
    """Create a regular user."""
    return make_user(db, "test@example.com")


@pytest.fixture(scope="function")
def moderator(db):
    """Create a user allowed to moderate."""
    return make_user(db, "mod@example.com", is_moderator=True)


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """Auth headers for the regular user."""
    return {"Authorization": f"Bearer {create_access_token({'sub': str(test_user.id)})}"}


@pytest.fixture(scope="function")
def moderator_headers(moderator):
    """Auth headers for the moderator."""
    return {"Authorization": f"Bearer {create_access_token({'sub': str(moderator.id)})}"}


@pytest.fixture(scope="function")
def one_of_each(db, test_user):
    """One post in each moderation status, keyed by status."""
    return {status: make_post(db, test_user, title=status.label, status=status) for status in Status}
