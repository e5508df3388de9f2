"""
Request-scoped actor carried on the SQLAlchemy session.

The acting user is stored in ``Session.info`` so that audit stamping in
mapper events can read it without a global "current user" lookup.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

ACTOR_KEY = "moderation_actor"


@dataclass(frozen=True)
class Actor:
    """Whoever is performing the current request."""

    id: Optional[int] = None
    is_guest: bool = False

    @classmethod
    def guest(cls) -> "Actor":
        return cls(id=None, is_guest=True)


def bind_actor(session: Session, actor: Optional[Actor]) -> Session:
    """Attach ``actor`` to ``session``; ``None`` clears it."""
    if actor is None:
        session.info.pop(ACTOR_KEY, None)
    else:
        session.info[ACTOR_KEY] = actor
    return session


def current_actor(session: Optional[Session]) -> Optional[Actor]:
    if session is None:
        return None
    return session.info.get(ACTOR_KEY)


def moderated_by_value(actor: Optional[Actor]) -> Optional[int]:
    """Identifier to record as moderator: the actor's id unless absent or a guest."""
    if actor is None or actor.is_guest:
        return None
    return actor.id
