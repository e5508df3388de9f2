"""
Moderation status for SQLAlchemy models: status codes, a mixin with
mark/is operations and audit stamping, and status filters for queries.
"""
from .actor import Actor, bind_actor, current_actor
from .behavior import (
    BEFORE_MODERATION,
    HasPreModerationHook,
    ModerationColumnsMixin,
    ModerationController,
    ModerationEvent,
    ModerationMixin,
    ModerationOptions,
    contains,
    listen,
    remove,
)
from .errors import InvalidStatusError, ModerationConfigError, ModerationError
from .query import ModerationQuery
from .status import Status

__all__ = [
    "Actor",
    "bind_actor",
    "current_actor",
    "BEFORE_MODERATION",
    "HasPreModerationHook",
    "ModerationColumnsMixin",
    "ModerationController",
    "ModerationEvent",
    "ModerationMixin",
    "ModerationOptions",
    "contains",
    "listen",
    "remove",
    "InvalidStatusError",
    "ModerationConfigError",
    "ModerationError",
    "ModerationQuery",
    "Status",
]
