"""
Moderation behaviour for SQLAlchemy models.

Add ``ModerationColumnsMixin`` (or ``ModerationMixin`` with your own
columns) to a declarative model to give it a moderation status:

    class Post(ModerationColumnsMixin, Base):
        __tablename__ = "posts"
        ...

    post.mark_approved(db)   # change status to Approved and save
    post.is_approved()       # check the status

Models whose columns are named differently configure them with
``ModerationOptions``:

    class Comment(ModerationMixin, Base):
        __moderation__ = ModerationOptions(
            status_attribute="state",
            moderated_by_attribute="moderator_id",
        )

Setting ``moderated_by_attribute=None`` turns off audit stamping. Otherwise
every insert or update of the record stores the id of the actor bound to
the session (see ``moderation.actor``), or None for guests.
"""
import operator
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable

from sqlalchemy import Column, Integer, SmallInteger, event, inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, object_session

from .actor import current_actor, moderated_by_value
from .errors import ModerationConfigError
from .logging_config import moderation_logger as logger
from .status import Status, status_matches

BEFORE_MODERATION = "before_moderation"


# ============================================================
# CONFIGURATION
# ============================================================

@dataclass(frozen=True)
class ModerationOptions:
    """Names of the attributes holding the status and the moderator id."""

    status_attribute: str = "status"
    moderated_by_attribute: Optional[str] = "moderated_by"


@dataclass(frozen=True)
class ModerationAccessors:
    """Accessors bound once per model class from its ModerationOptions."""

    options: ModerationOptions
    status_column: object
    get_status: Callable
    set_status: Callable
    set_moderated_by: Optional[Callable]


_accessors: Dict[type, ModerationAccessors] = {}


def _setter(name: str) -> Callable:
    def set_value(entity, value):
        setattr(entity, name, value)
    return set_value


def resolve_options(model: type) -> ModerationAccessors:
    """
    Validate a model's moderation options and bind its accessors.

    Raises ModerationConfigError if the model is not mapped or if a
    configured attribute is not a mapped column.
    """
    cached = _accessors.get(model)
    if cached is not None:
        return cached

    options = getattr(model, "__moderation__", None)
    if not isinstance(options, ModerationOptions):
        raise ModerationConfigError(f"{model.__name__} has no moderation options")

    mapper = sa_inspect(model, raiseerr=False)
    if mapper is None:
        raise ModerationConfigError(f"{model.__name__} is not a mapped class")

    columns = mapper.column_attrs
    if not options.status_attribute or options.status_attribute not in columns:
        raise ModerationConfigError(
            f"{model.__name__} has no column attribute {options.status_attribute!r} for status"
        )

    set_moderated_by = None
    if options.moderated_by_attribute is not None:
        if options.moderated_by_attribute not in columns:
            raise ModerationConfigError(
                f"{model.__name__} has no column attribute "
                f"{options.moderated_by_attribute!r} for moderated_by"
            )
        set_moderated_by = _setter(options.moderated_by_attribute)

    accessors = ModerationAccessors(
        options=options,
        status_column=getattr(model, options.status_attribute),
        get_status=operator.attrgetter(options.status_attribute),
        set_status=_setter(options.status_attribute),
        set_moderated_by=set_moderated_by,
    )
    _accessors[model] = accessors
    return accessors


# ============================================================
# PRE-MODERATION HOOK
# ============================================================

@runtime_checkable
class HasPreModerationHook(Protocol):
    """Models implementing this can veto any moderation of their records."""

    def before_moderation(self) -> bool:
        ...


@dataclass
class ModerationEvent:
    """Passed to before_moderation listeners; set ``is_valid`` to False to cancel."""

    entity: object
    status: Status
    is_valid: bool = True


_class_listeners: Dict[type, List[Callable]] = {}
_INSTANCE_LISTENERS = "_moderation_listeners"


def _check_identifier(identifier: str):
    if identifier != BEFORE_MODERATION:
        raise ValueError(f"Unknown moderation event: {identifier!r}")


def _listeners_for(target, create: bool = False) -> Optional[List[Callable]]:
    if isinstance(target, type):
        if create:
            return _class_listeners.setdefault(target, [])
        return _class_listeners.get(target)
    if create:
        return target.__dict__.setdefault(_INSTANCE_LISTENERS, [])
    return target.__dict__.get(_INSTANCE_LISTENERS)


def listen(target, identifier: str, fn: Callable[[ModerationEvent], None]):
    """
    Register ``fn`` for ``identifier`` on a model class or a single record.

    Class listeners also fire for subclasses.
    """
    _check_identifier(identifier)
    listeners = _listeners_for(target, create=True)
    if fn not in listeners:
        listeners.append(fn)


def remove(target, identifier: str, fn: Callable[[ModerationEvent], None]):
    _check_identifier(identifier)
    listeners = _listeners_for(target)
    if listeners and fn in listeners:
        listeners.remove(fn)


def contains(target, identifier: str, fn: Callable[[ModerationEvent], None]) -> bool:
    _check_identifier(identifier)
    listeners = _listeners_for(target)
    return bool(listeners) and fn in listeners


def _collect_listeners(entity) -> List[Callable]:
    collected = []
    for cls in reversed(type(entity).__mro__):
        collected.extend(_class_listeners.get(cls, ()))
    collected.extend(entity.__dict__.get(_INSTANCE_LISTENERS, ()))
    return collected


def run_before_moderation(entity, status: Status) -> bool:
    """
    Run the two-stage pre-moderation hook.

    The record's own ``before_moderation()`` runs first; returning False
    cancels without notifying listeners. Otherwise every listener receives
    the same event and any of them may clear ``is_valid``.
    """
    if isinstance(entity, HasPreModerationHook) and not entity.before_moderation():
        return False

    moderation_event = ModerationEvent(entity=entity, status=status)
    for fn in _collect_listeners(entity):
        fn(moderation_event)
    return moderation_event.is_valid


# ============================================================
# CONTROLLER
# ============================================================

class ModerationController:
    """
    Moderates a single record within one session.

    Mark operations save through the session they were given: a successful
    mark commits everything pending in that session, not just this record,
    and a failed save rolls the whole session back. Keep unrelated work in
    another session when that matters.
    """

    def __init__(self, entity, session: Session):
        self.entity = entity
        self.session = session
        self.accessors = resolve_options(type(entity))

    @property
    def raw_status(self):
        return self.accessors.get_status(self.entity)

    @property
    def status(self) -> Status:
        """The stored status. Raises InvalidStatusError for out-of-domain values."""
        return Status.coerce(self.raw_status)

    # Mutations

    def mark_approved(self) -> bool:
        """Change the status to Approved and save."""
        return self._mark(Status.APPROVED)

    def mark_rejected(self) -> bool:
        """Change the status to Rejected and save."""
        return self._mark(Status.REJECTED)

    def mark_postponed(self) -> bool:
        """Change the status to Postponed and save."""
        return self._mark(Status.POSTPONED)

    def mark_pending(self) -> bool:
        """Change the status to Pending and save."""
        return self._mark(Status.PENDING)

    # Predicates

    def is_approved(self) -> bool:
        return status_matches(self.raw_status, Status.APPROVED)

    def is_rejected(self) -> bool:
        return status_matches(self.raw_status, Status.REJECTED)

    def is_postponed(self) -> bool:
        return status_matches(self.raw_status, Status.POSTPONED)

    def is_pending(self) -> bool:
        return status_matches(self.raw_status, Status.PENDING)

    def _mark(self, status: Status) -> bool:
        self.accessors.set_status(self.entity, int(status))

        if not run_before_moderation(self.entity, status):
            logger.info(
                "Moderation cancelled",
                model=type(self.entity).__name__,
                status=status.label,
            )
            return False

        return self._save(status)

    def _save(self, status: Status) -> bool:
        try:
            self.session.add(self.entity)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            # rollback expires persistent records; keep the requested status in memory
            self.accessors.set_status(self.entity, int(status))
            logger.error(
                "Moderation save failed",
                error=e,
                model=type(self.entity).__name__,
                status=status.label,
            )
            return False

        logger.debug(
            "Record moderated",
            model=type(self.entity).__name__,
            status=status.label,
        )
        return True


# ============================================================
# MIXINS
# ============================================================

class ModerationMixin:
    """Adds moderation methods to a declarative model."""

    __moderation__ = ModerationOptions()

    def moderation(self, session: Session) -> ModerationController:
        return ModerationController(self, session)

    def mark_approved(self, session: Session) -> bool:
        return self.moderation(session).mark_approved()

    def mark_rejected(self, session: Session) -> bool:
        return self.moderation(session).mark_rejected()

    def mark_postponed(self, session: Session) -> bool:
        return self.moderation(session).mark_postponed()

    def mark_pending(self, session: Session) -> bool:
        return self.moderation(session).mark_pending()

    def _moderation_value(self):
        return resolve_options(type(self)).get_status(self)

    def is_approved(self) -> bool:
        return status_matches(self._moderation_value(), Status.APPROVED)

    def is_rejected(self) -> bool:
        return status_matches(self._moderation_value(), Status.REJECTED)

    def is_postponed(self) -> bool:
        return status_matches(self._moderation_value(), Status.POSTPONED)

    def is_pending(self) -> bool:
        return status_matches(self._moderation_value(), Status.PENDING)

    @classmethod
    def moderation_query(cls, session: Session):
        from .query import ModerationQuery

        return ModerationQuery.for_model(session, cls)


class ModerationColumnsMixin(ModerationMixin):
    """ModerationMixin plus the default ``status`` and ``moderated_by`` columns."""

    status = Column(SmallInteger, nullable=False, default=int(Status.PENDING), index=True)
    moderated_by = Column(Integer, nullable=True, index=True)


# ============================================================
# AUDIT STAMPING
# ============================================================

def _stamp_moderated_by(mapper, connection, target):
    accessors = resolve_options(type(target))
    if accessors.set_moderated_by is None:
        return
    actor = current_actor(object_session(target))
    accessors.set_moderated_by(target, moderated_by_value(actor))


event.listen(ModerationMixin, "before_insert", _stamp_moderated_by, propagate=True)
event.listen(ModerationMixin, "before_update", _stamp_moderated_by, propagate=True)
