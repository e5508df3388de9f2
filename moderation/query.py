"""
Status filters for SQLAlchemy queries over moderated models.

    ModerationQuery.for_model(db, Post).approved().all()
    ModerationQuery(db.query(Post).filter(Post.user_id == 1)).approved_with_pending().all()

Every filter is added with AND, so chaining ``pending().approved()`` matches
nothing.
"""
from typing import Iterator, List, Optional

from sqlalchemy.orm import Query, Session

from .behavior import resolve_options
from .errors import ModerationConfigError
from .status import Status


class ModerationQuery:
    """Wraps a SQLAlchemy Query and adds status filters."""

    def __init__(self, query: Query, model: Optional[type] = None):
        if model is None:
            model = _primary_model(query)
        self.model = model
        self._query = query
        self._status_column = resolve_options(model).status_column

    @classmethod
    def for_model(cls, session: Session, model: type) -> "ModerationQuery":
        return cls(session.query(model), model)

    @property
    def query(self) -> Query:
        """The wrapped SQLAlchemy query."""
        return self._query

    def _chain(self, query: Query) -> "ModerationQuery":
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._query = query
        return clone

    # Status filters

    def approved(self) -> "ModerationQuery":
        """Only approved records."""
        return self._chain(self._query.filter(self._status_column == int(Status.APPROVED)))

    def rejected(self) -> "ModerationQuery":
        """Only rejected records."""
        return self._chain(self._query.filter(self._status_column == int(Status.REJECTED)))

    def postponed(self) -> "ModerationQuery":
        """Only postponed records."""
        return self._chain(self._query.filter(self._status_column == int(Status.POSTPONED)))

    def pending(self) -> "ModerationQuery":
        """Only pending records."""
        return self._chain(self._query.filter(self._status_column == int(Status.PENDING)))

    def approved_with_pending(self) -> "ModerationQuery":
        """Approved and pending records."""
        return self._chain(
            self._query.filter(self._status_column.in_([int(Status.APPROVED), int(Status.PENDING)]))
        )

    # Chaining

    def filter(self, *criterion) -> "ModerationQuery":
        return self._chain(self._query.filter(*criterion))

    def order_by(self, *clauses) -> "ModerationQuery":
        return self._chain(self._query.order_by(*clauses))

    def limit(self, limit: Optional[int]) -> "ModerationQuery":
        return self._chain(self._query.limit(limit))

    def offset(self, offset: Optional[int]) -> "ModerationQuery":
        return self._chain(self._query.offset(offset))

    # Execution

    def all(self) -> List:
        return self._query.all()

    def first(self):
        return self._query.first()

    def one_or_none(self):
        return self._query.one_or_none()

    def count(self) -> int:
        return self._query.count()

    def __iter__(self) -> Iterator:
        return iter(self._query)


def _primary_model(query: Query) -> type:
    descriptions = query.column_descriptions
    model = descriptions[0].get("entity") if descriptions else None
    if model is None:
        raise ModerationConfigError("Cannot determine the moderated model of this query")
    return model
