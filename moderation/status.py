"""
Moderation status codes and their display labels.
"""
from enum import IntEnum
from typing import Dict

from .errors import InvalidStatusError

DEFAULT_LOCALE = "en"


class Status(IntEnum):
    """Review state of a moderated record, stored as a small integer."""

    PENDING = 0
    APPROVED = 1
    REJECTED = 2
    POSTPONED = 3

    @property
    def label(self) -> str:
        return self.localized(DEFAULT_LOCALE)

    def localized(self, locale: str) -> str:
        """Display label for ``locale``, falling back to English."""
        return LABELS.get(locale, LABELS[DEFAULT_LOCALE])[self]

    @classmethod
    def labels(cls, locale: str = DEFAULT_LOCALE) -> Dict[int, str]:
        """All codes with their labels, in code order."""
        return {int(status): status.localized(locale) for status in cls}

    @classmethod
    def coerce(cls, value) -> "Status":
        """
        Convert a stored value to a Status.

        Accepts members, plain integers and numeric strings ("1", " 2 ").
        An unset value (None) is Pending, the column default.
        Anything else, including out-of-range numbers, raises InvalidStatusError.
        """
        if value is None:
            return cls.PENDING
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidStatusError(value)
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                raise InvalidStatusError(value) from None
        if not isinstance(value, int):
            raise InvalidStatusError(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidStatusError(value) from None


LABELS = {
    "en": {
        Status.PENDING: "Pending",
        Status.APPROVED: "Approved",
        Status.REJECTED: "Rejected",
        Status.POSTPONED: "Postponed",
    },
    "ru": {
        Status.PENDING: "На модерации",
        Status.APPROVED: "Одобрено",
        Status.REJECTED: "Отклонено",
        Status.POSTPONED: "Отложено",
    },
}


def status_matches(value, status: Status) -> bool:
    """Loose comparison of a stored value with a status code. Never raises."""
    try:
        return Status.coerce(value) is status
    except InvalidStatusError:
        return False
