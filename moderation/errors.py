"""
Exceptions raised by the moderation layer.

Cancelling a moderation is not an error: mark operations report it as a
``False`` result.
"""


class ModerationError(Exception):
    """Base class for moderation errors."""


class ModerationConfigError(ModerationError):
    """A model's moderation options point at attributes it does not map."""


class InvalidStatusError(ModerationError, ValueError):
    """A stored status value is outside the known status codes."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid moderation status: {value!r}")
