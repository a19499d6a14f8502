"""Exceptions raised by the shatter engine."""


class ShatterError(Exception):
    """Base class for every error raised by shatterfx."""


class GeometryUnavailable(ShatterError):
    """The source rectangle or viewport could not be determined.

    Raised when the trigger element has not been laid out yet (missing or
    zero-size bounds). Callers should treat the trigger as a no-op.
    """


class InvalidConfiguration(ShatterError, ValueError):
    """A tunable is out of range, e.g. a grid size below 1."""
