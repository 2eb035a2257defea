"""Exceptions raised by widgets, combinators and the driver."""


class FlipbookError(Exception):
    """Base class for all flipbook errors."""


class ConfigurationError(FlipbookError, ValueError):
    """A widget or combinator was constructed with an invalid argument.

    The message names the violated precondition, e.g.
    ``"Repeat: times must be >= 0 (got -1)"``.
    """


class SequencingError(FlipbookError, RuntimeError):
    """``tick()`` was called on a widget whose run is already over."""
