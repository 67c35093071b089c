"""Domain exceptions for encode/decode diagnostics."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error categories reported by the transform."""

    BAD_INPUT = "bad_input"
    BAD_KEY = "bad_key"
    BAD_VALUE = "bad_value"
    LOAD_ERROR = "load_error"


class SmugglerError(RuntimeError):
    """Base class for errors raised while encoding or decoding configs."""

    kind: ErrorKind = ErrorKind.BAD_INPUT

    def __init__(
        self,
        *,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize an error with a human-readable detail and optional hint."""

        super().__init__(detail)
        self.detail = detail
        self.hint = hint


class BadInputError(SmugglerError):
    """Raised when the top-level argument of a call has the wrong shape."""

    kind = ErrorKind.BAD_INPUT


class BadKeyError(SmugglerError):
    """Raised when an encoded key cannot be decoded into an identifier path."""

    kind = ErrorKind.BAD_KEY


class BadValueError(SmugglerError):
    """Raised when encoded value text is outside the literal grammar."""

    kind = ErrorKind.BAD_VALUE


class LoadError(SmugglerError):
    """Raised when a settings source could not be read or parsed."""

    kind = ErrorKind.LOAD_ERROR
