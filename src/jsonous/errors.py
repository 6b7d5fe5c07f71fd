"""Exception hierarchy for jsonous.

Decode failures are never raised; they travel as ``Failure`` values. The
exceptions below cover the boundaries where a value must be forced out of a
container or where the library itself is misconfigured.
"""

from __future__ import annotations


class JsonousError(Exception):
    """Base exception for all jsonous errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(JsonousError):
    """Settings validation or resolution failed."""


class UnwrapError(JsonousError):
    """A value was forced out of a ``Failure`` or ``Nothing``.

    When unwrapping a failed decode, the diagnostic is kept on ``error`` so
    callers can log it without parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        error: object | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.error = error
