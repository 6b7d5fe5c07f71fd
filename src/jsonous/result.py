"""Result type for decode outcomes.

Every decoder returns one of two variants:

- ``Success(value)`` when the input had the expected shape
- ``Failure(error)`` carrying a human-readable diagnostic

Both variants are frozen and support ``match``::

    match string.decode_any(raw):
        case Success(value):
            ...
        case Failure(error):
            ...

Methods on the inactive variant are no-ops, so chains short-circuit on the
first failure without any branching at the call site.
"""

from __future__ import annotations

from collections.abc import Callable
import dataclasses
import typing

from jsonous.errors import UnwrapError


@typing.final
@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful decode."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map[U](self, f: Callable[[T], U]) -> Success[U]:
        return Success(f(self.value))

    def and_then[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return f(self.value)

    def map_error(self, f: Callable[[typing.Any], typing.Any]) -> Success[T]:  # noqa: ARG002
        return self

    def or_else(self, f: Callable[[typing.Any], typing.Any]) -> Success[T]:  # noqa: ARG002
        return self

    def else_do(self, f: Callable[[typing.Any], object]) -> Success[T]:  # noqa: ARG002
        return self

    def cata[R](
        self,
        *,
        success: Callable[[T], R],
        failure: Callable[[typing.Any], R],  # noqa: ARG002
    ) -> R:
        """Dispatch on the active variant and return the handler's result."""
        return success(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value


@typing.final
@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E]:
    """A failed decode, containing the diagnostic."""

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, f: Callable[[typing.Any], typing.Any]) -> Failure[E]:  # noqa: ARG002
        return self

    def and_then(self, f: Callable[[typing.Any], typing.Any]) -> Failure[E]:  # noqa: ARG002
        return self

    def map_error[F](self, f: Callable[[E], F]) -> Failure[F]:
        return Failure(f(self.error))

    def or_else[T, F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        return f(self.error)

    def else_do(self, f: Callable[[E], object]) -> Failure[E]:
        """Run ``f`` for its side effect; the failure is returned unchanged."""
        f(self.error)
        return self

    def cata[R](
        self,
        *,
        success: Callable[[typing.Any], R],  # noqa: ARG002
        failure: Callable[[E], R],
    ) -> R:
        """Dispatch on the active variant and return the handler's result."""
        return failure(self.error)

    def unwrap(self) -> typing.NoReturn:
        raise UnwrapError(
            f"Called unwrap on a Failure: {self.error}",
            hint="Check is_success() first or use unwrap_or()/cata()",
            error=self.error,
        )

    def unwrap_or[T](self, default: T) -> T:
        return default


type Result[T, E] = Success[T] | Failure[E]
