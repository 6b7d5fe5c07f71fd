"""Optional values produced by the ``maybe`` and ``nullable`` decoders."""

from __future__ import annotations

from collections.abc import Callable
import dataclasses
import typing

from jsonous.errors import UnwrapError


@typing.final
@dataclasses.dataclass(frozen=True, slots=True)
class Just[T]:
    """A present value."""

    value: T

    def is_just(self) -> bool:
        return True

    def is_nothing(self) -> bool:
        return False

    def map[U](self, f: Callable[[T], U]) -> Just[U]:
        return Just(f(self.value))

    def get_or_else(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def cata[R](
        self,
        *,
        just: Callable[[T], R],
        nothing: Callable[[], R],  # noqa: ARG002
    ) -> R:
        return just(self.value)

    def unwrap(self) -> T:
        return self.value


@typing.final
@dataclasses.dataclass(frozen=True, slots=True)
class Nothing:
    """An absent value. All instances compare equal."""

    def is_just(self) -> bool:
        return False

    def is_nothing(self) -> bool:
        return True

    def map(self, f: Callable[[typing.Any], typing.Any]) -> Nothing:  # noqa: ARG002
        return self

    def get_or_else[T](self, default: T) -> T:
        return default

    def cata[R](
        self,
        *,
        just: Callable[[typing.Any], R],  # noqa: ARG002
        nothing: Callable[[], R],
    ) -> R:
        return nothing()

    def unwrap(self) -> typing.NoReturn:
        raise UnwrapError(
            "Called unwrap on Nothing",
            hint="Use get_or_else() or cata() to handle the absent case",
        )


NOTHING: typing.Final[Nothing] = Nothing()

type Maybe[T] = Just[T] | Nothing
