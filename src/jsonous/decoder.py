"""The Decoder type and its combinator algebra.

A ``Decoder[A]`` wraps a pure function from an untyped value to a
``Result[A, str]``. Combinators never mutate the decoder they are called on;
each returns a new ``Decoder`` whose function closes over the original, so a
decoder can be shared freely and reused for any number of decodes.

Example:
    user = (
        succeed({})
        .assign("name", field("name", string))
        .assign("age", field("age", number))
    )
    user.decode_json('{"name": "Ada", "age": 36}')
    # Success(value={'name': 'Ada', 'age': 36})
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import dataclasses
import json
import logging
import typing

from jsonous.config import current_settings
from jsonous.result import Failure, Result

log = logging.getLogger(__name__)

type DecoderFn[A] = Callable[[typing.Any], Result[A, str]]


def _reject_constant(name: str) -> typing.NoReturn:
    raise ValueError(f"Unexpected token {name} in JSON")


@typing.final
@dataclasses.dataclass(frozen=True, slots=True)
class Decoder[A]:
    """A reusable rule for turning an untyped value into an ``A``."""

    fn: DecoderFn[A]

    def __call__(self, value: typing.Any) -> Result[A, str]:
        return self.fn(value)

    # --- Transformation ---

    def map[B](self, f: Callable[[A], B]) -> Decoder[B]:
        """Lift ``f`` to operate on the decoded value."""
        fn = self.fn
        return Decoder(lambda value: fn(value).map(f))

    def and_then[B](self, f: Callable[[A], Decoder[B]]) -> Decoder[B]:
        """Chain a decoder chosen from the decoded value.

        The decoder returned by ``f`` runs against the *original* input, not
        against the value ``f`` received. This is what makes versioned
        payloads easy: decode a discriminator, then pick the decoder for
        the whole document.
        """
        fn = self.fn
        return Decoder(lambda value: fn(value).and_then(lambda a: f(a).fn(value)))

    def assign[B](
        self,
        key: str,
        other: Decoder[B] | Callable[[A], Decoder[B]],
    ) -> Decoder[dict[str, typing.Any]]:
        """Extend the decoded mapping with ``key`` bound to ``other``'s result.

        ``other`` may be a decoder or a function of the value accumulated so
        far. The accumulated mapping is copied, never mutated. If the current
        value is not a mapping it is replaced by ``{key: result}``.
        """
        name = str(key)

        def step(a: A) -> Decoder[dict[str, typing.Any]]:
            decoder = other if isinstance(other, Decoder) else other(a)
            base = dict(a) if isinstance(a, Mapping) else {}
            return decoder.map(lambda b: {**base, name: b})

        return self.and_then(step)

    def do(self, f: Callable[[A], object]) -> Decoder[A]:
        """Run ``f`` on success for its side effect; the value is unchanged.

        Handy for logging in the middle of a chain. Keep it cheap.
        """

        def tap(v: A) -> A:
            f(v)
            return v

        return self.map(tap)

    # --- Failure handling ---

    def map_error(self, f: Callable[[str], str]) -> Decoder[A]:
        fn = self.fn
        return Decoder(lambda value: fn(value).map_error(f))

    def or_else(self, f: Callable[[str], Decoder[A]]) -> Decoder[A]:
        """On failure, decode the original input again with ``f(error)``."""
        fn = self.fn
        return Decoder(lambda value: fn(value).or_else(lambda e: f(e).fn(value)))

    def else_do(self, f: Callable[[str], object]) -> Decoder[A]:
        fn = self.fn
        return Decoder(lambda value: fn(value).else_do(f))

    # --- Running ---

    def decode_any(self, value: typing.Any) -> Result[A, str]:
        """Run this decoder on an already-parsed value."""
        return self.fn(value)

    def decode_json(self, text: str | bytes | bytearray) -> Result[A, str]:
        """Parse ``text`` as JSON and run this decoder on the result.

        Parse errors come back as a ``Failure`` carrying the parser's
        message, exactly like any other decode error.
        """
        settings = current_settings()
        try:
            if settings.allow_nan:
                value = json.loads(text)
            else:
                value = json.loads(text, parse_constant=_reject_constant)
        except (ValueError, TypeError, RecursionError) as e:
            log.debug("decode_json: parse failed: %s", e)
            return Failure(str(e))
        return self.decode_any(value)

    def to_any_fn(self) -> Callable[[typing.Any], Result[A, str]]:
        """Return ``decode_any`` as a standalone callable."""
        return self.decode_any

    def to_json_fn(self) -> Callable[[str | bytes | bytearray], Result[A, str]]:
        """Return ``decode_json`` as a standalone callable."""
        return self.decode_json
