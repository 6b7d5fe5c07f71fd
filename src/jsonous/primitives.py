"""Primitive and structural decoders.

Every decoder here starts by checking the shape of its input; none of them
assume what they will receive. They never raise on bad input: a wrong shape
is reported as a ``Failure`` whose message names what was expected and shows
the offending value.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
import logging
import typing

from jsonous._stringify import stringify
from jsonous._validation import (
    _freeze_decoders,
    _freeze_path,
    _require,
    _require_decoder,
)
from jsonous.decoder import Decoder
from jsonous.maybe import NOTHING, Just, Maybe
from jsonous.result import Failure, Result, Success

log = logging.getLogger(__name__)

_SEQUENCE_TYPES = (list, tuple)


def succeed[A](value: A) -> Decoder[A]:
    """Return a decoder that ignores its input and resolves to ``value``."""
    return Decoder(lambda _: Success(value))


def fail(message: str) -> Decoder[typing.Any]:
    """Return a decoder that ignores its input and fails with ``message``."""
    return Decoder(lambda _: Failure(message))


# --- Scalars ---


def _decode_string(value: typing.Any) -> Result[str, str]:
    if not isinstance(value, str):
        return Failure(f"I expected to find a string but instead I found {stringify(value)}")
    return Success(value)


def _decode_number(value: typing.Any) -> Result[int | float, str]:
    # bool is an int subclass; JSON true/false are not numbers
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return Failure(f"I expected to find a number but instead I found {stringify(value)}")
    return Success(value)


def _decode_boolean(value: typing.Any) -> Result[bool, str]:
    if not isinstance(value, bool):
        return Failure(f"I expected to find a boolean but instead I found {stringify(value)}")
    return Success(value)


def _parse_date(value: typing.Any) -> datetime | None:
    try:
        if isinstance(value, str):
            parsed = datetime.fromisoformat(value)
            return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            # Milliseconds since the Unix epoch
            return datetime.fromtimestamp(value / 1000, tz=UTC)
    except (ValueError, OverflowError, OSError):
        return None
    return None


def _decode_date(value: typing.Any) -> Result[datetime, str]:
    parsed = _parse_date(value)
    if parsed is None:
        return Failure(f"I expected a date but instead I found {stringify(value)}")
    return Success(parsed)


string: Decoder[str] = Decoder(_decode_string)
number: Decoder[int | float] = Decoder(_decode_number)
boolean: Decoder[bool] = Decoder(_decode_boolean)

date: Decoder[datetime] = Decoder(_decode_date)
"""Decode an ISO 8601 string or a millisecond epoch timestamp.

The result is always timezone-aware; strings without an offset are read
as UTC.
"""


# --- Containers ---


def array[A](decoder: Decoder[A]) -> Decoder[list[A]]:
    """Apply ``decoder`` to every element of a list, stopping at the first error."""
    _require_decoder(decoder, "array")
    inner = decoder.fn

    def run(value: typing.Any) -> Result[list[A], str]:
        if not isinstance(value, _SEQUENCE_TYPES):
            return Failure(f"I expected an array but instead I found {stringify(value)}")
        out: list[A] = []
        for idx, item in enumerate(value):
            match inner(item):
                case Success(v):
                    out.append(v)
                case Failure(e):
                    return Failure(f"I found an error in the array at [{idx}]: {e}")
        return Success(out)

    return Decoder(run)


def field[A](name: str, decoder: Decoder[A]) -> Decoder[A]:
    """Decode the value stored under ``name`` in a mapping."""
    _require(
        condition=isinstance(name, str),
        message=f"must be a str, got {type(name).__name__}",
        field_name="field name",
        exc=TypeError,
    )
    _require_decoder(decoder, "field")
    inner = decoder.fn

    def run(value: typing.Any) -> Result[A, str]:
        if not isinstance(value, Mapping) or name not in value:
            return Failure(
                f"I expected to find an object with key '{name}' "
                f"but instead I found {stringify(value)}"
            )
        return inner(value[name]).map_error(
            lambda e: f"I found an error in the field named '{name}' of {stringify(value)}: {e}"
        )

    return Decoder(run)


def _lookup(container: typing.Any, key: str | int) -> typing.Any:
    """Return ``container[key]`` or ``None`` when there is no such entry."""
    if isinstance(container, Mapping):
        if key in container:
            return container[key]
        return container.get(str(key)) if isinstance(key, int) else None
    if isinstance(container, (*_SEQUENCE_TYPES, str)):
        # Strings index by character, like arrays
        if isinstance(key, str):
            if not (key.isascii() and key.isdigit()):
                return None
            key = int(key)
        return container[key] if 0 <= key < len(container) else None
    return None


def at[A](path: Iterable[str | int], decoder: Decoder[A]) -> Decoder[A]:
    """Decode the value found by walking ``path`` into nested mappings, lists and strings.

    Errors from ``decoder`` itself are returned as-is, without path context.
    """
    keys = _freeze_path(path, "at path")
    _require_decoder(decoder, "at")
    inner = decoder.fn

    def run(value: typing.Any) -> Result[A, str]:
        if value is None:
            return Failure(
                "I found an error. Could not apply 'at' path to an undefined or null value."
            )
        current = value
        for idx, key in enumerate(keys):
            current = _lookup(current, key)
            if current is None:
                return Failure(
                    "I found an error in the 'at' path. "
                    f"I could not find path '{stringify(list(keys[: idx + 1]))}' "
                    f"in {stringify(value)}"
                )
        return inner(current)

    return Decoder(run)


# --- Optionality ---


def maybe[A](decoder: Decoder[A]) -> Decoder[Maybe[A]]:
    """Make any decoder optional.

    This decoder never fails. Any failure of ``decoder``, including a value
    of the wrong shape, becomes ``Nothing``, so genuine data errors are
    silently masked. Prefer ``nullable`` when only ``null`` should be
    tolerated::

        maybe(string).decode_any("foo")   # Success(Just("foo"))
        maybe(string).decode_any(None)    # Success(Nothing())
        maybe(string).decode_any(42)      # Success(Nothing())
    """
    _require_decoder(decoder, "maybe")
    inner = decoder.fn

    def run(value: typing.Any) -> Result[Maybe[A], str]:
        return inner(value).cata(
            success=lambda v: Success(Just(v)),
            failure=lambda _: Success(NOTHING),
        )

    return Decoder(run)


def nullable[A](decoder: Decoder[A]) -> Decoder[Maybe[A]]:
    """Decode a value that may be ``null``.

    Unlike ``maybe``, a non-null value that ``decoder`` rejects is still a
    failure::

        nullable(string).decode_any("foo")   # Success(Just("foo"))
        nullable(string).decode_any(None)    # Success(Nothing())
        nullable(string).decode_any(42)      # Failure(...)
    """
    _require_decoder(decoder, "nullable")
    inner = decoder.fn

    def run(value: typing.Any) -> Result[Maybe[A], str]:
        if value is None:
            return Success(NOTHING)
        return inner(value).map(Just)

    return Decoder(run)


# --- Alternatives ---


def one_of[A](decoders: Iterable[Decoder[A]]) -> Decoder[A]:
    """Try each decoder in order; the first success wins."""
    candidates = _freeze_decoders(decoders, "one_of")

    def run(value: typing.Any) -> Result[A, str]:
        if not candidates:
            return Failure("No decoders specified.")
        problems: list[str] = []
        for candidate in candidates:
            match candidate.fn(value):
                case Success() as ok:
                    return ok
                case Failure(e):
                    problems.append(e)
        log.debug("one_of: all %d alternatives failed", len(candidates))
        return Failure("I found the following problems:\n" + "\n".join(problems))

    return Decoder(run)


# --- Key mappings ---


def key_value_pairs[A](decoder: Decoder[A]) -> Decoder[list[tuple[str, A]]]:
    """Decode a mapping into ``(key, value)`` pairs in insertion order.

    Keys are converted to ``str``; values are decoded with ``decoder``.
    """
    _require_decoder(decoder, "key_value_pairs")
    inner = decoder.fn

    def run(value: typing.Any) -> Result[list[tuple[str, A]], str]:
        if not isinstance(value, Mapping):
            return Failure(
                f"Expected to find an object and instead found '{stringify(value)}'"
            )
        pairs: list[tuple[str, A]] = []
        for raw_key, item in value.items():
            key = str(raw_key)
            match inner(item):
                case Success(v):
                    pairs.append((key, v))
                case Failure(e):
                    return Failure(f"Key '{key}' failed to decode: {e}")
        return Success(pairs)

    return Decoder(run)


def dict_of[A](decoder: Decoder[A]) -> Decoder[dict[str, A]]:
    """Decode a mapping into a ``dict`` of decoded values.

    A decoder of last resort: explicit ``field`` decoders usually describe
    the expected shape better. Later duplicate keys overwrite earlier ones.
    """
    return key_value_pairs(decoder).map(dict)
