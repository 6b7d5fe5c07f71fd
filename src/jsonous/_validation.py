"""Internal validation helpers used by decoder constructors.

These checks run once, when a decoder is built. They catch wiring mistakes
(passing a function where a decoder was expected, a bad path element) with a
clear ``TypeError`` instead of letting them surface later as a confusing
decode failure or an exception mid-decode.
"""

from __future__ import annotations

from collections.abc import Iterable
import typing

if typing.TYPE_CHECKING:
    from jsonous.decoder import Decoder


def _is_tuple_of(value: object, typ: type | tuple[type, ...]) -> bool:
    return isinstance(value, tuple) and all(isinstance(v, typ) for v in value)


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _require_decoder(obj: object, field_name: str) -> None:
    from jsonous.decoder import Decoder

    _require(
        condition=isinstance(obj, Decoder),
        message=f"must be a Decoder, got {type(obj).__name__}",
        field_name=field_name,
        exc=TypeError,
    )


def _freeze_decoders(
    decoders: Iterable[object], field_name: str
) -> tuple[Decoder[typing.Any], ...]:
    """Copy ``decoders`` into a tuple, checking every element."""
    _require(
        condition=not isinstance(decoders, (str, bytes)) and isinstance(decoders, Iterable),
        message="must be an iterable of Decoder",
        field_name=field_name,
        exc=TypeError,
    )
    frozen = tuple(decoders)
    for idx, d in enumerate(frozen):
        _require_decoder(d, f"{field_name}[{idx}]")
    return typing.cast("tuple[Decoder[typing.Any], ...]", frozen)


def _freeze_path(path: Iterable[object], field_name: str) -> tuple[str | int, ...]:
    """Copy ``path`` into a tuple of ``str``/``int`` keys."""
    _require(
        condition=not isinstance(path, (str, bytes)) and isinstance(path, Iterable),
        message="must be a sequence of str or int keys",
        field_name=field_name,
        exc=TypeError,
    )
    frozen = tuple(path)
    # bool is an int subclass but never a meaningful key
    _require(
        condition=_is_tuple_of(frozen, (str, int))
        and not any(isinstance(k, bool) for k in frozen),
        message="every key must be a str or int",
        field_name=field_name,
        exc=TypeError,
    )
    return typing.cast("tuple[str | int, ...]", frozen)
