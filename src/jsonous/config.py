"""Settings schema and resolution for jsonous.

Decoders themselves take no configuration; the few knobs here shape the
boundary operations only:

- how offending values are rendered into diagnostics (``cycle_placeholder``,
  ``max_value_length``)
- how strictly ``decode_json`` parses (``allow_nan``)

Resolution precedence is defaults < ``JSONOUS_*`` environment < overrides.
Explicit resolution (``resolve_settings``, ``settings_scope``) also loads a
``.env`` file and raises on invalid values. The defaults read implicitly by
decoders come from the process environment alone; invalid values there are
logged and ignored, so a decode never fails because of configuration.
Settings are read from an ambient ``ContextVar`` so a ``settings_scope`` in
one thread or task never leaks into another.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any, Final

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from jsonous.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

ENV_PREFIX: Final[str] = "JSONOUS_"
DEFAULT_CYCLE_PLACEHOLDER: Final[str] = "[Cyclical Reference]"

# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Pydantic schema for settings validation and defaults."""

    cycle_placeholder: str = Field(default=DEFAULT_CYCLE_PLACEHOLDER, min_length=1)
    max_value_length: int | None = Field(default=None, ge=1)
    allow_nan: bool = Field(default=False)

    model_config = {"extra": "forbid"}

    @field_validator("max_value_length", mode="before")
    @classmethod
    def normalize_max_value_length(cls, v: Any) -> Any:
        """Map empty strings (e.g. an unset env var) to None."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


# --- Immutable runtime payload ---


@dataclass(frozen=True, slots=True)
class FrozenSettings:
    """Validated, immutable settings consulted at decode time."""

    cycle_placeholder: str = DEFAULT_CYCLE_PLACEHOLDER
    max_value_length: int | None = None
    allow_nan: bool = False


# --- Environment loading ---

_DOTENV_LOADED: bool = False


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    load_dotenv()
    _DOTENV_LOADED = True


def _coerce_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def load_env() -> dict[str, Any]:
    """Read ``JSONOUS_*`` variables with schema-informed coercion.

    Names that are not settings fields are skipped; overrides, not the
    environment, are where unknown keys get rejected.
    """
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        info = Settings.model_fields.get(field_name)
        if info is None:
            log.debug("Ignoring unknown settings variable %s", key)
            continue
        if info.annotation is bool:
            config[field_name] = _coerce_bool(value)
        else:
            config[field_name] = value
    return config


# --- Public resolution API ---


def resolve_settings(overrides: Mapping[str, Any] | None = None) -> FrozenSettings:
    """Resolve settings from defaults, ``.env``, environment and overrides.

    Raises:
        ConfigurationError: If any resolved value fails validation.
    """
    _load_dotenv_once()
    return _validate({**load_env(), **(overrides or {})})


def _validate(merged: Mapping[str, Any]) -> FrozenSettings:
    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        raise ConfigurationError(
            f"Settings validation failed for '{loc}': {msg}",
            hint=f"Check the override or the {ENV_PREFIX}{loc.upper()} environment variable",
        ) from e
    frozen = FrozenSettings(**settings.model_dump())
    log.debug("Resolved settings: %s", frozen)
    return frozen


@cache
def _default_settings() -> FrozenSettings:
    # Read on the decode path: environment only, no .env file, never raises
    try:
        return _validate(load_env())
    except ConfigurationError as e:
        log.warning("Ignoring invalid %s* settings, using defaults: %s", ENV_PREFIX, e)
        return FrozenSettings()


def clear_settings_cache() -> None:
    """Forget the cached env-derived settings so the next read re-resolves."""
    _default_settings.cache_clear()


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[FrozenSettings | None] = contextvars.ContextVar(
    "jsonous_settings", default=None
)


def current_settings() -> FrozenSettings:
    """Return the settings active in this context."""
    ambient = _AMBIENT.get()
    if ambient is not None:
        return ambient
    return _default_settings()


@contextmanager
def settings_scope(
    settings_or_overrides: Mapping[str, Any] | FrozenSettings | None = None,
    **overrides: Any,
) -> Generator[FrozenSettings]:
    """Run a block with specific settings without touching global state.

    Example:
        with settings_scope(max_value_length=80):
            result = decoder.decode_json(text)
    """
    if isinstance(settings_or_overrides, FrozenSettings):
        frozen = settings_or_overrides
    else:
        frozen = resolve_settings({**(settings_or_overrides or {}), **overrides})

    token = _AMBIENT.set(frozen)
    try:
        yield frozen
    finally:
        _AMBIENT.reset(token)
