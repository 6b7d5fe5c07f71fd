"""jsonous: composable decoders from untyped JSON data to typed values.

Public API:
    - Decoder: the decoder type and its combinators
    - succeed/fail, string/number/boolean/date: primitive decoders
    - array/field/at/maybe/nullable/one_of/key_value_pairs/dict_of: structural decoders
    - Success/Failure, Just/Nothing: decode outcomes and optional values
    - settings_scope/resolve_settings: boundary settings
"""

from __future__ import annotations

import logging

from jsonous.config import (
    FrozenSettings,
    Settings,
    current_settings,
    resolve_settings,
    settings_scope,
)
from jsonous.decoder import Decoder
from jsonous.errors import ConfigurationError, JsonousError, UnwrapError
from jsonous.maybe import NOTHING, Just, Maybe, Nothing
from jsonous.primitives import (
    array,
    at,
    boolean,
    date,
    dict_of,
    fail,
    field,
    key_value_pairs,
    maybe,
    nullable,
    number,
    one_of,
    string,
    succeed,
)
from jsonous.result import Failure, Result, Success

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("jsonous")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("jsonous").addHandler(logging.NullHandler())

__all__ = [
    "NOTHING",
    "ConfigurationError",
    "Decoder",
    "Failure",
    "FrozenSettings",
    "JsonousError",
    "Just",
    "Maybe",
    "Nothing",
    "Result",
    "Settings",
    "Success",
    "UnwrapError",
    "array",
    "at",
    "boolean",
    "current_settings",
    "date",
    "dict_of",
    "fail",
    "field",
    "key_value_pairs",
    "maybe",
    "nullable",
    "number",
    "one_of",
    "resolve_settings",
    "settings_scope",
    "string",
    "succeed",
]
