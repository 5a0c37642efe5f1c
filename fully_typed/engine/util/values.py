from __future__ import annotations

"""Small value helpers shared by the controllers (type predicates, message builders)."""

import copy
import math
from typing import Any, Iterable, List

import numpy as np

from ...errors import CONFIG, ConfigError, ErrorInfo, ErrorKind

__all__ = [
    "is_schema_configuration",
    "is_integer",
    "is_real",
    "strict_equal",
    "strict_index",
    "dedupe_strict",
    "describe",
    "value_error_message",
    "property_error_message",
    "errish",
    "config_error",
    "fresh_default",
]


def is_schema_configuration(x: Any) -> bool:
    """A dict, or a non-empty list/tuple of dicts."""
    if isinstance(x, dict):
        return True
    if isinstance(x, (list, tuple)):
        return len(x) > 0 and all(isinstance(item, dict) for item in x)
    return False


def is_real(x: Any) -> bool:
    """int/float or a numpy integer/floating scalar; bool is not a number here."""
    if isinstance(x, (bool, np.bool_)):
        return False
    return isinstance(x, (int, float, np.integer, np.floating))


def is_integer(x: Any) -> bool:
    if isinstance(x, (bool, np.bool_)):
        return False
    if isinstance(x, (int, np.integer)):
        return True
    if isinstance(x, (float, np.floating)):
        return math.isfinite(float(x)) and float(x).is_integer()
    return False


def strict_equal(a: Any, b: Any) -> bool:
    """Equality that does not conflate 1, 1.0 and True."""
    if type(a) is not type(b):
        return False
    try:
        return bool(a == b)
    except Exception:
        return a is b


def strict_index(items: Iterable[Any], value: Any) -> int:
    for i, item in enumerate(items):
        if strict_equal(item, value):
            return i
    return -1


def dedupe_strict(items: Iterable[Any]) -> List[Any]:
    out: List[Any] = []
    for item in items:
        if strict_index(out, item) == -1:
            out.append(item)
    return out


def describe(value: Any) -> str:
    if isinstance(value, str):
        return repr(value)
    if callable(value) and hasattr(value, "__name__"):
        return f"<callable {value.__name__}>"
    return repr(value)


def value_error_message(value: Any, expects: str) -> str:
    text = f"Invalid value {describe(value)}."
    return f"{text} {expects}" if expects else text


def property_error_message(name: str, value: Any, expects: str) -> str:
    return f"Invalid configuration value for property: {name}. {expects} Received: {describe(value)}"


def errish(message: str, kind: ErrorKind) -> ErrorInfo:
    return ErrorInfo.of(message, kind)


def config_error(message: str, kind: ErrorKind = CONFIG) -> ConfigError:
    return ConfigError(message, kind)


def fresh_default(value: Any) -> Any:
    """Copy container defaults so callers cannot mutate the value held by a schema."""
    if isinstance(value, (list, dict, set)):
        return copy.deepcopy(value)
    return value
