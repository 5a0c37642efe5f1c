from __future__ import annotations

import inspect
from typing import Any, Optional

from ..engine.util.values import config_error, errish, is_integer, property_error_message, value_error_message
from ..errors import TYPE, ErrorInfo, ErrorKind

ERRORS = {
    "max_arguments": ErrorKind(
        code="EFMAX",
        explanation="The function signature specifies more arguments than the allowable max.",
        summary="The function defines too many parameters.",
    ),
    "min_arguments": ErrorKind(
        code="EFMIN",
        explanation="The function signature specifies fewer arguments than the allowable min.",
        summary="The function defines too few parameters.",
    ),
    "named": ErrorKind(
        code="EFNAM",
        explanation="The function must be named.",
        summary="The function must be named.",
    ),
}

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def argument_count(fn: Any) -> Optional[int]:
    """Positional parameters without a default, or None when the signature is not inspectable."""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return None
    return sum(1 for p in params if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty)


def _is_named(fn: Any) -> bool:
    return getattr(fn, "__name__", "") not in ("", "<lambda>")


def build(schema: Any, config: dict) -> None:
    minimum = config.get("min_arguments", 0)
    if "min_arguments" in config and (not is_integer(minimum) or minimum < 0):
        raise config_error(property_error_message("min_arguments", minimum, "Expected a non-negative integer."))

    maximum = config.get("max_arguments")
    if "max_arguments" in config and (not is_integer(maximum) or maximum < minimum):
        raise config_error(property_error_message(
            "max_arguments", maximum, f"Expected an integer greater than or equal to min_arguments ({minimum})."))

    schema.max_arguments = maximum
    schema.min_arguments = minimum
    schema.named = bool(config.get("named", False))


def error(schema: Any, value: Any, prefix: str) -> Optional[ErrorInfo]:
    if not callable(value):
        expected = "Expected a named function." if schema.named else "Expected a function."
        return errish(prefix + value_error_message(value, expected), TYPE)
    if schema.named and not _is_named(value):
        return errish(prefix + value_error_message(value, "Expected a named function."), ERRORS["named"])

    count = argument_count(value)
    if count is None:
        return None

    if count < schema.min_arguments:
        plural = "" if schema.min_arguments == 1 else "s"
        expected = f"Expected the function to have at least {schema.min_arguments} parameter{plural}."
        return errish(prefix + value_error_message(value, expected), ERRORS["min_arguments"])

    if schema.max_arguments is not None and count > schema.max_arguments:
        expected = f"Expected the function to have at most {schema.max_arguments} parameters."
        return errish(prefix + value_error_message(value, expected), ERRORS["max_arguments"])

    return None
