from __future__ import annotations

import re
from typing import Any, Optional

from ..engine.util.values import config_error, errish, is_integer, property_error_message, value_error_message
from ..errors import TYPE, ErrorInfo, ErrorKind

ERRORS = {
    "max": ErrorKind(
        code="ESMAX",
        explanation="The string has too many characters to meet the max length requirement.",
        summary="String too long.",
    ),
    "min": ErrorKind(
        code="ESMIN",
        explanation="The string has too few characters to meet the min length requirement.",
        summary="String too short.",
    ),
    "pattern": ErrorKind(
        code="ESPAT",
        explanation="The string does not match the regular expression pattern.",
        summary="String does not match pattern.",
    ),
}


def build(schema: Any, config: dict) -> None:
    min_length = config.get("min_length", 0)
    if "min_length" in config and (not is_integer(min_length) or min_length < 0):
        raise config_error(property_error_message(
            "min_length", min_length, "Must be an integer that is greater than or equal to zero."))

    max_length = config.get("max_length")
    if "max_length" in config and (not is_integer(max_length) or max_length < min_length):
        raise config_error(property_error_message(
            "max_length", max_length, "Must be an integer that is greater than or equal to the min_length."))

    pattern = config.get("pattern")
    if "pattern" in config and not isinstance(pattern, re.Pattern):
        raise config_error(property_error_message("pattern", pattern, "Must be a compiled regular expression."))

    schema.max_length = int(max_length) if max_length is not None else None
    schema.min_length = int(min_length)
    schema.pattern = pattern


def error(schema: Any, value: Any, prefix: str) -> Optional[ErrorInfo]:
    if not isinstance(value, str):
        return errish(prefix + value_error_message(value, "Expected a string."), TYPE)

    if len(value) < schema.min_length:
        return errish(
            f"{prefix}Invalid string length. Must contain at least {schema.min_length} characters. "
            f"Contains {len(value)}",
            ERRORS["min"],
        )

    if schema.max_length is not None and len(value) > schema.max_length:
        return errish(
            f"{prefix}Invalid string length. Must contain at most {schema.max_length} characters. "
            f"Contains {len(value)}",
            ERRORS["max"],
        )

    if schema.pattern is not None and not schema.pattern.search(value):
        return errish(
            f"{prefix}Invalid string. Does not match required pattern {schema.pattern.pattern!r} with value: {value}",
            ERRORS["pattern"],
        )

    return None
