from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np

from ..engine.util.values import config_error, errish, is_integer, is_real, property_error_message, value_error_message
from ..errors import TYPE, ErrorInfo, ErrorKind

ERRORS = {
    "integer": ErrorKind(
        code="ENINT",
        explanation="The number must be an integer.",
        summary="Number is not an integer.",
    ),
    "max": ErrorKind(
        code="ENMAX",
        explanation="The number is above the allowed maximum.",
        summary="Number too large.",
    ),
    "min": ErrorKind(
        code="ENMIN",
        explanation="The number is below the allowed minimum.",
        summary="Number too small.",
    ),
}


def build(schema: Any, config: dict) -> None:
    maximum = config.get("max")
    if "max" in config and not is_real(maximum):
        raise config_error(property_error_message("max", maximum, "Must be a number."))

    minimum = config.get("min")
    if "min" in config and not is_real(minimum):
        raise config_error(property_error_message("min", minimum, "Must be a number."))

    if minimum is not None and maximum is not None and minimum > maximum:
        raise config_error(property_error_message("min", minimum, f"Must be less than or equal to max ({maximum})."))

    schema.exclusive_max = bool(config.get("exclusive_max", False))
    schema.exclusive_min = bool(config.get("exclusive_min", False))
    schema.integer = bool(config.get("integer", False))
    schema.max = maximum
    schema.min = minimum


def error(schema: Any, value: Any, prefix: str) -> Optional[ErrorInfo]:
    if not is_real(value) or (isinstance(value, (float, np.floating)) and math.isnan(value)):
        return errish(prefix + value_error_message(value, "Expected a number."), TYPE)

    if schema.integer and not is_integer(value):
        return errish(prefix + value_error_message(value, "Expected an integer."), ERRORS["integer"])

    if schema.max is not None and (value >= schema.max if schema.exclusive_max else value > schema.max):
        bound = "less than" if schema.exclusive_max else "less than or equal to"
        return errish(prefix + value_error_message(value, f"Expected a number {bound} {schema.max}."), ERRORS["max"])

    if schema.min is not None and (value <= schema.min if schema.exclusive_min else value < schema.min):
        bound = "greater than" if schema.exclusive_min else "greater than or equal to"
        return errish(prefix + value_error_message(value, f"Expected a number {bound} {schema.min}."), ERRORS["min"])

    return None
