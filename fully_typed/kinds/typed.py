from __future__ import annotations

"""Root controller: options shared by every schema (default, enum, transform, validator, type)."""

from typing import Any, Optional

from ..engine.types import UNDEFINED
from ..engine.util.values import (
    config_error,
    dedupe_strict,
    errish,
    fresh_default,
    property_error_message,
    strict_index,
    value_error_message,
)
from ..errors import CONFIG, TYPE, ErrorInfo, ErrorKind

ERRORS = {
    "config": CONFIG,
    "enum": ErrorKind(
        code="ETENM",
        explanation="The value does not match any of the specified enum values.",
        summary="Value not in enum.",
    ),
    "type": TYPE,
    "validate": ErrorKind(
        code="ETVLD",
        explanation="The value was run through the validator function supplied in the configuration and did not pass.",
        summary="Did not pass validation.",
    ),
}


def build(schema: Any, config: dict) -> None:
    has_default = "default" in config

    enum = config.get("enum")
    if "enum" in config:
        if not isinstance(enum, (list, tuple)) or len(enum) == 0:
            raise config_error(property_error_message("enum", enum, "Expected a non-empty list."))
        enum = tuple(dedupe_strict(enum))

    transform = config.get("transform")
    if transform is not None and not callable(transform):
        raise config_error(property_error_message("transform", transform, "Expected a function."))

    validator = config.get("validator")
    if validator is not None and not callable(validator):
        raise config_error(property_error_message("validator", validator, "Expected a function."))

    schema.default = config["default"] if has_default else UNDEFINED
    schema.enum = enum
    schema.has_default = has_default
    schema.transform = transform
    schema.type = config["type"]
    schema.validator = validator


def error(schema: Any, value: Any, prefix: str) -> Optional[ErrorInfo]:
    if schema.enum is not None and strict_index(schema.enum, value) == -1:
        expects = "Expected one of: [" + ", ".join(repr(v) for v in schema.enum) + "]"
        return errish(prefix + value_error_message(value, expects), ERRORS["enum"])

    if schema.validator is not None:
        valid = schema.validator(value)
        if not valid or isinstance(valid, str):
            expects = valid if isinstance(valid, str) and valid else ERRORS["validate"].summary
            return errish(prefix + value_error_message(value, expects), ERRORS["validate"])

    return None


def normalize(schema: Any, value: Any) -> Any:
    if schema.has_default and value is UNDEFINED:
        value = fresh_default(schema.default)
    return schema.transform(value) if schema.transform is not None else value
