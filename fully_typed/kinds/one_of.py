from __future__ import annotations

"""`one-of` controller: the multi-variant resolver expressed as a type with its own error code."""

from typing import Any, Optional

from ..engine.multi import first_passing, multi_error
from ..engine.util.values import config_error
from ..errors import ErrorInfo, ErrorKind, SchemaValueError

ERRORS = {
    "one_of": ErrorKind(
        code="EONEO",
        explanation="None of the possible schemas matched the value.",
        summary="No matching schema found.",
    ),
}


def build(schema: Any, config: dict) -> None:
    if "one_of" not in config:
        raise config_error(
            "Invalid configuration. Missing required one-of property: one_of. "
            "Must be a list of schema configurations."
        )
    variants = config["one_of"]
    if not isinstance(variants, (list, tuple)) or not all(isinstance(v, dict) for v in variants):
        raise config_error(
            "Invalid configuration value for property: one_of. Must be a list of schema configurations."
        )
    schema.one_of = tuple(schema._factory(item) for item in variants)


def error(schema: Any, value: Any, prefix: str) -> Optional[ErrorInfo]:
    match, errors = first_passing(schema.one_of, value)
    return None if match is not None else multi_error(errors, prefix, ERRORS["one_of"])


def normalize(schema: Any, value: Any) -> Any:
    match, errors = first_passing(schema.one_of, value)
    if match is None:
        raise SchemaValueError(multi_error(errors, "", ERRORS["one_of"]))
    return match.normalize(value)
