from __future__ import annotations

"""Object controller: per-property schemas, a generic schema for every property, required keys."""

from types import MappingProxyType
from typing import Any, Dict, Optional

from ..engine.merge import REQUIRED_DEFAULT, compile_merged
from ..engine.util.values import config_error, errish, fresh_default, is_schema_configuration, property_error_message, value_error_message
from ..errors import TYPE, ErrorInfo, ErrorKind

ERRORS = {
    "null": ErrorKind(
        code="EONUL",
        explanation="The object cannot be None.",
        summary="The object cannot be None.",
    ),
    "properties": ErrorKind(
        code="EOPRP",
        explanation="One or more properties in the object have errors.",
        summary="One or more errors in properties.",
    ),
    "required": ErrorKind(
        code="EOREQ",
        explanation="A required property has not been assigned a value.",
        summary="Missing required property value.",
    ),
    "required_default": REQUIRED_DEFAULT,
}


def build(schema: Any, config: dict) -> None:
    properties = config.get("properties", {})
    if "properties" in config and not isinstance(properties, dict):
        raise config_error(property_error_message("properties", properties, "Must be a dict."))

    generic = config.get("schema")
    if "schema" in config and not is_schema_configuration(generic):
        raise config_error(property_error_message("schema", generic, "Must be a dict or a list of dicts."))

    compiled: Dict[str, Any] = {}
    for key, options in properties.items():
        if options is None:
            options = {}
        if not is_schema_configuration(options):
            raise config_error(f"Invalid configuration for property: {key}. Must be a dict or a list of dicts.")
        compiled[key] = compile_merged(key, generic, options, schema._factory)

    schema.allow_null = bool(config.get("allow_null", True))
    schema.clean = bool(config.get("clean", False))
    schema.properties = MappingProxyType(compiled)
    schema.schema = compile_merged("schema", None, generic, schema._factory) if generic is not None else None


def error(schema: Any, value: Any, prefix: str) -> Optional[ErrorInfo]:
    if value is None:
        if not schema.allow_null:
            return errish(prefix + "Object cannot be None.", ERRORS["null"])
        return None

    if not isinstance(value, dict):
        return errish(prefix + value_error_message(value, "Expected an object."), TYPE)

    errors = []
    for key, prop in schema.properties.items():
        if prop.required and key not in value:
            err = errish(f"Missing required value for property: {key}", ERRORS["required"])
            err.property = key
            errors.append(err)

    for key, item in value.items():
        prop = schema.properties.get(key, schema.schema)
        if prop is None:
            continue
        err = prop.error(item, f"At property {key}: ")
        if err is not None:
            err.property = key
            errors.append(err)

    if errors:
        count = "One error with property" if len(errors) == 1 else "Multiple errors with properties"
        info = errish(
            f"{prefix}{count} in the object:\n  " + "\n  ".join(e.message for e in errors),
            ERRORS["properties"],
        )
        info.errors = errors
        return info

    return None


def normalize(schema: Any, value: Any) -> Any:
    if value is None:
        return None

    result: Dict[Any, Any] = {}
    for key, item in value.items():
        if key in schema.properties:
            result[key] = schema.properties[key].normalize(item)
        elif not schema.clean:
            result[key] = item

    for key, prop in schema.properties.items():
        if key not in value and prop.has_default:
            result[key] = prop.normalize(fresh_default(prop.default))

    return result
