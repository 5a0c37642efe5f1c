from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ..engine.util.values import (
    config_error,
    errish,
    is_integer,
    is_schema_configuration,
    property_error_message,
    strict_equal,
    value_error_message,
)
from ..errors import TYPE, ErrorInfo, ErrorKind

ERRORS = {
    "items": ErrorKind(
        code="EAITM",
        explanation="One or more items in the array do not match the specified typed definition.",
        summary="One or more invalid array items.",
    ),
    "max": ErrorKind(
        code="EAMAX",
        explanation="The array has too many items to meet the maximum requirement.",
        summary="Too many array items.",
    ),
    "min": ErrorKind(
        code="EAMIN",
        explanation="The array does not have enough items to meet the minimum requirement.",
        summary="Too few array items.",
    ),
    "unique": ErrorKind(
        code="EAUNQ",
        explanation="The items in the array must be unique.",
        summary="Array items must be unique.",
    ),
}


def _items(value: Any) -> Optional[List[Any]]:
    """Lists, tuples and 1-D numpy arrays are arrays; anything else is not."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, np.ndarray) and value.ndim == 1:
        return value.tolist()
    return None


def duplicate_groups(items: List[Any]) -> List[List[int]]:
    """Index groups of strictly-equal items, in order of first occurrence (groups of 2+ only)."""
    hashed: Dict[Tuple[type, Any], List[int]] = {}
    groups: List[Tuple[Any, List[int]]] = []
    for i, item in enumerate(items):
        try:
            key = (type(item), item)
            hash(key)
        except TypeError:
            for first, indexes in groups:
                if strict_equal(first, item):
                    indexes.append(i)
                    break
            else:
                groups.append((item, [i]))
            continue
        if key in hashed:
            hashed[key].append(i)
        else:
            hashed[key] = [i]
            groups.append((item, hashed[key]))
    return [indexes for _, indexes in groups if len(indexes) > 1]


def build(schema: Any, config: dict) -> None:
    min_items = config.get("min_items", 0)
    if "min_items" in config and (not is_integer(min_items) or min_items < 0):
        raise config_error(property_error_message(
            "min_items", min_items, "Must be an integer that is greater than or equal to zero."))

    max_items = config.get("max_items")
    if "max_items" in config and (not is_integer(max_items) or max_items < min_items):
        raise config_error(property_error_message(
            "max_items", max_items, "Must be an integer that is greater than or equal to the min_items."))

    item_schema = None
    if "schema" in config:
        if not is_schema_configuration(config["schema"]):
            raise config_error(property_error_message(
                "schema", config["schema"], "Must be a dict or a list of dicts."))
        item_schema = schema._factory(config["schema"])

    schema.max_items = int(max_items) if max_items is not None else None
    schema.min_items = int(min_items)
    schema.schema = item_schema
    schema.unique_items = bool(config.get("unique_items", False))


def error(schema: Any, value: Any, prefix: str) -> Optional[ErrorInfo]:
    items = _items(value)
    if items is None:
        return errish(prefix + value_error_message(value, "Expected an array."), TYPE)

    if len(items) < schema.min_items:
        return errish(
            f"{prefix}Invalid array length. Must contain at least {schema.min_items} items. Contains {len(items)}",
            ERRORS["min"],
        )

    if schema.max_items is not None and len(items) > schema.max_items:
        return errish(
            f"{prefix}Invalid array length. Must contain at most {schema.max_items} items. Contains {len(items)}",
            ERRORS["max"],
        )

    if schema.unique_items:
        duplicates = duplicate_groups(items)
        if duplicates:
            found = "], [".join(", ".join(str(i) for i in group) for group in duplicates)
            return errish(
                f"{prefix}Invalid array. All items must be unique. Duplicates found at indexes: [{found}]",
                ERRORS["unique"],
            )

    if schema.schema is not None:
        errors = []
        for i, item in enumerate(items):
            err = schema.schema.error(item, f"At index {i}: ")
            if err is not None:
                err.index = i
                errors.append(err)
        if errors:
            count = "One error" if len(errors) == 1 else "Multiple errors"
            info = errish(
                f"{prefix}{count} with items in the array:\n  " + "\n  ".join(e.message for e in errors),
                ERRORS["items"],
            )
            info.errors = errors
            return info

    return None


def normalize(schema: Any, value: Any) -> List[Any]:
    items = _items(value)
    if schema.schema is None:
        return items
    return [schema.schema.normalize(item) for item in items]
