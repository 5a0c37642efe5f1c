from __future__ import annotations

"""Symbols are enum members: named, identity-compared constants."""

import enum
from typing import Any, Optional

from ..engine.util.values import errish, value_error_message
from ..errors import TYPE, ErrorInfo


def build(schema: Any, config: dict) -> None:
    pass


def error(schema: Any, value: Any, prefix: str) -> Optional[ErrorInfo]:
    if not isinstance(value, enum.Enum):
        return errish(prefix + value_error_message(value, "Expected a symbol (enum member)."), TYPE)
    return None
