from __future__ import annotations

from typing import Any, Optional

import numpy as np

from ..engine.util.values import errish, value_error_message
from ..errors import TYPE, ErrorInfo


def build(schema: Any, config: dict) -> None:
    pass


def error(schema: Any, value: Any, prefix: str) -> Optional[ErrorInfo]:
    if not isinstance(value, (bool, np.bool_)):
        return errish(prefix + value_error_message(value, "Expected a boolean."), TYPE)
    return None
