from __future__ import annotations

"""Process-wide registry with the built-in controllers, and the compile entry point bound to it."""

from typing import Any

from .engine.compiler import compile_configuration
from .engine.controllers import Controllers
from .kinds import register_builtins

__all__ = ["controllers", "compile_schema"]

controllers = Controllers()
register_builtins(controllers)


def compile_schema(configuration: Any = None, additional: Any = None) -> Any:
    """Compile `configuration` against the process-wide registry.

    A dict gives one schema; a list of dicts gives a MultiSchema that accepts a value when any
    member does (first match wins). `additional` attaches extra attributes to the compiled
    schema(s) before hashing.
    """
    return compile_configuration(controllers, configuration, additional)
