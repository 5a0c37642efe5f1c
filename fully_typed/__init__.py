"""fully_typed: runtime schema engine, public API surface.

Only `fully_typed` and `fully_typed.errors` are public. Everything else is internal.
This module also resolves `__version__` across installs.
"""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from . import errors as errors  # re-export for star-import; noqa: F401
from .engine.compiler import SchemaInstance, compile_configuration
from .engine.controllers import Controllers
from .engine.multi import MultiSchema
from .engine.types import UNDEFINED, ControllerDescriptor, OneOf, Typed
from .errors import ConfigError, DependencyError, ErrorInfo, SchemaValueError, UnknownTypeError
from .schema import compile_schema, controllers


def _version_from_metadata() -> str | None:
    try:
        return _pkg_version("fully-typed")
    except PackageNotFoundError:
        return None


__version__ = _version_from_metadata() or "0.0.0+unknown"

__all__ = [
    "compile_schema",
    "compile_configuration",
    "controllers",
    "Controllers",
    "ControllerDescriptor",
    "SchemaInstance",
    "MultiSchema",
    "UNDEFINED",
    "Typed",
    "OneOf",
    "ConfigError",
    "UnknownTypeError",
    "DependencyError",
    "SchemaValueError",
    "ErrorInfo",
    "errors",
    "__version__",
]
