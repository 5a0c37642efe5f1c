from __future__ import annotations

"""Typed error taxonomy (public).

Only `fully_typed` and `fully_typed.errors` are public import roots. Everything else is internal.

Two disjoint families live here:
  * configuration errors, raised while a schema is being built (`ConfigError` and subclasses);
  * value errors, returned as `ErrorInfo` data by `error()` and raised as `SchemaValueError`
    only by `validate()` / `normalize()`.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

__all__ = [
    "ErrorKind",
    "ErrorInfo",
    "FullyTypedError",
    "ConfigError",
    "UnknownTypeError",
    "DependencyError",
    "SchemaValueError",
    "CONFIG",
    "TYPE",
    "MULTI",
    "DEPENDENCY",
    "format_error",
]


@dataclass(frozen=True)
class ErrorKind:
    """Catalog entry: a short code plus the human-facing explanation and summary."""

    code: str
    explanation: str
    summary: str


CONFIG = ErrorKind(
    code="ETCFG",
    explanation="The schema configuration is invalid.",
    summary="Invalid schema configuration.",
)

TYPE = ErrorKind(
    code="ETTYP",
    explanation="The value is not of the expected type.",
    summary="Invalid type.",
)

MULTI = ErrorKind(
    code="ETMLT",
    explanation="None of the possible schemas accepted the value.",
    summary="No matching schema.",
)

DEPENDENCY = ErrorKind(
    code="ETDEP",
    explanation="Other controller definitions still inherit from this definition.",
    summary="Controller has dependents.",
)


@dataclass
class ErrorInfo:
    """A value error reported as data. `errors` holds sub-errors for aggregates."""

    message: str
    code: str
    explanation: str = ""
    summary: str = ""
    errors: List["ErrorInfo"] = field(default_factory=list)
    property: Any = None
    index: Optional[int] = None

    @classmethod
    def of(cls, message: str, kind: ErrorKind) -> "ErrorInfo":
        return cls(message=message, code=kind.code, explanation=kind.explanation, summary=kind.summary)

    def __str__(self) -> str:
        return self.message


class FullyTypedError(Exception):
    """Base class for all typed errors raised by fully_typed."""

    kind: ErrorKind = CONFIG

    def __init__(self, message: str = "", kind: ErrorKind | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind

    @property
    def code(self) -> str:
        return self.kind.code

    @property
    def explanation(self) -> str:
        return self.kind.explanation

    @property
    def summary(self) -> str:
        return self.kind.summary


class ConfigError(FullyTypedError):
    """Schema configuration invalid: bad option values, malformed inheritance, etc."""
    pass


class UnknownTypeError(ConfigError):
    """The `type` of a configuration does not resolve to a registered controller."""
    pass


class DependencyError(ConfigError):
    """A controller cannot be deleted while other controllers inherit from it."""

    kind = DEPENDENCY

    def __init__(self, message: str, dependencies: List[Any]):
        super().__init__(message)
        self.dependencies = list(dependencies)


class SchemaValueError(FullyTypedError):
    """A value failed validation. Raised by validate()/normalize(); error() returns the info instead."""

    def __init__(self, info: ErrorInfo):
        super().__init__(info.message, ErrorKind(info.code, info.explanation, info.summary))
        self.info = info

    @property
    def errors(self) -> List[ErrorInfo]:
        return self.info.errors

    @property
    def index(self) -> Optional[int]:
        return self.info.index

    # last: the name shadows the builtin for the rest of the class body
    @property
    def property(self) -> Any:
        return self.info.property


def format_error(e: BaseException) -> str:
    """Return a short, uniform message like 'ConfigError: detail'."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name
