from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

__all__ = ["UNDEFINED", "Typed", "OneOf", "ErrorStep", "NormalizeStep", "ControllerDescriptor"]


class _Undefined:
    """Marker for "no value supplied". Distinct from None, which is a real value."""

    _instance: Optional["_Undefined"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "undefined"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


class _AliasKey:
    """Opaque, identity-hashed alias key for controllers without a natural Python type."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"


Typed = _AliasKey("typed")
OneOf = _AliasKey("one-of")

ErrorStep = Callable[[Any, Any, str], Any]
NormalizeStep = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class ControllerDescriptor:
    """Read-only view of a registered controller, as returned by Controllers.get()/list()."""

    aliases: Tuple[Any, ...]
    builder: Callable[..., Any]
    inherits: Tuple[Any, ...]
    schema_class: type
    error: Optional[ErrorStep] = None
    normalize: Optional[NormalizeStep] = None
    chain: Tuple[str, ...] = field(default=())
