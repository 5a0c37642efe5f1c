from __future__ import annotations

"""Multi-variant ("one of") resolution.

Members are tried in definition order and the first member without an error wins, for both
error() and normalize(). normalize() re-runs the search from the first member instead of
reusing an earlier error() result. When every member fails, the aggregate error keeps every
member's error in order.
"""

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ..errors import MULTI, ErrorInfo, ErrorKind, SchemaValueError
from .types import UNDEFINED
from .util.hashing import hash_sequence

__all__ = ["MultiSchema", "first_passing", "multi_error", "dedupe_by_hash"]


def dedupe_by_hash(schemas: Iterable[Any]) -> List[Any]:
    """Drop schemas whose hash was already seen; first occurrence wins, order preserved."""
    seen = set()
    out = []
    for schema in schemas:
        h = schema.hash()
        if h in seen:
            continue
        seen.add(h)
        out.append(schema)
    return out


def first_passing(schemas: Sequence[Any], value: Any) -> Tuple[Optional[Any], List[ErrorInfo]]:
    """Return (first member accepting value, []) or (None, every member error in order)."""
    errors: List[ErrorInfo] = []
    for schema in schemas:
        err = schema.error(value, "")
        if err is None:
            return schema, []
        errors.append(err)
    return None, errors


def multi_error(errors: List[ErrorInfo], prefix: str = "", kind: ErrorKind = MULTI) -> ErrorInfo:
    message = "All possible schemas have errors:\n  " + "\n  ".join(err.message for err in errors)
    info = ErrorInfo.of((prefix or "") + message, kind)
    info.errors = list(errors)
    return info


class MultiSchema:
    """Ordered, hash-deduplicated set of acceptable schemas."""

    def __init__(self, schemas: Iterable[Any]):
        members: List[Any] = []
        for schema in schemas:
            # nested multi-variants flatten into their leaf members
            members.extend(schema.schemas if isinstance(schema, MultiSchema) else [schema])
        self._schemas = tuple(dedupe_by_hash(members))
        self._hash = hash_sequence(s.hash() for s in self._schemas)

    def __repr__(self) -> str:
        return f"<MultiSchema {len(self._schemas)} variants {self._hash[:12]}>"

    @property
    def schemas(self) -> List[Any]:
        return list(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self):
        return iter(self._schemas)

    # A property is required only if every variant requires it; any variant may supply a default.
    @property
    def required(self) -> bool:
        return bool(self._schemas) and all(getattr(s, "required", False) for s in self._schemas)

    @property
    def has_default(self) -> bool:
        return any(getattr(s, "has_default", False) for s in self._schemas)

    @property
    def default(self) -> Any:
        for s in self._schemas:
            if getattr(s, "has_default", False):
                return s.default
        return UNDEFINED

    def error(self, value: Any = UNDEFINED, prefix: str = "") -> Optional[ErrorInfo]:
        schema, errors = first_passing(self._schemas, value)
        return None if schema is not None else multi_error(errors, prefix)

    def validate(self, value: Any = UNDEFINED, prefix: str = "") -> None:
        err = self.error(value, prefix)
        if err is not None:
            raise SchemaValueError(err)

    def normalize(self, value: Any = UNDEFINED) -> Any:
        schema, errors = first_passing(self._schemas, value)
        if schema is None:
            raise SchemaValueError(multi_error(errors))
        return schema.normalize(value)

    def hash(self) -> str:
        return self._hash

    def to_json(self) -> List[Any]:
        return [s.to_json() for s in self._schemas]
