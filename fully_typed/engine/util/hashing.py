from __future__ import annotations

"""Content hashing for compiled schemas.

Canonical form (stable across processes):
  • attributes whose names start with "_" are bookkeeping and skipped;
  • keys are sorted;
  • callables hash by source text (inspect.getsource), or module.qualname when no source exists,
    plus a digest of their code object; getsource returns whole lines, so two lambdas sharing
    a line are told apart by their bytecode and constants;
  • everything else is compact sorted-key JSON of a canonical tree where nested schemas
    collapse to their own hash, compiled patterns to (pattern, flags), enum members to repr,
    numpy scalars to their Python value and UNDEFINED to a marker;
  • one "name=token" line per attribute, SHA-256 hex over the joined lines.
"""

import enum
import hashlib
import inspect
import json
import re
from typing import Any, Iterable, Mapping

import numpy as np

from ..types import UNDEFINED

__all__ = ["stable_json_dumps", "function_source", "code_digest", "function_token", "canonical", "attribute_token", "hash_attributes", "hash_sequence"]


def stable_json_dumps(obj: Any) -> str:
    """Deterministic JSON: sorted keys, UTF-8, compact separators."""
    return json.dumps(obj, sort_keys=True, ensure_ascii=False, separators=(",", ":"))


def function_source(fn: Any) -> str:
    try:
        return inspect.getsource(fn).strip()
    except (OSError, TypeError):
        module = getattr(fn, "__module__", None) or ""
        name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
        return f"{module}.{name}" if module else name


def code_digest(code: Any) -> str:
    """SHA-256 over bytecode, names and constants (nested code objects included)."""
    parts = [code.co_code.hex(), repr(code.co_names), repr(code.co_varnames)]
    for const in code.co_consts:
        if inspect.iscode(const):
            parts.append(code_digest(const))
        elif isinstance(const, frozenset):
            parts.append(repr(sorted(repr(c) for c in const)))
        else:
            parts.append(repr(const))
    return hashlib.sha256("\x1f".join(parts).encode("utf-8")).hexdigest()


def function_token(fn: Any) -> str:
    code = getattr(fn, "__code__", None)
    source = function_source(fn)
    return f"{source}#{code_digest(code)}" if code is not None else source


def _is_schema(value: Any) -> bool:
    return callable(getattr(value, "hash", None)) and callable(getattr(value, "error", None))


def canonical(value: Any) -> Any:
    """Reduce a value to a JSON-serializable tree with one representation per kind."""
    if value is UNDEFINED:
        return {"$undefined": True}
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, np.generic):
        return canonical(value.item())
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, enum.Enum):
        return {"$enum": repr(value)}
    if _is_schema(value):
        return {"$schema": value.hash()}
    if isinstance(value, re.Pattern):
        return {"$pattern": value.pattern, "flags": int(value.flags)}
    if isinstance(value, Mapping):
        return {str(k): canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonical(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return {"$set": sorted(stable_json_dumps(canonical(v)) for v in value)}
    if isinstance(value, np.ndarray):
        return [canonical(v) for v in value.tolist()]
    if callable(value):
        return {"$fn": function_token(value)}
    return {"$repr": repr(value)}


def attribute_token(value: Any) -> str:
    if callable(value) and not _is_schema(value) and not isinstance(value, enum.Enum):
        return function_token(value)
    return stable_json_dumps(canonical(value))


def hash_attributes(attrs: Mapping[str, Any]) -> str:
    lines = [
        f"{key}={attribute_token(attrs[key])}"
        for key in sorted(attrs)
        if not key.startswith("_")
    ]
    return hashlib.sha256("\n".join(lines).encode("utf-8")).hexdigest()


def hash_sequence(hashes: Iterable[str]) -> str:
    return hashlib.sha256("".join(hashes).encode("utf-8")).hexdigest()
