from __future__ import annotations

"""Container merge engine.

Reconciles a per-property ("specific") configuration with a container-wide ("generic") one.
Either side may be a single dict or a list of dicts (a multi-variant definition):

  dict  x dict  -> one shallow merge, specific keys win
  list  x dict  -> one merge per element of the list side
  list  x list  -> Cartesian product, outer loop over specific, inner over generic

`required` belongs to the container, not to the leaf controller, so it is lifted out of every
merged candidate and attached to the compiled schema as a sidecar attribute. Candidates are
compiled, deduplicated by hash (first occurrence wins) and returned as one schema or a
MultiSchema.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from ..errors import ConfigError, ErrorKind
from .multi import MultiSchema, dedupe_by_hash

__all__ = ["merge_schemas", "merge_configs", "compile_merged", "REQUIRED_DEFAULT"]

_logger = logging.getLogger(__name__)

Config = Dict[str, Any]
Configs = Union[Config, List[Config]]

REQUIRED_DEFAULT = ErrorKind(
    code="EORDF",
    explanation="A property cannot be required and provide a default value at the same time.",
    summary="Required property with default.",
)


def merge_schemas(general: Optional[Config], specific: Optional[Config] = None) -> Config:
    merged: Config = dict(general or {})
    merged.update(specific or {})
    return merged


def merge_configs(generic: Optional[Configs], specific: Optional[Configs]) -> Configs:
    """Merge per the table in the module docstring. Returns a dict or a list of dicts."""
    generic_many = isinstance(generic, (list, tuple))
    specific_many = isinstance(specific, (list, tuple))

    if not generic_many and not specific_many:
        return merge_schemas(generic, specific)
    if not generic_many:
        return [merge_schemas(generic, item) for item in specific]
    if not specific_many:
        return [merge_schemas(item, specific) for item in generic]
    return [merge_schemas(g, s) for s in specific for g in generic]


def _check_required_default(key: Any, schema: Any) -> None:
    if getattr(schema, "required", False) and getattr(schema, "has_default", False):
        raise ConfigError(
            f"Invalid configuration for property: {key}. Cannot make required and provide a default value.",
            REQUIRED_DEFAULT,
        )


def compile_merged(
    key: Any,
    generic: Optional[Configs],
    specific: Optional[Configs],
    factory: Callable[..., Any],
) -> Any:
    """Merge, compile every candidate with its `required` sidecar, and dedupe by hash."""
    merged = merge_configs(generic, specific)
    candidates = merged if isinstance(merged, list) else [merged]

    schemas: List[Any] = []
    for candidate in candidates:
        config = dict(candidate)
        required = bool(config.pop("required", False))
        schema = factory(config, {"required": required})
        _check_required_default(key, schema)
        schemas.append(schema)

    unique = dedupe_by_hash(schemas)
    if len(unique) != len(schemas):
        _logger.debug(
            "property %r: %d merge candidates, %d duplicates collapsed",
            key,
            len(schemas),
            len(schemas) - len(unique),
        )
    return unique[0] if len(unique) == 1 else MultiSchema(unique)
