from __future__ import annotations

"""Schema compiler: controller chain + configuration -> immutable, content-addressed schema.

Steps for one configuration:
  1) copy the configuration (later edits by the caller cannot reach the schema);
  2) default `type` to the base controller and resolve it through the registry;
  3) run every ancestor's build step root-first against the same instance;
  4) attach sidecar attributes supplied by a container (e.g. `required`);
  5) hash the instance's public attributes and freeze it.

A list of configurations compiles to a MultiSchema ("one of").
"""

import functools
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..errors import ConfigError, ErrorInfo, SchemaValueError, UnknownTypeError
from .types import UNDEFINED
from .util.hashing import hash_attributes
from .util.values import fresh_default

__all__ = [
    "SchemaInstance",
    "make_schema_class",
    "build_schema",
    "compile_configuration",
    "render_json",
]

_logger = logging.getLogger(__name__)

DEFAULT_TYPE = "typed"


def render_json(value: Any) -> Any:
    """Introspection form: nested schemas expand, callables and types render as their names."""
    if not isinstance(value, type) and callable(getattr(value, "to_json", None)):
        return value.to_json()
    if isinstance(value, Mapping):
        return {k: render_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [render_json(v) for v in value]
    if value is UNDEFINED:
        return None
    pattern = getattr(value, "pattern", None)
    if isinstance(pattern, str) and hasattr(value, "search"):
        return pattern
    if callable(value):
        return getattr(value, "__name__", None) or "anonymous"
    return value


class SchemaInstance:
    """One fully configured validator. Attributes are attached by the controller build steps.

    Instances are frozen after construction; attribute names starting with "_" are bookkeeping
    and take no part in the hash.
    """

    _definition: Any = None

    def __init__(self, config: Dict[str, Any], factory: Callable[..., Any], extras: Optional[Mapping[str, Any]] = None):
        object.__setattr__(self, "_frozen", False)
        self._factory = factory
        for build in self._definition.builders:
            build(self, config)
        for key, value in (extras or {}).items():
            setattr(self, key, value)
        self._hash = hash_attributes(vars(self))
        self._frozen = True

    def __setattr__(self, key: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} is immutable; cannot set {key!r}")
        object.__setattr__(self, key, value)

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable; cannot delete {key!r}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._hash[:12]}>"

    # ---- public surface -----------------------------------------------------

    def error(self, value: Any = UNDEFINED, prefix: str = "") -> Optional[ErrorInfo]:
        """Run the error pipeline; the first reported error wins, general checks first."""
        prefix = prefix or ""
        for step in self._definition.error_steps:
            err = step(self, value, prefix)
            if err is not None:
                return err
        return None

    def validate(self, value: Any = UNDEFINED, prefix: str = "") -> None:
        err = self.error(value, prefix)
        if err is not None:
            raise SchemaValueError(err)

    def normalize(self, value: Any = UNDEFINED) -> Any:
        if value is UNDEFINED and getattr(self, "has_default", False):
            value = fresh_default(self.default)
        self.validate(value)
        for step in self._definition.normalize_steps:
            value = step(self, value)
        return value

    def hash(self) -> str:
        return self._hash

    def to_json(self) -> Dict[str, Any]:
        options = {k: render_json(v) for k, v in vars(self).items() if not k.startswith("_")}
        kind = vars(self).get("type")
        if callable(kind) or not isinstance(kind, str):
            options["type"] = getattr(kind, "__name__", None) or self._definition.name
        return options

    @property
    def controller(self) -> str:
        return self._definition.name


def make_schema_class(definition: Any) -> type:
    """Per-definition subclass, so schemas of different controllers are distinguishable by type."""
    name = "".join(part.capitalize() for part in definition.name.replace("_", "-").split("-")) + "Schema"
    return type(name, (SchemaInstance,), {"_definition": definition, "__module__": __name__})


def build_schema(registry: Any, configuration: Any = None, extras: Optional[Mapping[str, Any]] = None) -> SchemaInstance:
    if configuration is None:
        configuration = {}
    if not isinstance(configuration, dict):
        raise ConfigError(
            f"If provided, the schema configuration must be a dict. Received: {configuration!r}"
        )
    if extras is not None and not isinstance(extras, Mapping):
        raise ConfigError(f"Additional properties must be a dict. Received: {extras!r}")

    config = dict(configuration)
    if config.get("type") is None:
        config["type"] = DEFAULT_TYPE

    definition = registry.resolve(config["type"])
    if definition is None:
        raise UnknownTypeError(f"Unknown type: {config['type']!r}")

    factory = functools.partial(compile_configuration, registry)
    schema = definition.schema_class(config, factory, extras)
    _logger.debug("schema compiled: controller=%s hash=%s", definition.name, schema.hash())
    return schema


def compile_configuration(registry: Any, configuration: Any = None, additional: Any = None) -> Any:
    """Compile a dict into a SchemaInstance, or a list/tuple of dicts into a MultiSchema."""
    if not isinstance(configuration, (list, tuple)):
        if isinstance(additional, (list, tuple)):
            raise ConfigError(
                "Additional properties cannot be a list when the configuration is not a list of dicts."
            )
        return build_schema(registry, configuration, additional)

    from .multi import MultiSchema

    if additional is None or isinstance(additional, Mapping):
        extras: List[Any] = [additional] * len(configuration)
    else:
        extras = list(additional)
    if len(extras) != len(configuration):
        raise ConfigError(
            "The number of additional properties objects must match the number of configurations."
        )
    return MultiSchema(
        [build_schema(registry, config, extra) for config, extra in zip(configuration, extras)]
    )
