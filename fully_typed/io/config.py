from __future__ import annotations

"""Load schema configurations from YAML files.

YAML cannot carry callables or compiled patterns, so files use string type aliases
("number", "object", ...) and `pattern` strings, which are compiled here.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict

import yaml

from ..engine.compiler import compile_configuration
from ..errors import ConfigError
from ..schema import controllers

__all__ = ["load_schema_config", "load_schema", "load_schema_catalog"]

_logger = logging.getLogger(__name__)


# ---- small helpers --------------------------------------------------------

def _compile_patterns(node: Any, path: str) -> Any:
    """
    Return a copy of a schema node (a mapping, or a list of mappings) with its `pattern`
    compiled. Only positions that hold schema nodes are visited: `properties` values,
    `schema` and `one_of` entries. Data such as `default` or `enum` is left as written.
    """
    if isinstance(node, list):
        return [_compile_patterns(item, f"{path}[{i}]") for i, item in enumerate(node)]
    if not isinstance(node, dict):
        return node

    out: Dict[Any, Any] = dict(node)
    where = f"{path}.pattern" if path else "pattern"
    value = node.get("pattern")
    if isinstance(value, str):
        try:
            out["pattern"] = re.compile(value)
        except re.error as e:
            raise ConfigError(f"{where}: invalid regular expression {value!r}: {e}") from e

    properties = node.get("properties")
    if isinstance(properties, dict):
        out["properties"] = {
            key: _compile_patterns(options, f"{path}.properties.{key}" if path else f"properties.{key}")
            for key, options in properties.items()
        }
    for key in ("schema", "one_of"):
        if key in node:
            out[key] = _compile_patterns(node[key], f"{path}.{key}" if path else key)
    return out


def _read_yaml(path: str | Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e
    _logger.debug("schema config loaded: path=%s", path)
    return {} if data is None else data


# ---- loaders --------------------------------------------------------------

def load_schema_config(path: str | Path) -> Any:
    """
    Read one schema configuration (a mapping, or a list of mappings for "one of").
    An empty document is the empty configuration.
    """
    data = _read_yaml(path)
    if not isinstance(data, (dict, list)):
        raise ConfigError(f"{path}: schema configuration must be a mapping or a list, got {type(data).__name__}")
    return _compile_patterns(data, "")


def load_schema(path: str | Path, registry: Any = None) -> Any:
    """Load and compile a schema configuration file against `registry` (process-wide by default)."""
    return compile_configuration(registry if registry is not None else controllers, load_schema_config(path))


def load_schema_catalog(path: str | Path, registry: Any = None) -> Dict[str, Any]:
    """
    Read a mapping of name -> configuration and compile every entry.
    Returns a dict in document order.
    """
    data = _read_yaml(path)
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: schema catalog must be a mapping of name to configuration")
    reg = registry if registry is not None else controllers
    catalog: Dict[str, Any] = {}
    for name, config in data.items():
        catalog[str(name)] = compile_configuration(reg, _compile_patterns(config, str(name)))
    return catalog
