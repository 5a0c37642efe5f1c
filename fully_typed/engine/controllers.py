from __future__ import annotations

"""Controller registry.

A controller is one layer of schema behavior: a build step that validates and attaches its own
options, plus optional error-check and normalize steps. Controllers are registered under any
number of alias keys (strings, Python types, or opaque objects) and may inherit from controllers
that are already registered.

Lifecycle rules:
  • an alias maps to at most one live definition; redefining an alias fails;
  • parents must be defined before children;
  • a definition cannot be deleted while another definition inherits from it.

Registration is expected to happen once at startup; define/delete take a writer lock so that a
multi-threaded host cannot interleave two mutations. Reads take no lock.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..errors import ConfigError, DependencyError
from .compiler import make_schema_class
from .types import ControllerDescriptor, ErrorStep, NormalizeStep

__all__ = ["Controllers"]

_logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _Definition:
    aliases: Tuple[Any, ...]
    builder: Callable[..., Any]
    inherits: Tuple[Any, ...]
    error: Optional[ErrorStep]
    normalize: Optional[NormalizeStep]
    chain: List["_Definition"] = field(default_factory=list)
    schema_class: Optional[type] = None

    @property
    def name(self) -> str:
        for alias in self.aliases:
            if isinstance(alias, str):
                return alias
        return "anonymous"

    @property
    def builders(self) -> List[Callable[..., Any]]:
        return [d.builder for d in self.chain]

    @property
    def error_steps(self) -> List[ErrorStep]:
        return [d.error for d in self.chain if d.error is not None]

    @property
    def normalize_steps(self) -> List[NormalizeStep]:
        return [d.normalize for d in self.chain if d.normalize is not None]


def _describe(defn: _Definition) -> ControllerDescriptor:
    return ControllerDescriptor(
        aliases=tuple(defn.aliases),
        builder=defn.builder,
        inherits=tuple(defn.inherits),
        schema_class=defn.schema_class,
        error=defn.error,
        normalize=defn.normalize,
        chain=tuple(d.name for d in defn.chain),
    )


def _as_alias_list(aliases: Any) -> List[Any]:
    if isinstance(aliases, (list, tuple)):
        return list(aliases)
    return [aliases]


class Controllers:
    """Process-wide catalog mapping alias keys to controller definitions."""

    def __init__(self) -> None:
        self._store: Dict[Any, _Definition] = {}
        self._dependents: Dict[_Definition, List[_Definition]] = {}
        self._lock = threading.Lock()

    # ---- mutation ---------------------------------------------------------

    def define(
        self,
        aliases: Any,
        builder: Callable[..., Any],
        inherits: Iterable[Any] = (),
        *,
        error: Optional[ErrorStep] = None,
        normalize: Optional[NormalizeStep] = None,
    ) -> ControllerDescriptor:
        """Register a controller under every alias in `aliases`.

        `builder(schema, config)` attaches the controller's options to a schema under construction.
        `error(schema, value, prefix)` and `normalize(schema, value)` are the controller's own
        steps; the compiled schema runs every ancestor's steps root-first.
        """
        alias_list = _as_alias_list(aliases)
        if not alias_list:
            raise ConfigError("A controller needs at least one alias.")
        if not callable(builder):
            raise ConfigError(f"Controller must be callable. Received: {builder!r}")
        if not isinstance(inherits, (list, tuple)):
            raise ConfigError("Controller inherits must be a list.")
        for name, step in (("error", error), ("normalize", normalize)):
            if step is not None and not callable(step):
                raise ConfigError(f"Controller {name} step must be callable. Received: {step!r}")

        with self._lock:
            for alias in alias_list:
                try:
                    hash(alias)
                except TypeError:
                    raise ConfigError(f"Controller alias must be hashable. Received: {alias!r}") from None
                if alias in self._store:
                    raise ConfigError(f"The specified alias is already in use: {alias!r}")
            for parent in inherits:
                if not self._has(parent):
                    raise ConfigError(f"Cannot inherit from undefined controller: {parent!r}")

            defn = _Definition(
                aliases=tuple(alias_list),
                builder=builder,
                inherits=tuple(inherits),
                error=error,
                normalize=normalize,
            )
            defn.chain = self._resolve_chain(defn)
            defn.schema_class = make_schema_class(defn)

            for alias in alias_list:
                self._store[alias] = defn
            for parent in inherits:
                self._dependents.setdefault(self._store[parent], []).append(defn)

        _logger.debug(
            "controller defined: aliases=%r chain=%s",
            defn.aliases,
            "/".join(d.name for d in defn.chain),
        )
        return _describe(defn)

    def delete(self, alias: Any) -> None:
        """Remove the definition registered under `alias` (and all of its other aliases).

        Unknown aliases are a no-op. Raises DependencyError while other definitions inherit from it.
        """
        with self._lock:
            if not self._has(alias):
                return
            defn = self._store[alias]
            dependents = self._dependents.get(defn) or []
            if dependents:
                raise DependencyError(
                    "Cannot delete controller definition due to dependencies on this definition.",
                    [_describe(d) for d in dependents],
                )

            for key in defn.aliases:
                self._store.pop(key, None)
            for parent in defn.inherits:
                parent_defn = self._store.get(parent)
                items = self._dependents.get(parent_defn) if parent_defn is not None else None
                if items and defn in items:
                    items.remove(defn)
                    if not items:
                        del self._dependents[parent_defn]

        _logger.debug("controller deleted: aliases=%r", defn.aliases)

    # ---- reads ------------------------------------------------------------

    def get(self, alias: Any) -> Optional[ControllerDescriptor]:
        defn = self.resolve(alias)
        return _describe(defn) if defn is not None else None

    def has(self, alias: Any) -> bool:
        return self._has(alias)

    __contains__ = has

    def list(self) -> List[ControllerDescriptor]:
        """Every live definition exactly once, in registration order."""
        seen: Dict[_Definition, None] = {}
        for defn in self._store.values():
            seen.setdefault(defn, None)
        return [_describe(d) for d in seen]

    def resolve(self, alias: Any) -> Optional[_Definition]:
        """Internal lookup returning the live definition (used by the compiler)."""
        try:
            return self._store.get(alias)
        except TypeError:
            return None

    # ---- helpers ----------------------------------------------------------

    def _has(self, alias: Any) -> bool:
        try:
            return alias in self._store
        except TypeError:
            return False

    def _resolve_chain(self, defn: _Definition) -> List[_Definition]:
        chain: List[_Definition] = []
        for parent in defn.inherits:
            for ancestor in self._store[parent].chain:
                if ancestor not in chain:
                    chain.append(ancestor)
        chain.append(defn)
        return chain
