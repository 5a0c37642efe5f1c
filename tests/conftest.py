# tests/conftest.py
from __future__ import annotations

import pytest

from fully_typed import Controllers, compile_configuration
from fully_typed.kinds import register_builtins


@pytest.fixture
def registry() -> Controllers:
    """A private registry with the built-in controllers, so tests can define/delete freely."""
    reg = Controllers()
    register_builtins(reg)
    return reg


@pytest.fixture
def compile_with(registry):
    """compile_configuration bound to the private registry."""

    def _compile(configuration=None, additional=None):
        return compile_configuration(registry, configuration, additional)

    return _compile
