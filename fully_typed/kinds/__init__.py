"""Built-in controllers. `register_builtins` installs them into a registry."""
from __future__ import annotations

import enum
import types

from ..engine.types import OneOf, Typed
from . import array, boolean, function, number, object, one_of, string, symbol, typed

__all__ = ["register_builtins"]


def register_builtins(registry) -> None:
    registry.define(["typed", Typed], typed.build, error=typed.error, normalize=typed.normalize)
    registry.define(["array", list, tuple], array.build, ["typed"], error=array.error, normalize=array.normalize)
    registry.define(["boolean", bool], boolean.build, ["typed"], error=boolean.error)
    registry.define(["function", types.FunctionType], function.build, ["typed"], error=function.error)
    registry.define(["number", int, float], number.build, ["typed"], error=number.error)
    registry.define(["object", dict], object.build, ["typed"], error=object.error, normalize=object.normalize)
    registry.define(["one-of", OneOf], one_of.build, ["typed"], error=one_of.error, normalize=one_of.normalize)
    registry.define(["string", str], string.build, ["typed"], error=string.error)
    registry.define(["symbol", enum.Enum], symbol.build, ["typed"], error=symbol.error)
