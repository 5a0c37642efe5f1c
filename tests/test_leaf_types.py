from __future__ import annotations

import enum
import re

import numpy as np
import pytest

from fully_typed import compile_schema
from fully_typed.errors import CONFIG, TYPE, ConfigError
from fully_typed.kinds import function as function_kind
from fully_typed.kinds import number as number_kind
from fully_typed.kinds import string as string_kind


class Color(enum.Enum):
    RED = 1
    BLUE = 2


# ---- string ---------------------------------------------------------------

@pytest.mark.parametrize(
    "config",
    [
        {"min_length": -1},
        {"max_length": -1},
        {"min_length": 1.5},
        {"min_length": 1, "max_length": 0},
        {"pattern": "abc"},
    ],
)
def test_string_rejects_bad_options(config):
    with pytest.raises(ConfigError) as ei:
        compile_schema({"type": str, **config})
    assert ei.value.code == CONFIG.code


@pytest.mark.parametrize(
    "config",
    [
        {"min_length": 0},
        {"max_length": 0},
        {"min_length": 1, "max_length": 1},
        {"min_length": 1, "max_length": 3},
        {"pattern": re.compile("abc")},
    ],
)
def test_string_accepts_good_options(config):
    compile_schema({"type": "string", **config})


def test_string_errors():
    assert compile_schema({"type": str}).error("abc") is None
    assert compile_schema({"type": str}).error(123).code == TYPE.code
    assert compile_schema({"type": str, "max_length": 2}).error("abc").code == string_kind.ERRORS["max"].code
    assert compile_schema({"type": str, "min_length": 1}).error("").code == string_kind.ERRORS["min"].code
    s = compile_schema({"type": str, "pattern": re.compile("^a")})
    assert s.error("b").code == string_kind.ERRORS["pattern"].code
    assert s.error("abc") is None


# ---- number ---------------------------------------------------------------

@pytest.mark.parametrize(
    "config",
    [
        {"max": "abc"},
        {"min": "abc"},
        {"min": True},
        {"min": 1, "max": 0},
    ],
)
def test_number_rejects_bad_options(config):
    with pytest.raises(ConfigError) as ei:
        compile_schema({"type": "number", **config})
    assert ei.value.code == CONFIG.code


def test_number_accepts_good_options():
    compile_schema({"type": float, "max": 0})
    compile_schema({"type": float, "min": 0})
    compile_schema({"type": float, "min": 0, "max": 1})
    compile_schema({"type": float, "min": np.float32(0.5)})


def test_number_errors():
    assert compile_schema({"type": int}).error(1) is None
    assert compile_schema({"type": int}).error("hello").code == TYPE.code
    assert compile_schema({"type": int}).error(True).code == TYPE.code
    assert compile_schema({"type": int}).error(float("nan")).code == TYPE.code
    assert compile_schema({"type": int, "integer": True}).error(2.1).code == number_kind.ERRORS["integer"].code
    assert compile_schema({"type": int, "integer": True}).error(2.0) is None
    assert compile_schema({"type": int, "max": 1}).error(2).code == number_kind.ERRORS["max"].code
    assert compile_schema({"type": int, "min": 1}).error(0).code == number_kind.ERRORS["min"].code
    assert compile_schema({"type": int, "max": 0}).error(0) is None
    assert compile_schema({"type": int, "min": 0}).error(0) is None


def test_number_exclusive_bounds():
    assert compile_schema({"type": int, "exclusive_max": True, "max": 0}).error(0).code == number_kind.ERRORS["max"].code
    assert compile_schema({"type": int, "exclusive_min": True, "min": 0}).error(0).code == number_kind.ERRORS["min"].code


def test_number_accepts_numpy_scalars():
    s = compile_schema({"type": "number", "min": 0, "integer": True})
    assert s.error(np.int64(3)) is None
    assert s.error(np.float64(3.0)) is None
    assert s.error(np.float64(3.5)).code == number_kind.ERRORS["integer"].code
    assert s.error(np.bool_(True)).code == TYPE.code


def test_number_huge_int_is_a_number():
    assert compile_schema({"type": int}).error(10 ** 400) is None


# ---- boolean / symbol -----------------------------------------------------

def test_boolean():
    s = compile_schema({"type": bool})
    assert s.error(True) is None
    assert s.error(np.bool_(False)) is None
    assert s.error(1).code == TYPE.code
    assert s.error("true").code == TYPE.code


def test_symbol_is_an_enum_member():
    s = compile_schema({"type": "symbol"})
    assert s.error(Color.RED) is None
    assert s.error(1).code == TYPE.code
    assert compile_schema({"type": enum.Enum}).controller == "symbol"


def test_symbol_with_enum_option():
    s = compile_schema({"type": "symbol", "enum": [Color.RED]})
    assert s.error(Color.RED) is None
    assert s.error(Color.BLUE).code == "ETENM"


# ---- function -------------------------------------------------------------

def two(a, b):
    pass


def one_with_default(a, b=1):
    pass


@pytest.mark.parametrize(
    "config",
    [
        {"min_arguments": -1},
        {"min_arguments": 1.5},
        {"min_arguments": "1"},
        {"max_arguments": -1},
        {"max_arguments": 1.5},
        {"max_arguments": "1"},
        {"min_arguments": 2, "max_arguments": 1},
    ],
)
def test_function_rejects_bad_options(config):
    with pytest.raises(ConfigError) as ei:
        compile_schema({"type": "function", **config})
    assert ei.value.code == CONFIG.code


def test_function_errors():
    assert compile_schema({"type": "function"}).error(two) is None
    assert compile_schema({"type": "function"}).error("").code == TYPE.code
    assert compile_schema({"type": "function", "named": True}).error(lambda: None).code == function_kind.ERRORS["named"].code
    assert compile_schema({"type": "function", "named": True}).error(two) is None
    assert compile_schema({"type": "function", "min_arguments": 1}).error(lambda: None).code == function_kind.ERRORS["min_arguments"].code
    assert compile_schema({"type": "function", "max_arguments": 0}).error(lambda a: None).code == function_kind.ERRORS["max_arguments"].code


def test_function_argument_count_ignores_defaults():
    assert function_kind.argument_count(two) == 2
    assert function_kind.argument_count(one_with_default) == 1
    assert function_kind.argument_count(lambda *args, **kw: None) == 0
