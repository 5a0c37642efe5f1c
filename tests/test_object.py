from __future__ import annotations

import pytest

from fully_typed import MultiSchema, SchemaInstance, compile_schema
from fully_typed.errors import CONFIG, TYPE, ConfigError, SchemaValueError
from fully_typed.kinds.object import ERRORS


class TestProperties:
    def test_must_be_dict(self):
        with pytest.raises(ConfigError) as ei:
            compile_schema({"type": dict, "properties": None})
        assert ei.value.code == CONFIG.code

    def test_property_cannot_be_number(self):
        with pytest.raises(ConfigError):
            compile_schema({"type": dict, "properties": {"a": 123}})

    def test_property_can_be_none_or_dict(self):
        compile_schema({"type": dict, "properties": {"a": None}})
        compile_schema({"type": dict, "properties": {"a": {}}})

    def test_each_property_is_a_schema(self):
        o = compile_schema({"type": dict, "properties": {"a": {}, "b": None}})
        assert set(o.properties) == {"a", "b"}
        assert isinstance(o.properties["a"], SchemaInstance)

    def test_properties_are_read_only(self):
        o = compile_schema({"type": dict, "properties": {"a": {}}})
        with pytest.raises(TypeError):
            o.properties["b"] = None


class TestAllowNull:
    def test_defaults_to_true(self):
        assert compile_schema({"type": dict}).allow_null is True

    def test_can_be_false(self):
        o = compile_schema({"type": dict, "allow_null": False})
        assert o.allow_null is False
        assert o.error(None).code == ERRORS["null"].code

    def test_none_normalizes_to_none(self):
        assert compile_schema({"type": dict}).normalize(None) is None


class TestRequired:
    def test_can_be_required(self):
        o = compile_schema({"type": dict, "properties": {"x": {"required": True}}})
        assert o.properties["x"].required is True

    def test_can_be_not_required(self):
        o = compile_schema({"type": dict, "properties": {"x": {"required": False}}})
        assert o.properties["x"].required is False

    def test_defaults_to_not_required(self):
        o = compile_schema({"type": dict, "properties": {"x": None}})
        assert o.properties["x"].required is False

    @pytest.mark.parametrize("default", [5, None, 0, False, "", [], "abc"])
    def test_cannot_be_required_and_have_default(self, default):
        with pytest.raises(ConfigError) as ei:
            compile_schema({"type": dict, "properties": {"x": {"required": True, "default": default}}})
        assert ei.value.code == ERRORS["required_default"].code
        assert "Cannot make required and provide a default" in str(ei.value)

    def test_missing_required_property(self):
        o = compile_schema({"type": dict, "properties": {"name": {"required": True}}})
        err = o.error({})
        assert err.code == ERRORS["properties"].code
        assert len(err.errors) == 1
        assert err.errors[0].code == ERRORS["required"].code
        assert err.errors[0].property == "name"


class TestError:
    def test_checks_type(self):
        assert compile_schema({"type": dict}).error(123).code == TYPE.code

    def test_can_be_errorless(self):
        o = compile_schema({"type": dict, "properties": {"x": {"required": True, "type": int}}})
        assert o.error({"x": 5}) is None

    def test_property_errors_carry_property(self):
        o = compile_schema({"type": dict, "properties": {"x": {"type": int}}})
        err = o.error({"x": "hello"})
        assert len(err.errors) == 1
        assert err.errors[0].code == TYPE.code
        assert err.errors[0].property == "x"

    def test_generic_schema_checks_undeclared_keys(self):
        o = compile_schema({"type": dict, "schema": {"type": str}})
        assert o.error({"a": "x", "b": "y"}) is None
        err = o.error({"a": "x", "b": 2})
        assert [e.property for e in err.errors] == ["b"]

    def test_required_then_value_errors_in_order(self):
        o = compile_schema(
            {"type": dict, "properties": {"a": {"required": True}, "b": {"type": int}}}
        )
        err = o.error({"b": "no"})
        assert [(e.property, e.code) for e in err.errors] == [("a", ERRORS["required"].code), ("b", TYPE.code)]


class TestNormalize:
    def test_can_clean_properties(self):
        o = compile_schema({"type": dict, "clean": True, "properties": {"x": {}}})
        assert o.normalize({"x": 5, "y": 10}) == {"x": 5}

    def test_can_keep_all_properties(self):
        o = compile_schema({"type": dict, "clean": False, "properties": {"x": {}}})
        assert o.normalize({"x": 5, "y": 10}) == {"x": 5, "y": 10}

    def test_fills_defaults_without_mutating_input(self):
        o = compile_schema({"type": dict, "properties": {"x": {"default": "foo"}}})
        value = {}
        assert o.normalize(value) == {"x": "foo"}
        assert value == {}

    def test_filled_default_is_a_copy(self):
        o = compile_schema({"type": dict, "properties": {"x": {"default": {"n": [1]}}}})
        o.normalize({})["x"]["n"].append(2)
        assert o.normalize({}) == {"x": {"n": [1]}}
        assert o.properties["x"].default == {"n": [1]}

    def test_normalizes_nested_properties(self):
        o = compile_schema(
            {
                "type": dict,
                "properties": {
                    "name": {"type": str, "transform": str.strip},
                    "tags": {"type": list, "schema": {"type": str, "transform": str.lower}},
                },
            }
        )
        assert o.normalize({"name": " Bob ", "tags": ["A", "b"]}) == {"name": "Bob", "tags": ["a", "b"]}

    def test_invalid_value_raises(self):
        o = compile_schema({"type": dict, "properties": {"x": {"type": int}}})
        with pytest.raises(SchemaValueError) as ei:
            o.normalize({"x": "nope"})
        assert ei.value.code == ERRORS["properties"].code
        assert ei.value.errors[0].property == "x"


def test_person_example():
    schema = compile_schema(
        {
            "type": dict,
            "properties": {
                "name": {"required": True, "type": str, "min_length": 1},
                "age": {"type": int, "min": 0},
                "employed": {"type": bool, "default": True},
            },
        }
    )
    assert schema.normalize({"name": "Bob", "age": 15}) == {"name": "Bob", "age": 15, "employed": True}
    with pytest.raises(SchemaValueError):
        schema.normalize({"age": 15})


def test_multi_variant_property():
    o = compile_schema({"type": dict, "properties": {"x": [{"type": int}, {"type": str}]}})
    assert isinstance(o.properties["x"], MultiSchema)
    assert o.error({"x": 1}) is None
    assert o.error({"x": "a"}) is None
    assert o.error({"x": True}).errors[0].property == "x"
