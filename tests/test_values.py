"""Tests for proto_templates.values."""

import dataclasses

import pytest

from proto_templates.values import VObject, VText


class TestVText:
    def test_str(self):
        assert str(VText("hello")) == "hello"

    def test_equality(self):
        assert VText("a") == VText("a")
        assert VText("a") != VText("b")

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            VText("a").value = "b"

    def test_to_data(self):
        assert VText("x").to_data() == "x"


class TestVObject:
    def test_mapping_access(self):
        o = VObject({"a": VText("1"), "b": VText("2")})
        assert o["a"] == VText("1")
        assert "b" in o
        assert "c" not in o
        assert len(o) == 2
        assert list(o) == ["a", "b"]
        assert o.get("c") is None

    def test_properties_are_read_only(self):
        o = VObject({"a": VText("1")})
        with pytest.raises(TypeError):
            o.properties["a"] = VText("2")

    def test_source_dict_is_copied(self):
        source = {"a": VText("1")}
        o = VObject(source)
        source["b"] = VText("2")
        assert "b" not in o

    def test_equality_ignores_identity(self):
        assert VObject({"a": VText("1")}) == VObject({"a": VText("1")})
        assert VObject({"a": VText("1")}) != VObject({"a": VText("2")})
        assert VObject() != VObject(unnamed=(VText("x"),))

    def test_str(self):
        o = VObject({"t": VText("Hi"), "n": VObject({"x": VText("1")})})
        assert str(o) == "{t: Hi, n: {x: 1}}"

    def test_repr_mentions_unnamed_only_when_present(self):
        assert "unnamed" not in repr(VObject({"a": VText("1")}))
        assert "unnamed" in repr(VObject(unnamed=(VText("x"),)))

    def test_to_data(self):
        o = VObject(
            {"name": VText("Joe"), "inner": VObject({"x": VText("1")})},
            unnamed=(VText("a"),),
        )
        assert o.to_data() == {"name": "Joe", "inner": {"x": "1"}, "": ["a"]}

    def test_to_data_without_unnamed(self):
        assert VObject({"a": VText("1")}).to_data() == {"a": "1"}
