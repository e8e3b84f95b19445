"""Tests for proto_templates.scope."""

import pytest

from proto_templates import DuplicateName, Literal, Scope, UndefinedName, VText, load_prelude, parse


class TestScope:
    def test_document_names_in_order(self):
        scope = Scope.build(parse('b: "1" a: "2"'))
        assert scope.document_names == ("b", "a")
        assert scope.lookup("a") == Literal("2")

    def test_prelude_first_then_document(self):
        scope = Scope.build(parse('x: "doc"'), {"x": VText("pre"), "y": VText("pre")})
        assert scope.lookup("x") == Literal("doc")
        assert scope.lookup("y") == VText("pre")
        assert scope.document_names == ("x",)

    def test_prelude_not_mutated(self):
        prelude = {"y": VText("pre")}
        Scope.build(parse('x: "doc"'), prelude)
        assert prelude == {"y": VText("pre")}

    def test_undefined(self):
        with pytest.raises(UndefinedName):
            Scope.build(parse("")).lookup("nope")

    def test_duplicate(self):
        with pytest.raises(DuplicateName):
            Scope.build(parse('x: "1" y: "2" x: "3"'))

    def test_empty_names_are_not_bound(self):
        scope = Scope.build(parse(': "a" : "b"'))
        assert "" not in scope
        assert len(scope.unnamed) == 2

    def test_contains_and_iter(self):
        scope = Scope.build(parse('a: "1"'), {"p": VText("x")})
        assert "a" in scope and "p" in scope
        assert set(scope) == {"a", "p"}


def test_load_prelude_keeps_raw_bindings():
    prelude = load_prelude('Window: { width: "640" }\ntitle: "Main"')
    assert list(prelude) == ["Window", "title"]
    assert prelude["title"] == Literal("Main")
