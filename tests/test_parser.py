"""Tests for the parser."""

import pytest

from proto_templates import (
    Composition,
    Document,
    EmptyValue,
    NestingTooDeep,
    Literal,
    ParseError,
    Path,
    Position,
    RawEntry,
    UnexpectedToken,
    parse,
    tokenize,
)
from proto_templates.lexer import Token, TokenType


# Document is not meant to be built by hand, only parsed; these are test helpers

def entry(name, value):
    return RawEntry(name, value)


def compound(prototype=None, *overrides, braced=True):
    proto = Path(tuple(prototype.split("."))) if prototype else None
    return Composition(proto, tuple(overrides), braced)


def ref(path):
    return compound(path, braced=False)


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

def test_empty_document():
    assert parse("") == Document()
    assert parse("  // only a comment\n") == Document()


def test_string_value():
    assert parse('text: "xyz"') == Document((entry("text", Literal("xyz")),))


def test_bare_braces():
    assert parse("empty: {}") == Document((entry("empty", compound()),))


def test_bare_path_is_reference():
    doc = parse("x: div")
    assert doc.entries[0].value == ref("div")
    assert doc.entries[0].value.is_reference


def test_dotted_path():
    doc = parse("x: label.dimensions.x")
    value = doc.entries[0].value
    assert value.prototype.names == ("label", "dimensions", "x")
    assert not value.braced


def test_path_with_empty_braces_is_not_reference():
    value = parse("x: div {}").entries[0].value
    assert value == compound("div")
    assert not value.is_reference


def test_spaces_around_dots():
    assert parse("x: a . b . c") == parse("x: a.b.c")


def test_nested_overrides():
    doc = parse('my_div: div { text: "xy z" content: default {} }')
    assert doc == Document((
        entry("my_div", compound(
            "div",
            entry("text", Literal("xy z")),
            entry("content", compound("default")),
        )),
    ))


def test_deeply_nested():
    doc = parse('a: { b: { c: { d: "x" } } }')
    inner = doc.entries[0].value.overrides[0].value.overrides[0].value
    assert inner.overrides[0] == entry("d", Literal("x"))


def test_multiple_entries_without_separators():
    doc = parse('a: b c: "x" d: { }')
    assert doc.names() == ["a", "c", "d"]
    assert doc.entries[0].value == ref("b")


def test_duplicate_nested_names_are_kept():
    doc = parse('x: { a: "1" a: "2" }')
    assert [e.name for e in doc.entries[0].value.overrides] == ["a", "a"]


def test_duplicate_top_level_names_parse():
    # uniqueness is checked during resolution
    assert parse('x: "1" x: "2"').names() == ["x", "x"]


def test_empty_names():
    doc = parse('x: { : "a" : "b" }')
    names = [e.name for e in doc.entries[0].value.overrides]
    assert names == ["", ""]


def test_top_level_empty_name():
    assert parse(': "a"') == Document((entry("", Literal("a")),))


def test_colon_after_bare_path_opens_unnamed_entry():
    assert parse('x: a : "y"') == Document((
        entry("x", ref("a")),
        entry("", Literal("y")),
    ))


def test_unnamed_references_in_braces():
    doc = parse("list: { : a : b.c }")
    assert doc == Document((
        entry("list", compound(None, entry("", ref("a")), entry("", ref("b.c")))),
    ))


def test_formatting_does_not_affect_equality():
    compact = parse('a:{b:"1"}')
    spread = parse('a : {\n  // comment\n  b : "1"\n}\n')
    assert compact == spread


def test_buttons_example():
    text = """
        ok_text: "Ok"

        Button: {
            visible: "true"
            text: "Click Here"
        }

        ok_button: Button { text: ok_text }
    """
    doc = parse(text)
    assert doc.names() == ["ok_text", "Button", "ok_button"]
    assert doc.entries[2].value == compound("Button", entry("text", ref("ok_text")))


# ---------------------------------------------------------------------------
# Token input
# ---------------------------------------------------------------------------

def test_accepts_token_list():
    text = 'h2: h { t: "Bye" }'
    assert parse(tokenize(text)) == parse(text)


def test_token_list_without_eof_rejected():
    tokens = tokenize('a: "x"')[:-1]
    with pytest.raises(ValueError):
        parse(tokens)


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------

def test_entry_positions():
    doc = parse('a: "1"\n  b: c {}')
    assert doc.entries[0].position == Position(1, 1, 0)
    assert doc.entries[1].position == Position(2, 3, 9)
    assert doc.entries[1].value.prototype.position == Position(2, 6, 12)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def test_missing_value_at_end():
    with pytest.raises(EmptyValue) as info:
        parse("a:")
    assert info.value.name == "a"


def test_missing_value_before_brace():
    with pytest.raises(EmptyValue):
        parse("x: { a: }")


def test_missing_value_before_empty_named_entry():
    with pytest.raises(EmptyValue):
        parse('x: : "y"')


def test_missing_colon():
    with pytest.raises(UnexpectedToken) as info:
        parse('a "x"')
    assert info.value.expected == "':'"
    assert info.value.found == "string 'x'"
    assert info.value.position == Position(1, 3, 2)


def test_unclosed_brace():
    with pytest.raises(UnexpectedToken) as info:
        parse('my_div: div { text: "xy z" ')
    assert info.value.expected == "'}'"
    assert info.value.found == "end of input"


def test_stray_closing_brace():
    with pytest.raises(UnexpectedToken) as info:
        parse('a: "x" }')
    assert info.value.found == "'}'"


def test_trailing_name():
    with pytest.raises(UnexpectedToken):
        parse('a: "x" b')


def test_two_strings():
    with pytest.raises(UnexpectedToken):
        parse('a: "x" "y"')


def test_dangling_dot():
    with pytest.raises(UnexpectedToken) as info:
        parse("a: b.")
    assert info.value.expected == "a name after '.'"


def test_empty_path_segment():
    with pytest.raises(UnexpectedToken):
        parse("a: b..c")


def _nested(levels):
    return "a: " + "{ b: " * levels + '"x"' + " }" * levels


def test_nesting_limit():
    with pytest.raises(NestingTooDeep) as info:
        parse(_nested(200))
    assert info.value.limit == 128
    assert info.value.position == Position(1, 4 + 5 * 128, 3 + 5 * 128)


def test_nesting_limit_is_configurable():
    assert len(parse(_nested(3), max_nesting=3)) == 1
    with pytest.raises(NestingTooDeep):
        parse(_nested(3), max_nesting=2)


def test_errors_share_base_class():
    for text in ("a:", 'a "x"', "a: { "):
        with pytest.raises(ParseError):
            parse(text)


def test_hand_built_tokens():
    pos = Position(1, 1, 0)
    tokens = [
        Token(TokenType.NAME, "a", pos),
        Token(TokenType.COLON, ":", pos),
        Token(TokenType.STRING, "x", pos),
        Token(TokenType.EOF, "", pos),
    ]
    assert parse(tokens) == Document((entry("a", Literal("x")),))
