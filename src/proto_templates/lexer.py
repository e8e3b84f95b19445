"""Lexer: converts Proto-Templates source text into a token list.

Whitespace and ``//`` comments separate tokens and are never emitted.
String literals are delimited by ``"``; the only escape is ``\\"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .errors import InvalidEscape, Position, UnterminatedString


class TokenType(Enum):
    STRING = auto()
    NAME = auto()
    COLON = auto()   # :
    DOT = auto()     # .
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    EOF = auto()


_SYMBOLS: dict[str, TokenType] = {
    ":": TokenType.COLON,
    ".": TokenType.DOT,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

_NAME_STOP = frozenset(_SYMBOLS) | {'"'}


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    value: str
    position: Position

    def describe(self) -> str:
        """Human-readable form for diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.STRING:
            return f"string {self.value!r}"
        if self.type == TokenType.NAME:
            return f"name '{self.value}'"
        return f"'{self.value}'"


def is_name_char(ch: str) -> bool:
    return not ch.isspace() and ch not in _NAME_STOP


class _Cursor:
    """Tracks offset, line and column while scanning."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.offset = 0
        self.line = 1
        self.column = 1

    def position(self) -> Position:
        return Position(self.line, self.column, self.offset)

    def peek(self, ahead: int = 0) -> str:
        i = self.offset + ahead
        return self.text[i] if i < len(self.text) else ""

    def advance(self) -> str:
        ch = self.text[self.offset]
        self.offset += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def at_comment(self) -> bool:
        return self.peek() == "/" and self.peek(1) == "/"

    def done(self) -> bool:
        return self.offset >= len(self.text)


def tokenize(text: str) -> list[Token]:
    """Split *text* into tokens, ending with a single EOF token.

    An empty NAME token is produced in front of a ``:`` that does not
    directly follow a name, so ``: "x"`` reads as an entry with an empty
    name.

    Raises:
        UnterminatedString: a ``"`` is opened but the input ends first.
        InvalidEscape: a backslash inside a string is not followed by ``"``.
    """
    cur = _Cursor(text)
    tokens: list[Token] = []

    while not cur.done():
        ch = cur.peek()

        if ch.isspace():
            cur.advance()
            continue

        if cur.at_comment():
            while not cur.done() and cur.peek() != "\n":
                cur.advance()
            continue

        start = cur.position()

        if ch == '"':
            tokens.append(Token(TokenType.STRING, _read_string(cur), start))
            continue

        if ch in _SYMBOLS:
            kind = _SYMBOLS[ch]
            if kind == TokenType.COLON and (not tokens or tokens[-1].type != TokenType.NAME):
                tokens.append(Token(TokenType.NAME, "", start))
            cur.advance()
            tokens.append(Token(kind, ch, start))
            continue

        chars: list[str] = []
        while not cur.done() and is_name_char(cur.peek()) and not cur.at_comment():
            chars.append(cur.advance())
        tokens.append(Token(TokenType.NAME, "".join(chars), start))

    tokens.append(Token(TokenType.EOF, "", cur.position()))
    return tokens


def _read_string(cur: _Cursor) -> str:
    """Consume a quoted literal starting at the opening quote."""
    opening = cur.position()
    cur.advance()
    chars: list[str] = []

    while True:
        if cur.done():
            raise UnterminatedString(opening)
        ch = cur.peek()
        if ch == '"':
            cur.advance()
            return "".join(chars)
        if ch == "\\":
            escape_at = cur.position()
            cur.advance()
            if cur.done():
                raise UnterminatedString(opening)
            if cur.peek() != '"':
                raise InvalidEscape("\\" + cur.peek(), escape_at)
            chars.append(cur.advance())
            continue
        chars.append(cur.advance())
