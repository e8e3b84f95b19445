"""Exception hierarchy for Proto-Templates lexing, parsing and resolution."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A location in the source text (1-based line/column, 0-based offset)."""

    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class ProtoTemplatesError(Exception):
    """Base exception for all Proto-Templates errors."""

    def __init__(self, message: str, position: Position | None = None) -> None:
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} (at {position})"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------

class LexError(ProtoTemplatesError):
    """Raised when source text cannot be split into tokens."""


class UnterminatedString(LexError):
    def __init__(self, position: Position) -> None:
        super().__init__("unterminated string literal", position)


class InvalidEscape(LexError):
    def __init__(self, sequence: str, position: Position) -> None:
        self.sequence = sequence
        super().__init__(f"invalid escape sequence {sequence!r}", position)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class ParseError(ProtoTemplatesError):
    """Raised when the token stream does not match the grammar."""


class UnexpectedToken(ParseError):
    def __init__(self, expected: str, found: str, position: Position) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected}, found {found}", position)


class EmptyValue(ParseError):
    """Raised when a value has neither a string, a prototype path nor braces."""

    def __init__(self, name: str, position: Position) -> None:
        self.name = name
        super().__init__(f"missing value for '{name}'", position)


class NestingTooDeep(ParseError):
    """Raised when braces are nested deeper than the parser accepts."""

    def __init__(self, limit: int, position: Position) -> None:
        self.limit = limit
        super().__init__(f"braces nested deeper than {limit} levels", position)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

class ResolveError(ProtoTemplatesError):
    """Raised when a document cannot be resolved into values."""


class UndefinedName(ResolveError):
    def __init__(self, name: str, position: Position | None = None) -> None:
        self.name = name
        super().__init__(f"undefined name '{name}'", position)


class UndefinedMember(ResolveError):
    def __init__(self, path: str, member: str, position: Position | None = None) -> None:
        self.path = path
        self.member = member
        super().__init__(f"'{path}' has no member '{member}'", position)


class PrototypeNotObject(ResolveError):
    def __init__(self, path: str, position: Position | None = None) -> None:
        self.path = path
        super().__init__(f"prototype '{path}' is a string literal, not an object", position)


class DuplicateName(ResolveError):
    def __init__(self, name: str, position: Position | None = None) -> None:
        self.name = name
        super().__init__(f"duplicate top-level name '{name}'", position)


class CyclicPrototype(ResolveError):
    """Raised when a path is requested while it is still being resolved.

    ``trace`` lists the dotted paths on the resolution stack, starting and
    ending with the path that closes the cycle.
    """

    def __init__(self, trace: list[str], position: Position | None = None) -> None:
        self.trace = tuple(trace)
        super().__init__("cyclic prototype: " + " -> ".join(self.trace), position)


class ResolutionDepthExceeded(ResolveError):
    def __init__(self, max_depth: int, path: str, position: Position | None = None) -> None:
        self.max_depth = max_depth
        self.path = path
        super().__init__(
            f"resolution depth limit {max_depth} exceeded while resolving '{path}'",
            position,
        )
