"""Parser: builds a raw Document from the token stream.

Grammar::

    document    = { object } ;
    object      = name ":" value ;
    value       = string | composition ;
    composition = [ path ] [ "{" { object } "}" ] ;
    path        = name { "." name } ;
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .config import DEFAULT_MAX_DEPTH
from .errors import EmptyValue, NestingTooDeep, UnexpectedToken
from .lexer import Token, TokenType, tokenize
from .model import Composition, Document, Literal, Path, RawEntry, RawValue

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse(source: str | Sequence[Token], max_nesting: int = DEFAULT_MAX_DEPTH) -> Document:
    """Parse source text or an already tokenized stream into a Document.

    Raises ParseError on the first structural mismatch (and LexError when
    given text that cannot be tokenized). Braces nested deeper than
    *max_nesting* raise NestingTooDeep.
    """
    tokens = tokenize(source) if isinstance(source, str) else list(source)
    if not tokens or tokens[-1].type != TokenType.EOF:
        raise ValueError("token stream must end with an EOF token")

    reader = _TokenReader(tokens, max_nesting)
    entries: list[RawEntry] = []
    while not reader.at(TokenType.EOF):
        entries.append(_parse_entry(reader))

    logger.debug("parsed %d top-level entries", len(entries))
    return Document(tuple(entries))


# ---------------------------------------------------------------------------
# Token reader
# ---------------------------------------------------------------------------

class _TokenReader:
    def __init__(self, tokens: list[Token], max_nesting: int = DEFAULT_MAX_DEPTH) -> None:
        self.tokens = tokens
        self.index = 0
        self.max_nesting = max_nesting
        self.nesting = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def at(self, kind: TokenType) -> bool:
        return self.current.type == kind

    def advance(self) -> Token:
        token = self.current
        # EOF is never consumed past
        if token.type != TokenType.EOF:
            self.index += 1
        return token

    def expect(self, kind: TokenType, description: str) -> Token:
        if not self.at(kind):
            token = self.current
            raise UnexpectedToken(description, token.describe(), token.position)
        return self.advance()


# ---------------------------------------------------------------------------
# Grammar rules
# ---------------------------------------------------------------------------

def _parse_entry(reader: _TokenReader) -> RawEntry:
    """object = name ":" value"""
    if reader.at(TokenType.COLON):
        # ``x: a : "y"``: a colon right after a bare path opens an unnamed entry
        name_tok = Token(TokenType.NAME, "", reader.current.position)
    else:
        name_tok = reader.expect(TokenType.NAME, "a name")
    reader.expect(TokenType.COLON, "':'")
    value = _parse_value(reader, name_tok)
    return RawEntry(name=name_tok.value, value=value, position=name_tok.position)


def _parse_value(reader: _TokenReader, name_tok: Token) -> RawValue:
    token = reader.current

    if token.type == TokenType.STRING:
        reader.advance()
        return Literal(token.value, token.position)

    prototype: Path | None = None
    # An empty name here belongs to the next entry (``x: : "y"``)
    if token.type == TokenType.NAME and token.value:
        prototype = _parse_path(reader)

    braced = reader.at(TokenType.LBRACE)
    if braced:
        overrides = _parse_overrides(reader)
    elif prototype is None:
        raise EmptyValue(name_tok.value, token.position)
    else:
        overrides = ()

    return Composition(
        prototype=prototype,
        overrides=overrides,
        braced=braced,
        position=token.position,
    )


def _parse_path(reader: _TokenReader) -> Path:
    """path = name { "." name }"""
    first = reader.expect(TokenType.NAME, "a name")
    names = [first.value]
    while reader.at(TokenType.DOT):
        reader.advance()
        token = reader.current
        if token.type != TokenType.NAME or not token.value:
            found = "':'" if token.type == TokenType.NAME else token.describe()
            raise UnexpectedToken("a name after '.'", found, token.position)
        names.append(reader.advance().value)
    return Path(tuple(names), first.position)


def _parse_overrides(reader: _TokenReader) -> tuple[RawEntry, ...]:
    """ "{" { object } "}" """
    lbrace = reader.expect(TokenType.LBRACE, "'{'")
    if reader.nesting >= reader.max_nesting:
        raise NestingTooDeep(reader.max_nesting, lbrace.position)
    reader.nesting += 1

    entries: list[RawEntry] = []
    while not reader.at(TokenType.RBRACE):
        if reader.at(TokenType.EOF):
            raise UnexpectedToken("'}'", reader.current.describe(), reader.current.position)
        entries.append(_parse_entry(reader))
    reader.advance()
    reader.nesting -= 1
    return tuple(entries)
