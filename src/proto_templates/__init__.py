"""Proto-Templates: parser and prototype resolution engine."""

from .config import ResolveOptions
from .document import ReferenceDocument, ResolvedDocument
from .errors import (
    CyclicPrototype,
    DuplicateName,
    EmptyValue,
    NestingTooDeep,
    InvalidEscape,
    LexError,
    ParseError,
    Position,
    PrototypeNotObject,
    ProtoTemplatesError,
    ResolutionDepthExceeded,
    ResolveError,
    UndefinedMember,
    UndefinedName,
    UnexpectedToken,
    UnterminatedString,
)
from .lexer import Token, TokenType, tokenize
from .model import Composition, Document, Literal, Path, RawEntry
from .parser import parse
from .resolver import Resolver, evaluate, resolve, resolve_entries, resolve_path
from .scope import Scope, load_prelude
from .values import Value, VObject, VText
from .repl import ProtoRepl

__all__ = [
    "tokenize",
    "parse",
    "resolve",
    "resolve_path",
    "resolve_entries",
    "evaluate",
    "load_prelude",
    "Resolver",
    "ResolveOptions",
    "Scope",
    "Token",
    "TokenType",
    "Document",
    "RawEntry",
    "Literal",
    "Composition",
    "Path",
    "ResolvedDocument",
    "ReferenceDocument",
    "Value",
    "VText",
    "VObject",
    "Position",
    "ProtoTemplatesError",
    "LexError",
    "UnterminatedString",
    "InvalidEscape",
    "ParseError",
    "UnexpectedToken",
    "EmptyValue",
    "NestingTooDeep",
    "ResolveError",
    "UndefinedName",
    "UndefinedMember",
    "PrototypeNotObject",
    "DuplicateName",
    "CyclicPrototype",
    "ResolutionDepthExceeded",
    "ProtoRepl",
]
