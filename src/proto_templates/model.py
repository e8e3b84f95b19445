"""Raw syntax tree produced by the parser.

Nodes are frozen: the parser builds them once and nothing mutates them
afterwards. Source positions are carried for diagnostics but do not take
part in equality, so two trees parsed from differently formatted text
compare equal when they mean the same thing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .errors import Position


Name = str


# ---------------------------------------------------------------------------
# Path
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Path:
    """A dotted reference such as ``label.dimensions.x``."""

    names: tuple[Name, ...]
    position: Position | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("a path needs at least one name")

    @classmethod
    def parse(cls, dotted: str) -> Path:
        """Build a path from ``a.b.c`` notation (no validation of characters)."""
        return cls(tuple(dotted.split(".")))

    @property
    def head(self) -> Name:
        return self.names[0]

    @property
    def parent(self) -> Path | None:
        if len(self.names) == 1:
            return None
        return Path(self.names[:-1], self.position)

    def __str__(self) -> str:
        return ".".join(self.names)


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Literal:
    text: str
    position: Position | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Composition:
    """An object with an optional prototype and ordered overrides.

    ``braced`` is False for a bare path (``ref: a.name``), which refers to
    the target value itself instead of deriving a new object from it.
    """

    prototype: Path | None = None
    overrides: tuple[RawEntry, ...] = ()
    braced: bool = True
    position: Position | None = field(default=None, compare=False)

    @property
    def is_reference(self) -> bool:
        return self.prototype is not None and not self.braced


RawValue = Union[Literal, Composition]


@dataclass(frozen=True, slots=True)
class RawEntry:
    name: Name
    value: RawValue
    position: Position | None = field(default=None, compare=False)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Document:
    """Top-level entries in declaration order."""

    entries: tuple[RawEntry, ...] = ()

    def names(self) -> list[Name]:
        return [e.name for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __add__(self, other: Document) -> Document:
        return Document(self.entries + other.entries)
