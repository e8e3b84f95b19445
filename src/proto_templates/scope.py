"""Top-level lookup table built from the prelude and the document."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Union

from .errors import DuplicateName, Position, UndefinedName
from .model import Document, Name, RawEntry, RawValue
from .values import Value

Binding = Union[RawValue, Value]
Prelude = Mapping[Name, Binding]


@dataclass(frozen=True)
class Scope:
    """Holds every top-level binding visible to path lookups.

    Document names shadow prelude names. Entries with an empty name are not
    bound; they are kept in ``unnamed`` in declaration order.
    """

    bindings: Mapping[Name, Binding] = field(default_factory=dict)
    document_names: tuple[Name, ...] = ()
    unnamed: tuple[RawEntry, ...] = ()

    @classmethod
    def build(cls, document: Document, prelude: Prelude | None = None) -> Scope:
        bindings: dict[Name, Binding] = dict(prelude or {})
        seen: set[Name] = set()
        names: list[Name] = []
        unnamed: list[RawEntry] = []

        for entry in document.entries:
            if entry.name == "":
                unnamed.append(entry)
                continue
            if entry.name in seen:
                raise DuplicateName(entry.name, entry.position)
            seen.add(entry.name)
            names.append(entry.name)
            bindings[entry.name] = entry.value

        return cls(bindings=bindings, document_names=tuple(names), unnamed=tuple(unnamed))

    def lookup(self, name: Name, position: Position | None = None) -> Binding:
        try:
            return self.bindings[name]
        except KeyError:
            raise UndefinedName(name, position) from None

    def __contains__(self, name: object) -> bool:
        return name in self.bindings

    def __iter__(self) -> Iterator[Name]:
        return iter(self.bindings)


def load_prelude(text: str) -> dict[Name, RawValue]:
    """Parse *text* into prelude bindings (raw, resolved together with the document)."""
    from .parser import parse

    scope = Scope.build(parse(text))
    return {name: scope.bindings[name] for name in scope.document_names}
