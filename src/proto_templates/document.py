"""ResolvedDocument / ReferenceDocument: the outputs of resolution."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .errors import UndefinedName
from .getter import apply_getter
from .model import Document, Name, Path
from .values import Value

if TYPE_CHECKING:
    from .config import ResolveOptions
    from .scope import Prelude


@dataclass
class ResolvedDocument(Mapping[Name, Value]):
    """Holds the fully resolved top-level values of a document."""

    values: dict[Name, Value] = field(default_factory=dict)
    unnamed: tuple[Value, ...] = ()

    # -- Mapping protocol -----------------------------------------------

    def __getitem__(self, name: Name) -> Value:
        return self.values[name]

    def __iter__(self) -> Iterator[Name]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    # -- Queries --------------------------------------------------------

    def query(self, path: Path | str) -> Value:
        """Look up a top-level name or a dotted member path."""
        if isinstance(path, str):
            path = Path.parse(path)
        if path.head not in self.values:
            raise UndefinedName(path.head, path.position)
        value = self.values[path.head]
        for i, member in enumerate(path.names[1:], start=1):
            value = apply_getter(value, member, ".".join(path.names[:i]), path.position)
        return value

    def to_data(self) -> dict[str, Any]:
        data: dict[str, Any] = {k: v.to_data() for k, v in self.values.items()}
        if self.unnamed:
            data[""] = [v.to_data() for v in self.unnamed]
        return data


class ReferenceDocument(Mapping[Name, Value]):
    """Lazily resolved view of a document.

    Only the queried subtree is resolved. Results are memoized in the
    underlying Resolver and share its cycle detection, so repeated or
    overlapping queries never recompute a path.

    Usage::

        ref = ReferenceDocument(parse(text))
        ref.query("ok_button.text")   # resolves ok_button (and its prototype)
        ref.resolve_all()             # → ResolvedDocument
    """

    def __init__(
        self,
        document: Document,
        prelude: Prelude | None = None,
        options: ResolveOptions | None = None,
    ) -> None:
        from .resolver import Resolver

        self.resolver = Resolver.for_document(document, prelude, options)

    def __getitem__(self, name: Name) -> Value:
        if name not in self.resolver.scope.document_names:
            raise KeyError(name)
        return self.resolver.resolve_name(name)

    def __iter__(self) -> Iterator[Name]:
        return iter(self.resolver.scope.document_names)

    def __len__(self) -> int:
        return len(self.resolver.scope.document_names)

    def query(self, path: Path | str) -> Value:
        """Resolve a dotted path on demand (prelude names are visible too)."""
        if isinstance(path, str):
            path = Path.parse(path)
        return self.resolver.resolve_path(path)

    def resolve_all(self) -> ResolvedDocument:
        return self.resolver.resolve_document()
