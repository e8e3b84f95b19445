"""Resolution engine: prototype references and paths → resolved values."""

from __future__ import annotations

import logging
import threading

from .config import ResolveOptions
from .document import ResolvedDocument
from .errors import (
    CyclicPrototype,
    Position,
    PrototypeNotObject,
    ResolutionDepthExceeded,
    ResolveError,
)
from .getter import apply_getter
from .lexer import tokenize
from .model import Composition, Document, Literal, Name, Path
from .parser import parse
from .scope import Binding, Prelude, Scope
from .values import Value, VObject, VText

logger = logging.getLogger(__name__)

# Stands in for a path in errors raised while resolving an unnamed entry
UNNAMED = "(unnamed)"


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def resolve(
    document: Document,
    prelude: Prelude | None = None,
    options: ResolveOptions | None = None,
) -> ResolvedDocument:
    """Resolve every top-level entry of *document*.

    Fails on the first error; use resolve_entries() to isolate entries.
    """
    return Resolver.for_document(document, prelude, options).resolve_document()


def resolve_path(
    path: Path | str,
    scope: Scope,
    options: ResolveOptions | None = None,
) -> Value:
    """Resolve a single dotted path (``a.b.c``) against *scope*."""
    if isinstance(path, str):
        path = Path.parse(path)
    return Resolver(scope, options).resolve_path(path)


def resolve_entries(
    document: Document,
    prelude: Prelude | None = None,
    options: ResolveOptions | None = None,
) -> dict[Name, Value | ResolveError]:
    """Resolve each top-level name independently.

    A failing entry maps to its ResolveError instead of aborting the call.
    DuplicateName still aborts, since it makes the scope itself ambiguous.
    Entries with an empty name have no key and are not included; resolve
    them with ``Resolver.resolve_binding`` (or take ``resolve(...).unnamed``).
    """
    resolver = Resolver.for_document(document, prelude, options)
    results: dict[Name, Value | ResolveError] = {}
    for name in resolver.scope.document_names:
        try:
            results[name] = resolver.resolve_name(name)
        except ResolveError as exc:
            logger.debug("entry '%s' failed: %s", name, exc)
            results[name] = exc
    return results


def evaluate(
    text: str,
    prelude: Prelude | None = None,
    options: ResolveOptions | None = None,
) -> ResolvedDocument:
    """Tokenize, parse and resolve *text* in one step."""
    return resolve(parse(tokenize(text)), prelude, options)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class Resolver:
    """Resolves paths against one scope, memoizing every resolved path.

    The memo table is write-once and lock-protected, so one Resolver may
    serve several threads. Each public call owns its own in-progress stack.

    Every memoized path also records its depth: the longest chain of
    prototypes, member lookups and nested braces needed to build it. The
    depth limit is checked against that figure, so whether a path resolves
    never depends on what was queried before it.
    """

    def __init__(self, scope: Scope, options: ResolveOptions | None = None) -> None:
        self.scope = scope
        self.options = options or ResolveOptions()
        self._memo: dict[tuple[Name, ...], tuple[Value, int]] = {}
        self._lock = threading.Lock()

    @classmethod
    def for_document(
        cls,
        document: Document,
        prelude: Prelude | None = None,
        options: ResolveOptions | None = None,
    ) -> Resolver:
        scope = Scope.build(document, prelude)
        logger.debug(
            "scope built: %d document names, %d bindings total",
            len(scope.document_names),
            len(scope.bindings),
        )
        return cls(scope, options)

    # -- Public API -----------------------------------------------------

    def resolve_path(self, path: Path) -> Value:
        try:
            value, _ = self._resolve_path(path, [], 0)
        except RecursionError:
            raise ResolutionDepthExceeded(
                self.options.max_depth, str(path), path.position
            ) from None
        return value

    def resolve_name(self, name: Name) -> Value:
        return self.resolve_path(Path((name,)))

    def resolve_binding(self, binding: Binding) -> Value:
        """Resolve a value that is not bound to a path (e.g. an unnamed entry)."""
        position = getattr(binding, "position", None)
        try:
            value, depth = self._resolve_binding(binding, [], 0)
        except RecursionError:
            raise ResolutionDepthExceeded(self.options.max_depth, UNNAMED, position) from None
        if depth > self.options.max_depth:
            raise ResolutionDepthExceeded(self.options.max_depth, UNNAMED, position)
        return value

    def resolve_document(self) -> ResolvedDocument:
        values = {name: self.resolve_name(name) for name in self.scope.document_names}
        unnamed = tuple(self.resolve_binding(e.value) for e in self.scope.unnamed)
        return ResolvedDocument(values, unnamed)

    # -- Memo -----------------------------------------------------------

    def _cached(self, key: tuple[Name, ...]) -> tuple[Value, int] | None:
        with self._lock:
            return self._memo.get(key)

    def _store(self, key: tuple[Name, ...], result: tuple[Value, int]) -> tuple[Value, int]:
        # First writer wins; a concurrent duplicate adopts the stored value
        with self._lock:
            return self._memo.setdefault(key, result)

    # -- Resolution -----------------------------------------------------
    #
    # Each helper returns (value, depth). ``level`` counts the prototype
    # links and nested braces currently in progress; it never exceeds the
    # depth of the outermost request, so stopping at max_depth agrees with
    # the memoized depths.

    def _check_level(self, level: int, stack: list[str], position: Position | None) -> None:
        if level >= self.options.max_depth:
            current = stack[-1] if stack else UNNAMED
            raise ResolutionDepthExceeded(self.options.max_depth, current, position)

    def _resolve_path(self, path: Path, stack: list[str], level: int) -> tuple[Value, int]:
        cached = self._cached(path.names)
        if cached is not None:
            logger.debug("memo hit: %s", path)
            return cached

        dotted = str(path)
        if dotted in stack:
            trace = stack[stack.index(dotted):] + [dotted]
            raise CyclicPrototype(trace, path.position)
        self._check_level(level, stack + [dotted], path.position)

        stack.append(dotted)
        try:
            parent = path.parent
            if parent is None:
                binding = self.scope.lookup(path.head, path.position)
                value, depth = self._resolve_binding(binding, stack, level + 1)
            else:
                owner, depth = self._resolve_path(parent, stack, level + 1)
                value = apply_getter(owner, path.names[-1], str(parent), path.position)
        finally:
            stack.pop()

        depth += 1
        if depth > self.options.max_depth:
            raise ResolutionDepthExceeded(self.options.max_depth, dotted, path.position)
        return self._store(path.names, (value, depth))

    def _resolve_binding(
        self, binding: Binding, stack: list[str], level: int
    ) -> tuple[Value, int]:
        if isinstance(binding, (VText, VObject)):
            return binding, 0
        if isinstance(binding, Literal):
            return VText(binding.text), 0
        if isinstance(binding, Composition):
            if binding.is_reference:
                return self._resolve_path(binding.prototype, stack, level)
            return self._resolve_composition(binding, stack, level)
        raise TypeError(f"cannot resolve {type(binding).__name__}")

    def _resolve_composition(
        self, composition: Composition, stack: list[str], level: int
    ) -> tuple[VObject, int]:
        properties: dict[Name, Value] = {}
        unnamed: list[Value] = []
        depth = 0

        prototype = composition.prototype
        if prototype is not None:
            inherited, depth = self._resolve_path(prototype, stack, level)
            if not isinstance(inherited, VObject):
                raise PrototypeNotObject(str(prototype), prototype.position)
            properties.update(inherited.properties)
            unnamed.extend(inherited.unnamed)

        # Replacing an existing key keeps its original slot
        for entry in composition.overrides:
            binding = entry.value
            if isinstance(binding, Composition) and not binding.is_reference:
                self._check_level(level, stack, binding.position)
                value, entry_depth = self._resolve_composition(binding, stack, level + 1)
                entry_depth += 1
            else:
                value, entry_depth = self._resolve_binding(binding, stack, level)
            depth = max(depth, entry_depth)
            if entry.name:
                properties[entry.name] = value
            else:
                unnamed.append(value)

        return VObject(properties, tuple(unnamed)), depth
