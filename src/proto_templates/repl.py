"""ProtoRepl: incremental shell for notebook / interactive use.

Also provides the ``proto-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from .config import ResolveOptions, configure_logging
from .document import ReferenceDocument, ResolvedDocument
from .errors import ProtoTemplatesError
from .model import Document
from .parser import parse
from .resolver import resolve
from .scope import Prelude
from .values import Value, VObject, VText

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ProtoRepl class (notebook / programmatic use)
# ---------------------------------------------------------------------------

class ProtoRepl:
    """Stateful shell that accumulates definitions across calls.

    Usage::

        repl = ProtoRepl()
        repl.eval('Button: { visible: "true" text: "Click Here" }')
        repl.eval('ok_button: Button { text: "Ok" }')
        repl.query("ok_button.text")   # → VText("Ok")

        repl.document   # all raw entries so far
        repl.resolved   # their resolved values
        repl.reset()    # clear state
    """

    def __init__(
        self,
        prelude: Prelude | None = None,
        options: ResolveOptions | None = None,
    ) -> None:
        self.prelude: dict = dict(prelude or {})
        self.options = options
        self.reset()

    def eval(self, text: str) -> ResolvedDocument:
        """Parse *text*, add its entries to the session and re-resolve.

        The session is left unchanged when parsing or resolution fails.
        """
        combined = self.document + parse(text)
        resolved = resolve(combined, self.prelude, self.options)
        self.document = combined
        self.resolved = resolved
        return resolved

    def query(self, path: str) -> Value:
        """Resolve a dotted path against the session (prelude included)."""
        return ReferenceDocument(self.document, self.prelude, self.options).query(path)

    def reset(self) -> None:
        """Clear all accumulated definitions."""
        self.document = Document()
        self.resolved = ResolvedDocument()


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _quote(text: str) -> str:
    return '"' + text.replace('"', '\\"') + '"'


def _fmt_inline(value: Value) -> str:
    """Format a single value for compact one-line display."""
    if isinstance(value, VText):
        return _quote(value.value)
    parts = [f"{k}: {_fmt_inline(v)}" for k, v in value.properties.items()]
    parts.extend(f": {_fmt_inline(v)}" for v in value.unnamed)
    return "{ " + " ".join(parts) + " }" if parts else "{}"


def _fmt_inspect(value: Value, indent: int = 0) -> str:
    """Pretty-print a value for inspect() / i()."""
    if isinstance(value, VText):
        return _quote(value.value)

    if not value.properties and not value.unnamed:
        return "{}"

    pad = "  " * (indent + 1)
    lines = ["{"]
    for k, v in value.properties.items():
        lines.append(f"{pad}{k}: {_fmt_inspect(v, indent + 1)}")
    for v in value.unnamed:
        lines.append(f"{pad}: {_fmt_inspect(v, indent + 1)}")
    lines.append("  " * indent + "}")
    return "\n".join(lines)


def _show_names(repl: ProtoRepl, dest: IO[str]) -> None:
    """Print every top-level name with a short summary."""
    if not repl.resolved:
        print("  (no names defined)", file=dest)
        return
    width = max(len(k) for k in repl.resolved)
    for name, value in repl.resolved.items():
        kind = "object" if isinstance(value, VObject) else "text"
        print(f"  {name:<{width}} : {kind}", file=dest)


def _load_file(repl: ProtoRepl, filepath: str) -> None:
    try:
        with open(filepath, encoding="utf-8") as fh:
            text = fh.read()
    except OSError as exc:
        print(f"Error reading '{filepath}': {exc}", file=sys.stderr)
        return
    repl.eval(text)


def _process_line(repl: ProtoRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line or line.startswith("//"):
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    try:
        # ── Control commands ──────────────────────────────────────────────
        if line == ":names":
            _show_names(repl, dest)
            return True

        if line == ":reset":
            repl.reset()
            return True

        # ── inspect() / i() ───────────────────────────────────────────────
        for prefix in ("inspect(", "i("):
            if line.startswith(prefix) and line.endswith(")"):
                path = line[len(prefix):-1].strip()
                print(_fmt_inspect(repl.query(path)), file=dest)
                return True

        # ── ? path ────────────────────────────────────────────────────────
        if line.startswith("? "):
            print(_fmt_inline(repl.query(line[2:].strip())), file=dest)
            return True

        # ── Load a document file ──────────────────────────────────────────
        if line.startswith("?<< "):
            _load_file(repl, line[4:].strip())
            return True

        # ── Regular definitions ───────────────────────────────────────────
        repl.eval(line)
    except ProtoTemplatesError as exc:
        logger.debug("input rejected: %r", line)
        print(f"Error: {exc}", file=sys.stderr)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Interactive shell (``proto-repl`` / ``python -m proto_templates.repl``)."""
    configure_logging()
    repl = ProtoRepl(options=ResolveOptions.from_env())
    dest: IO[str] = sys.stdout
    _file: IO[str] | None = None

    print("Proto-Templates REPL  (:q to quit  |  :names  :reset  |  ? <path>  inspect(<path>))")

    while True:
        try:
            line = input("proto> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not line:
            continue

        # ── Output redirect: ?>> filepath  /  ?>> ─────────────────────────
        if line.startswith("?>> "):
            filepath = line[4:].strip()
            if _file:
                _file.close()
                _file = None
                dest = sys.stdout
            try:
                _file = open(filepath, "w", encoding="utf-8")
                dest = _file
            except OSError as exc:
                print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
            continue

        if line == "?>>":
            if _file:
                _file.close()
                _file = None
            dest = sys.stdout
            continue

        if not _process_line(repl, line, dest):
            break

    if _file:
        _file.close()


if __name__ == "__main__":
    main()
