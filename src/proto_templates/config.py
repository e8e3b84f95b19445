"""Runtime configuration for resolution and logging.

Settings are read from environment variables by the host, never implicitly
by the library:

    PROTO_TEMPLATES_MAX_DEPTH   maximum prototype/path nesting (default 128)
    PROTO_TEMPLATES_LOG_LEVEL   logging level for ``proto-repl`` (default WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAX_DEPTH_ENV_VAR = "PROTO_TEMPLATES_MAX_DEPTH"
LOG_LEVEL_ENV_VAR = "PROTO_TEMPLATES_LOG_LEVEL"

DEFAULT_MAX_DEPTH = 128


@dataclass(frozen=True)
class ResolveOptions:
    """Limits applied to a single resolution session."""

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def from_env(cls) -> ResolveOptions:
        raw = os.environ.get(MAX_DEPTH_ENV_VAR, "").strip()
        if not raw:
            return cls()
        try:
            depth = int(raw)
            if depth < 1:
                raise ValueError(raw)
        except ValueError:
            logger.warning(
                "Invalid %s value '%s'. Expected a positive integer. Defaulting to %d.",
                MAX_DEPTH_ENV_VAR,
                raw,
                DEFAULT_MAX_DEPTH,
            )
            return cls()
        return cls(max_depth=depth)


def configure_logging() -> None:
    """Set up root logging for the interactive shell."""
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper().strip()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
