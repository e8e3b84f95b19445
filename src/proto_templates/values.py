"""Resolved value types for Proto-Templates."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union


@dataclass(frozen=True)
class VText:
    value: str

    def __str__(self) -> str:
        return self.value

    def to_data(self) -> str:
        return self.value


@dataclass(frozen=True)
class VObject:
    """A fully materialized object.

    ``properties`` keeps insertion order and is read-only. Values stored
    under an empty name are not addressable and live in ``unnamed``.
    """

    properties: Mapping[str, "Value"] = field(default_factory=dict)
    unnamed: tuple["Value", ...] = ()

    def __post_init__(self) -> None:
        # Frozen: wrap a private copy so callers cannot mutate it afterwards
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        object.__setattr__(self, "unnamed", tuple(self.unnamed))

    def __getitem__(self, name: str) -> "Value":
        return self.properties[name]

    def __contains__(self, name: object) -> bool:
        return name in self.properties

    def __iter__(self) -> Iterator[str]:
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)

    def get(self, name: str, default: "Value | None" = None) -> "Value | None":
        return self.properties.get(name, default)

    def keys(self) -> list[str]:
        return list(self.properties)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.properties.items()) + "}"

    def __repr__(self) -> str:
        if self.unnamed:
            return f"VObject({dict(self.properties)!r}, unnamed={self.unnamed!r})"
        return f"VObject({dict(self.properties)!r})"

    def to_data(self) -> dict[str, Any]:
        """Export as plain nested ``dict``/``str`` data."""
        data: dict[str, Any] = {k: v.to_data() for k, v in self.properties.items()}
        if self.unnamed:
            data[""] = [v.to_data() for v in self.unnamed]
        return data


Value = Union[VText, VObject]
