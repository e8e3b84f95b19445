"""Member lookup on resolved values."""

from __future__ import annotations

from .errors import Position, UndefinedMember
from .values import Value, VObject


def apply_getter(
    value: Value,
    member: str,
    owner: str = "",
    position: Position | None = None,
) -> Value:
    """Return property *member* of *value*.

    - VObject: the named property
    - VText / missing property / empty name: raises UndefinedMember

    *owner* is the dotted path of *value*, used only for the error message.
    """
    if isinstance(value, VObject) and member and member in value.properties:
        return value.properties[member]
    raise UndefinedMember(owner, member, position)
