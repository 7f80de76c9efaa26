"""Lazily expandable snapshots of logged values."""

import collections.abc
import itertools
from dataclasses import dataclass
from typing import Any, ClassVar, Iterator, List, Optional, Tuple

from .entries import EntryKind, Severity, SourceLocation
from .formatter import ValueKind, classify, stringify

MAX_CHILDREN = 1000  # Upper bound of children per value


def describe_value(value: Any) -> str:
    """Short display string for a captured value."""
    kind = classify(value)
    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.ARRAY:
        return f"Array[{len(value)}]"
    if kind is ValueKind.OBJECT:
        return "Object"
    if kind is ValueKind.STRING:
        return f'"{value}"'

    return stringify(value)


def own_properties(value: Any) -> Iterator[Tuple[str, Any]]:
    """Yield (name, value) pairs of an object's own properties in enumeration order."""
    if isinstance(value, collections.abc.Mapping):
        for key in value:
            yield stringify(key), value[key]
        return

    try:
        attributes = vars(value)
    except TypeError:
        attributes = None

    if attributes is not None:
        for name in list(attributes):
            yield name, attributes[name]
        return

    for cls in type(value).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or not hasattr(value, name):
                continue
            yield name, getattr(value, name)


def value_has_children(value: Any) -> bool:
    kind = classify(value)
    if kind is ValueKind.ARRAY:
        return len(value) > 0
    if kind is ValueKind.OBJECT:
        return next(own_properties(value), None) is not None
    return False


def snapshot_children(
    parent_id: str, value: Any, max_children: int = MAX_CHILDREN
) -> List["ObjectSnapshotEntry"]:
    """
    Build child snapshots of a value.

    Args:
        parent_id: Id of the owning entry; children are numbered beneath it
        value: Captured value to expand
        max_children: Children beyond this count are omitted

    Returns:
        List of child snapshots (empty for primitives)
    """
    kind = classify(value)
    if kind is ValueKind.ARRAY:
        pairs = ((str(index), item) for index, item in enumerate(value))
    elif kind is ValueKind.OBJECT:
        pairs = own_properties(value)
    else:
        return []

    return [
        ObjectSnapshotEntry(f"{parent_id}:{ordinal}", name, child, max_children=max_children)
        for ordinal, (name, child) in enumerate(itertools.islice(pairs, max_children))
    ]


@dataclass(eq=False)
class ObjectSnapshotEntry:
    """A logged composite value, captured as-is and expanded on demand."""

    kind: ClassVar[EntryKind] = EntryKind.OBJECT_SNAPSHOT

    id: str
    name: Optional[str]
    value_obj: Any
    source_data: Optional[SourceLocation] = None
    annotation: Optional[str] = None
    max_children: int = MAX_CHILDREN
    severity: Optional[Severity] = None

    def get_id(self) -> str:
        return self.id

    @property
    def value(self) -> str:
        return describe_value(self.value_obj)

    @property
    def has_children(self) -> bool:
        return value_has_children(self.value_obj)

    async def get_children(self) -> List["ObjectSnapshotEntry"]:
        return snapshot_children(self.id, self.value_obj, self.max_children)

    def __str__(self) -> str:
        return f"{self.name}\n{self.value}"
