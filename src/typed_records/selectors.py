"""Field selectors: addressing a record slot by position or by name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from typed_records.types import RecordTypeDefinition


@dataclass(frozen=True)
class ByPosition:
    """Select a field by its position; negative positions count from the end."""

    index: int


@dataclass(frozen=True)
class ByName:
    """Select a field by its identifier."""

    name: str


Selector = Union[ByPosition, ByName]


def to_selector(key: Any) -> Selector:
    """Normalize a subscript key into a selector.

    Integers select by position, strings by name. Booleans are rejected even
    though they are ints.
    """
    if isinstance(key, (ByPosition, ByName)):
        return key
    if isinstance(key, int) and not isinstance(key, bool):
        return ByPosition(key)
    if isinstance(key, str):
        return ByName(key)
    raise TypeError(f"record index must be an int or a field name, not {type(key).__name__}")


def resolve(type_def: RecordTypeDefinition, selector: Selector) -> int:
    """Resolve a selector to a slot index, raising on anything out of range.

    Raises:
        IndexError: If a position falls outside [-size, size - 1].
        NameError: If a name is not a field of the type.
    """
    if isinstance(selector, ByPosition):
        index = selector.index
        size = type_def.size
        if index > size - 1:
            raise IndexError(f"offset {index} too large for record(size:{size})")
        if index < -size:
            raise IndexError(f"offset {index + size} too small for record(size:{size})")
        return index % size

    index = type_def.index_of(selector.name)
    if index is None:
        raise NameError(f"no member '{selector.name}' in record")
    return index


def resolve_lenient(type_def: RecordTypeDefinition, index: int) -> int | None:
    """Resolve a position the way values_at does: out of range gives None."""
    size = type_def.size
    if index >= size or index < -size:
        return None
    return index % size
