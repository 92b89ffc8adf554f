"""Type definitions for the typed_records library."""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator

from typed_records.errors import ArgumentError

if TYPE_CHECKING:
    from typed_records.record import Record


logger = logging.getLogger(__name__)

# Marker shown in place of a name for anonymous record types
ANONYMOUS = "(anonymous)"

# Instance attribute holding the slot array; no field may take this name
STORAGE_SLOT = "_record_values"


def to_identifier(value: Any) -> str:
    """Convert a field name to its canonical identifier form.

    Raises:
        ArgumentError: If the value is None, is not a valid identifier, or
            would collide with the record's own machinery.
        TypeError: If the value is not a string.
    """
    if value is None:
        raise ArgumentError("field name must not be None")
    if not isinstance(value, str):
        raise TypeError(f"field name must be a string, not {type(value).__name__}")
    if not value.isidentifier():
        raise ArgumentError(f"invalid field name {value!r}")
    if value.startswith("__") or value == STORAGE_SLOT:
        raise ArgumentError(f"reserved field name {value!r}")
    return value


def is_display_name(value: Any) -> bool:
    """Return whether a value can name a record type (a capitalized identifier)."""
    return isinstance(value, str) and value.isidentifier() and value[0].isupper()


@dataclass(frozen=True)
class RecordTypeDefinition:
    """Immutable shape of a record type: an optional name and its ordered fields.

    The field tuple fixes both the positional index and the iteration order
    of every instance. A name -> index table is built once here so that named
    access is a dictionary lookup rather than a scan.
    """

    name: str | None
    fields: tuple[str, ...] = ()
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        fields = tuple(self.fields)
        index: dict[str, int] = {}
        for i, name in enumerate(fields):
            if name in index:
                raise ArgumentError(f"duplicate member: {name}")
            index[name] = i
        object.__setattr__(self, "fields", fields)
        object.__setattr__(self, "_index", index)

    @property
    def size(self) -> int:
        """Return the number of fields."""
        return len(self.fields)

    @property
    def is_anonymous(self) -> bool:
        return self.name is None

    @property
    def display_name(self) -> str:
        return ANONYMOUS if self.name is None else self.name

    def index_of(self, name: str) -> int | None:
        """Get the position of a field by name."""
        return self._index.get(name)

    def members(self) -> list[str]:
        """Return the field names as display strings, in field order."""
        return list(self.fields)


class TypeRegistry:
    """Registry of named record types.

    Maps display names to the generated record classes. An alias is a second
    name bound to an already registered class.
    """

    def __init__(self) -> None:
        self._types: dict[str, type[Record]] = {}

    def register(self, record_class: type[Record], replace: bool = False) -> None:
        """Register a record class under its type name."""
        type_def = record_class.__record_type__
        if type_def.name is None:
            raise ValueError("Anonymous record types cannot be registered")
        self._bind(type_def.name, record_class, replace)

    def register_alias(self, alias: str, target: str) -> None:
        """Bind an additional name to an already registered record class."""
        record_class = self.get_or_raise(target)
        self._bind(alias, record_class, replace=False)
        logger.debug("aliased record type %s as %s", target, alias)

    def _bind(self, name: str, record_class: type[Record], replace: bool) -> None:
        if name in self._types:
            if not replace:
                raise ValueError(f"Type '{name}' is already defined")
            warnings.warn(f"redefining record type {name}", RuntimeWarning, stacklevel=4)
            logger.debug("replacing record type %s", name)
        self._types[name] = record_class
        logger.debug("registered record type %s", name)

    def unregister(self, name: str) -> type[Record]:
        """Remove a name from the registry and return the class it was bound to."""
        try:
            return self._types.pop(name)
        except KeyError:
            raise KeyError(f"Type '{name}' not found") from None

    def get(self, name: str) -> type[Record] | None:
        """Get a record class by name."""
        return self._types.get(name)

    def get_or_raise(self, name: str) -> type[Record]:
        """Get a record class by name, raising if not found."""
        record_class = self._types.get(name)
        if record_class is None:
            raise KeyError(f"Type '{name}' not found")
        return record_class

    def list_types(self) -> list[str]:
        """List all registered type names."""
        return list(self._types.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)
