"""The instance protocol shared by every generated record type."""

from __future__ import annotations

from typing import Any, Callable, Iterator

from typed_records.errors import ArgumentError, ControlFlowError
from typed_records.guard import RecursionGuard, recursion_guard
from typed_records.selectors import resolve, resolve_lenient, to_selector
from typed_records.types import RecordTypeDefinition


# Rendered in place of a record that is already being rendered further up
CYCLE_PLACEHOLDER = "[...]"

# Hash contribution of a record reached again while it is being hashed
_CYCLE_HASH = hash(CYCLE_PLACEHOLDER)

_hash_guard = RecursionGuard()


class RecordMeta(type):
    """Metaclass for record types; gives classes the ``Point[1, 2]`` constructor."""

    def __getitem__(cls, args: Any) -> Record:
        if not isinstance(args, tuple):
            args = (args,)
        return cls(*args)


class Record(metaclass=RecordMeta):
    """Base class of every record type built by ``define``.

    Values live in a single list aligned with the fields of the class's
    ``__record_type__``. Named accessors, subscripting and enumeration all go
    through that list.

    Methods here reach storage through ``_record_values`` and the type
    definition rather than through each other, because a field is allowed to
    shadow any public method name.
    """

    __slots__ = ("_record_values",)
    __record_type__: RecordTypeDefinition

    def __init__(self, *args: Any) -> None:
        type_def = getattr(type(self), "__record_type__", None)
        if type_def is None:
            raise TypeError("Record cannot be instantiated directly; build a type with define()")
        size = type_def.size
        if len(args) > size:
            raise ArgumentError(
                f"{type_def.display_name} takes at most {size} values ({len(args)} given)"
            )
        values = list(args)
        values.extend([None] * (size - len(args)))
        self._record_values = values

    def __copy__(self) -> Record:
        duplicate = type(self).__new__(type(self))
        duplicate._record_values = list(self._record_values)
        state = getattr(self, "__dict__", None)
        if state:
            duplicate.__dict__.update(state)
        return duplicate

    # -- keyed and indexed access ------------------------------------------

    def get(self, key: Any) -> Any:
        """Return the value of the field selected by position or name.

        Raises:
            IndexError: If a position is out of range.
            NameError: If a name is not a field of this record.
            TypeError: If the key is neither an int nor a string.
        """
        index = resolve(type(self).__record_type__, to_selector(key))
        return self._record_values[index]

    def set(self, key: Any, value: Any) -> Any:
        """Assign the field selected by position or name and return the value."""
        index = resolve(type(self).__record_type__, to_selector(key))
        self._record_values[index] = value
        return value

    def __getitem__(self, key: Any) -> Any:
        return Record.get(self, key)

    def __setitem__(self, key: Any, value: Any) -> None:
        Record.set(self, key, value)

    # -- enumeration --------------------------------------------------------

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._record_values))

    def __len__(self) -> int:
        return type(self).__record_type__.size

    def length(self) -> int:
        """Return the number of fields."""
        return type(self).__record_type__.size

    size = length

    def to_list(self) -> list[Any]:
        """Return the values as a new list, in field order."""
        return list(self._record_values)

    values = to_list

    def to_dict(self) -> dict[str, Any]:
        """Return an ordered mapping of field name to value."""
        return dict(zip(type(self).__record_type__.fields, self._record_values))

    def items(self) -> Iterator[tuple[str, Any]]:
        """Return a fresh iterator of (field name, value) pairs."""
        return zip(type(self).__record_type__.fields, list(self._record_values))

    def each(self, fn: Callable[[Any], Any] | None = None) -> Any:
        """Call fn with each value in field order and return the record.

        Without fn, return an iterator over the values instead.
        """
        if fn is None:
            return Record.__iter__(self)
        for value in list(self._record_values):
            fn(value)
        return self

    def each_pair(self, fn: Callable[[str, Any], Any] | None = None) -> Record:
        """Call fn with each field name and value in field order and return the record."""
        if fn is None:
            raise ControlFlowError("each_pair requires a callback; use items() for an iterator")
        for name, value in Record.items(self):
            fn(name, value)
        return self

    def select(self, predicate: Callable[[Any], Any]) -> list[Any]:
        """Return the values for which predicate is true, in field order."""
        return list(filter(predicate, self._record_values))

    def values_at(self, *selectors: int | range | slice) -> list[Any]:
        """Return the values at the given positions, in the order asked for.

        Selectors may be ints, ranges or slices. An int (or a range element)
        outside the record gives None instead of raising; slices are clipped
        the way list slicing clips them.
        """
        type_def = type(self).__record_type__
        values = self._record_values
        result: list[Any] = []
        for selector in selectors:
            if isinstance(selector, slice):
                result.extend(values[selector])
                continue
            if isinstance(selector, range):
                positions = selector
            elif isinstance(selector, int) and not isinstance(selector, bool):
                positions = (selector,)
            else:
                raise TypeError(
                    f"values_at selectors must be ints, ranges or slices, not {type(selector).__name__}"
                )
            for position in positions:
                index = resolve_lenient(type_def, position)
                result.append(None if index is None else values[index])
        return result

    @classmethod
    def members(cls) -> list[str]:
        """Return the field names, in field order."""
        return cls.__record_type__.members()

    # -- equality and hashing ----------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        if type(self) is not type(other):
            return False
        mine = self._record_values
        theirs = other._record_values
        if len(mine) != len(theirs):
            return False

        for a, b in zip(mine, theirs):
            if recursion_guard.is_inspecting(a) or recursion_guard.is_inspecting(b):
                continue
            with recursion_guard.inspecting(a), recursion_guard.inspecting(b):
                if a != b:
                    return False
        return True

    def eql(self, other: object) -> bool:
        """Stricter equality: equal values must also have identical types."""
        if self == other:
            return True
        if type(self) is not type(other):
            return False

        for a, b in zip(self._record_values, other._record_values):
            if recursion_guard.is_inspecting(a) or recursion_guard.is_inspecting(b):
                continue
            with recursion_guard.inspecting(a), recursion_guard.inspecting(b):
                if not _strictly_equal(a, b):
                    return False
        return True

    def __hash__(self) -> int:
        if _hash_guard.is_inspecting(self):
            return _CYCLE_HASH
        with _hash_guard.inspecting(self):
            return hash(tuple(self._record_values))

    # -- rendering ----------------------------------------------------------

    def __repr__(self) -> str:
        if recursion_guard.is_inspecting(self):
            return CYCLE_PLACEHOLDER
        type_def = type(self).__record_type__
        with recursion_guard.inspecting(self):
            parts = ", ".join(
                f"{name}={value!r}" for name, value in zip(type_def.fields, self._record_values)
            )
        if not parts:
            return f"#<record {type_def.display_name}>"
        return f"#<record {type_def.display_name} {parts}>"

    __str__ = __repr__


def _strictly_equal(a: Any, b: Any) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, Record):
        return Record.eql(a, b)
    return a == b
