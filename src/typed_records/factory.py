"""Building record types at run time."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from typed_records.record import Record, RecordMeta
from typed_records.types import RecordTypeDefinition, TypeRegistry, is_display_name, to_identifier


logger = logging.getLogger(__name__)

# Where named record types land when no registry is passed to define()
default_registry = TypeRegistry()


def _accessor(index: int, name: str) -> property:
    """Build the property for one field; it reads and writes slot ``index``."""

    def fget(self: Record) -> Any:
        return self._record_values[index]

    def fset(self: Record, value: Any) -> None:
        self._record_values[index] = value

    return property(fget, fset, doc=f"Field {index}: {name}")


def make_record_class(
    name: str | None,
    fields: Iterable[Any],
    methods: Mapping[str, Any] | None = None,
) -> type[Record]:
    """Create a record class for the given name and fields without registering it.

    Args:
        name: Type name, or None for an anonymous type.
        fields: Field identifiers, in order.
        methods: Extra class attributes (usually functions) for the new type.

    Returns:
        A new subclass of Record.
    """
    type_def = RecordTypeDefinition(name=name, fields=tuple(to_identifier(f) for f in fields))

    namespace: dict[str, Any] = {
        "__slots__": (),
        "__record_type__": type_def,
        "__module__": __name__,
    }
    for index, field_name in enumerate(type_def.fields):
        namespace[field_name] = _accessor(index, field_name)
    if methods:
        namespace.update(methods)

    class_name = name if name is not None else "AnonymousRecord"
    record_class = RecordMeta(class_name, (Record,), namespace)
    logger.debug("built record type %s%r", type_def.display_name, type_def.fields)
    return record_class


def define(
    *args: Any,
    methods: Mapping[str, Any] | None = None,
    registry: TypeRegistry | None = None,
) -> type[Record]:
    """Create a new record type.

    The first argument names the type when it is a capitalized identifier
    (``define("Customer", "name", "zip")``). Anything else in that position is
    taken as the first field and the type is anonymous
    (``define("name", "zip")``); an explicit None also makes it anonymous.
    Fields may also be given as a single list or tuple.

    A named type is registered in ``registry`` (the module's
    ``default_registry`` if not given), replacing any earlier type of the
    same name.

    Raises:
        ArgumentError: If a field name is None, malformed, reserved or repeated.
        TypeError: If a field name is not a string.
    """
    attrs = list(args)
    name: str | None = None
    if attrs:
        if attrs[0] is None:
            attrs.pop(0)
        elif is_display_name(attrs[0]):
            name = attrs.pop(0)

    if len(attrs) == 1 and isinstance(attrs[0], (list, tuple)):
        attrs = list(attrs[0])

    record_class = make_record_class(name, attrs, methods)
    if name is not None:
        if registry is None:
            registry = default_registry
        registry.register(record_class, replace=True)
    return record_class


def members(record: type[Record] | Record) -> list[str]:
    """Return the field names of a record type or instance, in field order.

    Works even when a field named ``members`` shadows the method.
    """
    record_class = record if isinstance(record, type) else type(record)
    return record_class.__record_type__.members()


def record_type_of(record: type[Record] | Record) -> RecordTypeDefinition:
    """Return the type definition behind a record type or instance."""
    record_class = record if isinstance(record, type) else type(record)
    return record_class.__record_type__
