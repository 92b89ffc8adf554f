"""Typed Records - run-time record types with named, ordered fields."""

from typed_records.errors import ArgumentError, ControlFlowError
from typed_records.factory import default_registry, define, make_record_class, members, record_type_of
from typed_records.guard import RecursionGuard, recursion_guard
from typed_records.parsing import RecordParser
from typed_records.record import CYCLE_PLACEHOLDER, Record, RecordMeta
from typed_records.selectors import ByName, ByPosition, to_selector
from typed_records.types import RecordTypeDefinition, TypeRegistry

__all__ = [
    # Main API
    "define",
    "members",
    "record_type_of",
    "make_record_class",
    "default_registry",
    "RecordParser",
    # Records
    "Record",
    "RecordMeta",
    "CYCLE_PLACEHOLDER",
    # Type definitions
    "RecordTypeDefinition",
    "TypeRegistry",
    # Selectors
    "ByName",
    "ByPosition",
    "to_selector",
    # Recursion guard
    "RecursionGuard",
    "recursion_guard",
    # Errors
    "ArgumentError",
    "ControlFlowError",
]

__version__ = "0.1.0"
