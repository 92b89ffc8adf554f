"""Parsing module for the record declaration DSL."""

from typed_records.parsing.record_lexer import RecordLexer
from typed_records.parsing.record_parser import RecordParser

__all__ = [
    "RecordLexer",
    "RecordParser",
]
