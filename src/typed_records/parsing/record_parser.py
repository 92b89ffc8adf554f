"""Parser for the record declaration DSL.

Declarations look like::

    # comment
    Customer { name, address, zip }
    Point { x y }
    define Client as Customer

Commas between fields are optional and a trailing comma is allowed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import ply.yacc as yacc

from typed_records.factory import make_record_class
from typed_records.parsing.record_lexer import RecordLexer
from typed_records.types import TypeRegistry


@dataclass
class RecordSpec:
    """Specification for a record type before it is built."""

    name: str
    fields: list[str]
    lineno: int = 0


@dataclass
class AliasSpec:
    """Specification for an alias before resolution."""

    name: str
    target: str
    lineno: int = 0


class RecordParser:
    """Parser for the record declaration DSL."""

    tokens = RecordLexer.tokens

    def __init__(self) -> None:
        self.lexer = RecordLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore
        self.registry: TypeRegistry = TypeRegistry()
        self._specs: list[RecordSpec | AliasSpec] = []

    def p_schema(self, p: yacc.YaccProduction) -> None:
        """schema : statement_list"""
        p[0] = p[1]

    def p_statement_list_empty(self, p: yacc.YaccProduction) -> None:
        """statement_list :"""
        p[0] = []

    def p_statement_list_multiple(self, p: yacc.YaccProduction) -> None:
        """statement_list : statement_list statement"""
        p[0] = p[1]
        p[0].append(p[2])

    def p_statement(self, p: yacc.YaccProduction) -> None:
        """statement : record_def
                     | alias_def"""
        p[0] = p[1]

    def p_alias_def(self, p: yacc.YaccProduction) -> None:
        """alias_def : DEFINE IDENTIFIER AS IDENTIFIER"""
        p[0] = AliasSpec(name=p[2], target=p[4], lineno=p.lineno(1))

    def p_record_def(self, p: yacc.YaccProduction) -> None:
        """record_def : IDENTIFIER LBRACE field_list RBRACE
                      | IDENTIFIER LBRACE field_list COMMA RBRACE"""
        p[0] = RecordSpec(name=p[1], fields=p[3], lineno=p.lineno(1))

    def p_record_def_empty(self, p: yacc.YaccProduction) -> None:
        """record_def : IDENTIFIER LBRACE RBRACE"""
        p[0] = RecordSpec(name=p[1], fields=[], lineno=p.lineno(1))

    def p_field_list_single(self, p: yacc.YaccProduction) -> None:
        """field_list : IDENTIFIER"""
        p[0] = [p[1]]

    def p_field_list_multiple(self, p: yacc.YaccProduction) -> None:
        """field_list : field_list COMMA IDENTIFIER
                      | field_list IDENTIFIER"""
        p[0] = p[1] + [p[len(p) - 1]]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str, registry: TypeRegistry | None = None) -> TypeRegistry:
        """Parse record declarations and return the registry holding the new types.

        Args:
            data: Declaration text.
            registry: Registry to populate. A fresh one is used if omitted.

        Raises:
            SyntaxError: On malformed input.
            ValueError: If a name is declared twice or an alias cannot be resolved.
            ArgumentError: If a record repeats a field or uses a reserved name.
        """
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        self.registry = registry if registry is not None else TypeRegistry()
        self._specs = []

        self.lexer.input(data)
        specs = self.parser.parse(data, lexer=self.lexer.lexer)
        if specs is None:
            specs = []
        self._specs = specs

        self._resolve_specs()

        return self.registry

    def _resolve_specs(self) -> None:
        """Build all records first, then resolve aliases until none are left.

        Aliases may refer to records declared later or to other aliases, so
        they are retried until a pass makes no progress.
        """
        for spec in self._specs:
            if isinstance(spec, RecordSpec):
                record_class = make_record_class(spec.name, spec.fields)
                self.registry.register(record_class)

        unresolved = [spec for spec in self._specs if isinstance(spec, AliasSpec)]
        max_iterations = len(unresolved) + 1
        for _ in range(max_iterations):
            if not unresolved:
                break

            still_unresolved: list[AliasSpec] = []
            for spec in unresolved:
                if spec.target in self.registry:
                    self.registry.register_alias(spec.name, spec.target)
                else:
                    # Target not yet resolved
                    still_unresolved.append(spec)

            if len(still_unresolved) == len(unresolved):
                remaining = [s.name for s in still_unresolved]
                raise ValueError(f"Cannot resolve types: {remaining}")
            unresolved = still_unresolved
