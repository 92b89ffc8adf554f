"""Tests for the record declaration DSL."""

import pytest

from typed_records import ArgumentError, Record, TypeRegistry
from typed_records.parsing import RecordParser
from typed_records.parsing.record_lexer import RecordLexer


class TestRecordLexer:
    """Tests for the record lexer."""

    def test_tokenize_record(self):
        """Test tokenizing a record declaration."""
        lexer = RecordLexer()
        lexer.build()

        tokens = lexer.tokenize("Customer { name, zip }")
        token_types = [t.type for t in tokens]

        assert token_types == [
            "IDENTIFIER",
            "LBRACE",
            "IDENTIFIER",
            "COMMA",
            "IDENTIFIER",
            "RBRACE",
        ]

    def test_tokenize_alias(self):
        """Test tokenizing an alias definition."""
        lexer = RecordLexer()
        lexer.build()

        tokens = lexer.tokenize("define Client as Customer")
        token_types = [t.type for t in tokens]

        assert token_types == ["DEFINE", "IDENTIFIER", "AS", "IDENTIFIER"]

    def test_comments_and_newlines_ignored(self):
        """Test comments and newlines ignored."""
        lexer = RecordLexer()
        lexer.build()

        tokens = lexer.tokenize("# a comment\nPoint { x }\n")
        token_types = [t.type for t in tokens]

        assert token_types == ["IDENTIFIER", "LBRACE", "IDENTIFIER", "RBRACE"]
        assert tokens[0].lineno == 2

    def test_illegal_character(self):
        """Test illegal character."""
        lexer = RecordLexer()
        lexer.build()

        with pytest.raises(SyntaxError, match="Illegal character '@'"):
            lexer.tokenize("Point { @x }")


@pytest.fixture
def parser():
    """Create a fresh RecordParser."""
    p = RecordParser()
    p.build(debug=False, write_tables=False)
    return p


class TestRecordParser:
    """Tests for parsing declarations into record types."""

    def test_single_record(self, parser):
        """Test single record."""
        registry = parser.parse("Customer { name, address, zip }")

        customer = registry.get_or_raise("Customer")
        assert issubclass(customer, Record)
        assert customer.__record_type__.fields == ("name", "address", "zip")

        joe = customer("Joe", "123 Maple", 12345)
        assert joe.name == "Joe"
        assert joe[-1] == 12345

    def test_commas_optional(self, parser):
        """Test commas optional."""
        registry = parser.parse("""
            Point {
                x
                y
                z,
            }
        """)

        assert registry.get_or_raise("Point").__record_type__.fields == ("x", "y", "z")

    def test_trailing_comma(self, parser):
        """Test trailing comma."""
        registry = parser.parse("Point { x, y, }")
        assert registry.get_or_raise("Point").members() == ["x", "y"]

    def test_empty_record(self, parser):
        """Test empty record."""
        registry = parser.parse("Empty { }")
        assert registry.get_or_raise("Empty").__record_type__.fields == ()

    def test_lowercase_record_name(self, parser):
        """Names are taken literally in the DSL; there is no first-field overload."""
        registry = parser.parse("point { x, y }")
        point = registry.get_or_raise("point")

        assert point.__record_type__.name == "point"
        assert point.__record_type__.fields == ("x", "y")

    def test_multiple_records(self, parser):
        """Test multiple records."""
        registry = parser.parse("""
            # two shapes
            Point { x, y }
            Customer { name, zip }
        """)

        assert registry.list_types() == ["Point", "Customer"]

    def test_empty_input(self, parser):
        """Test empty input."""
        registry = parser.parse("")
        assert len(registry) == 0

    def test_alias(self, parser):
        """Test alias."""
        registry = parser.parse("""
            Customer { name }
            define Client as Customer
        """)

        assert registry.get("Client") is registry.get("Customer")

    def test_alias_before_target(self, parser):
        """Test alias before target."""
        registry = parser.parse("""
            define Client as Customer
            Customer { name }
        """)

        assert registry.get("Client") is registry.get("Customer")

    def test_alias_of_alias(self, parser):
        """Test alias of alias."""
        registry = parser.parse("""
            define Patron as Client
            define Client as Customer
            Customer { name }
        """)

        assert registry.get("Patron") is registry.get("Customer")

    def test_unresolved_alias(self, parser):
        """Test unresolved alias."""
        with pytest.raises(ValueError, match="Cannot resolve types"):
            parser.parse("define Client as Customer")

    def test_duplicate_record_name(self, parser):
        """Test duplicate record name."""
        with pytest.raises(ValueError, match="already defined"):
            parser.parse("Point { x } Point { y }")

    def test_duplicate_field(self, parser):
        """Test duplicate field."""
        with pytest.raises(ArgumentError, match="duplicate"):
            parser.parse("Point { x, x }")

    def test_syntax_error(self, parser):
        """Test syntax error."""
        with pytest.raises(SyntaxError, match="Syntax error at ','"):
            parser.parse("Point { x, , }")

    def test_unterminated(self, parser):
        """Test unterminated."""
        with pytest.raises(SyntaxError, match="end of input"):
            parser.parse("Point { x")

    def test_populates_given_registry(self, parser):
        """Test populates given registry."""
        registry = TypeRegistry()
        result = parser.parse("Point { x }", registry=registry)

        assert result is registry
        assert "Point" in registry

    def test_parser_reusable(self, parser):
        """Test parser reusable."""
        first = parser.parse("Point { x }")
        second = parser.parse("Point { x, y }")

        assert first is not second
        assert first.get("Point").members() == ["x"]
        assert second.get("Point").members() == ["x", "y"]

    def test_builds_lazily(self):
        """Test builds lazily."""
        parser = RecordParser()
        registry = parser.parse("Point { x }")
        assert "Point" in registry
