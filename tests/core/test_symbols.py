"""
Unit Tests for Grammar Symbols

Tests for Literal, Class, NonTerminal, Empty and the LexicalClass predicates.
"""

import pytest

from grammar_check.core.errors import MalformedGrammar
from grammar_check.core.models.symbols import (
    EMPTY,
    Class,
    Empty,
    LexicalClass,
    Literal,
    NonTerminal,
    is_terminal,
)


class TestLexicalClass:
    """Tests for the class predicates."""

    def test_integer_when_digits_then_matches(self):
        assert LexicalClass.INTEGER.matches("42")
        assert LexicalClass.INTEGER.matches("007")

    def test_integer_when_mixed_then_rejects(self):
        assert not LexicalClass.INTEGER.matches("A1")
        assert not LexicalClass.INTEGER.matches("-3")
        assert not LexicalClass.INTEGER.matches("")

    def test_identifier_when_letters_then_matches(self):
        assert LexicalClass.IDENTIFIER.matches("A")
        assert LexicalClass.IDENTIFIER.matches("node")

    def test_identifier_when_digits_present_then_rejects(self):
        assert not LexicalClass.IDENTIFIER.matches("A1")
        assert not LexicalClass.IDENTIFIER.matches("20")

    def test_word_when_alphanumeric_then_matches(self):
        assert LexicalClass.WORD.matches("A1")
        assert LexicalClass.WORD.matches("20")

    def test_word_when_punctuation_then_rejects(self):
        assert not LexicalClass.WORD.matches("a-b")

    def test_word_when_reserved_then_rejects(self):
        """Literals used by the grammar are keywords, not words."""
        reserved = frozenset({"contact", "rate"})
        assert not LexicalClass.WORD.matches("contact", reserved)
        assert not LexicalClass.IDENTIFIER.matches("rate", reserved)
        assert LexicalClass.WORD.matches("delay", reserved)

    def test_integer_when_reserved_then_still_matches(self):
        assert LexicalClass.INTEGER.matches("1", frozenset({"1"}))

    def test_tags_when_called_then_lists_values(self):
        assert LexicalClass.tags() == ("word", "integer", "identifier")


class TestSymbols:
    """Tests for symbol construction and matching."""

    def test_literal_when_same_text_then_matches(self):
        assert Literal("a").matches("a")
        assert not Literal("a").matches("b")

    def test_literal_when_empty_text_then_raises_error(self):
        with pytest.raises(ValueError, match="non-empty"):
            Literal("")

    def test_class_when_string_tag_then_coerced(self):
        symbol = Class("integer")
        assert symbol.name is LexicalClass.INTEGER
        assert symbol == Class(LexicalClass.INTEGER)

    def test_class_when_unknown_tag_then_raises_error(self):
        with pytest.raises(ValueError, match="Unknown lexical class"):
            Class("float")

    def test_class_when_unknown_tag_then_error_is_malformed_grammar(self):
        with pytest.raises(MalformedGrammar) as exc:
            Class("float")
        assert isinstance(exc.value, ValueError)

    def test_class_when_integer_then_accepts_42_rejects_a1(self):
        symbol = Class("integer")
        assert symbol.matches("42")
        assert not symbol.matches("A1")

    def test_nonterminal_when_empty_name_then_raises_error(self):
        with pytest.raises(ValueError):
            NonTerminal("")

    def test_symbols_when_frozen_then_immutable(self):
        symbol = Literal("a")
        with pytest.raises(AttributeError):
            symbol.text = "b"  # type: ignore

    def test_empty_when_compared_then_equal_to_singleton(self):
        assert Empty() == EMPTY
        assert hash(Empty()) == hash(EMPTY)

    def test_is_terminal_when_checked_then_only_literal_and_class(self):
        assert is_terminal(Literal("a"))
        assert is_terminal(Class("word"))
        assert not is_terminal(NonTerminal("S"))
        assert not is_terminal(EMPTY)

    def test_str_when_rendered_then_readable(self):
        assert str(Literal("b")) == '"b"'
        assert str(Class("integer")) == "<integer>"
        assert str(NonTerminal("S")) == "S"
