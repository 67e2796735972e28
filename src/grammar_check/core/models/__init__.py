"""
Core Models Package

Immutable, validated data models: grammar symbols, rules, the grammar
itself and the token stream.

All models are frozen (dataclasses or slot classes without mutators), so
a Grammar or TokenStream can be shared by concurrent recognition runs.
"""

from .symbols import (
    EMPTY,
    Class,
    Empty,
    LexicalClass,
    Literal,
    NonTerminal,
    is_terminal,
)
from .grammar import Grammar, Rule, make_rule
from .tokens import END_OF_INPUT, TokenStream, tokenize

__all__ = [
    "EMPTY",
    "Class",
    "Empty",
    "LexicalClass",
    "Literal",
    "NonTerminal",
    "is_terminal",
    "Grammar",
    "Rule",
    "make_rule",
    "END_OF_INPUT",
    "TokenStream",
    "tokenize",
]
