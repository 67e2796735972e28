"""
grammar_check Core Package

Grammar model, token stream, descriptor validation and the shared error
types. Everything here is immutable once constructed; the only mutable
state in the project is the recognizer's per-run memo table.
"""

from .errors import AmbiguousOrCyclicGrammar, GrammarCheckError, MalformedGrammar
from .models import (
    EMPTY,
    Class,
    Empty,
    Grammar,
    LexicalClass,
    Literal,
    NonTerminal,
    Rule,
    TokenStream,
    make_rule,
    tokenize,
)
from .utils.serialization import deserialize_grammar, serialize_grammar

__all__ = [
    "AmbiguousOrCyclicGrammar",
    "GrammarCheckError",
    "MalformedGrammar",
    "EMPTY",
    "Class",
    "Empty",
    "Grammar",
    "LexicalClass",
    "Literal",
    "NonTerminal",
    "Rule",
    "TokenStream",
    "make_rule",
    "tokenize",
    "deserialize_grammar",
    "serialize_grammar",
]
