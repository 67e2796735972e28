"""
Module: symbols

Purpose:
    Provides the grammar symbol types - the building blocks of every
    alternative. A symbol is either a terminal (matched against one token)
    or a nonterminal reference (expanded through the Grammar), or the
    explicit Empty marker.

Key Classes:
    - Literal: Matches a token with exactly the given text
    - Class: Matches any token of a built-in lexical class
    - NonTerminal: Reference to a rule, resolved by name
    - Empty: Matches the empty sequence
    - LexicalClass: The fixed set of class tags and their predicates

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.grammar.Rule / Grammar
    - core.utils.serialization
    - recognizer.engine
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Tuple, Union

from ..errors import MalformedGrammar


_INTEGER_RE = re.compile(r"[0-9]+")
_IDENTIFIER_RE = re.compile(r"[a-zA-Z]+")


class LexicalClass(str, Enum):
    """Built-in token classes usable through ``Class`` symbols."""
    WORD = "word"              # letters/digits, not a reserved literal
    INTEGER = "integer"        # ASCII decimal digits
    IDENTIFIER = "identifier"  # ASCII letters, not a reserved literal

    def __str__(self) -> str:
        return self.value

    @classmethod
    def tags(cls) -> tuple[str, ...]:
        """All valid class tags, in declaration order."""
        return tuple(member.value for member in cls)

    def matches(self, text: str, reserved: AbstractSet[str] = frozenset()) -> bool:
        """
        Check whether a token's text belongs to this class.

        Args:
            text: Token text to classify
            reserved: Literal texts used by the grammar. Word-like classes
                never match these (keywords take priority).

        Returns:
            True if the token belongs to the class
        """
        if not text:
            return False
        if self is LexicalClass.INTEGER:
            return _INTEGER_RE.fullmatch(text) is not None
        if text in reserved:
            return False
        if self is LexicalClass.IDENTIFIER:
            return _IDENTIFIER_RE.fullmatch(text) is not None
        return text.isalnum()


@dataclass(frozen=True, slots=True)
class Literal:
    """
    Terminal matching one token exactly.

    Example:
        >>> Literal("contact").matches("contact")
        True
    """

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text:
            raise MalformedGrammar(f"Literal text must be a non-empty string: {self.text!r}")

    def matches(self, token: str, reserved: AbstractSet[str] = frozenset()) -> bool:
        return token == self.text

    def __str__(self) -> str:
        return f'"{self.text}"'


@dataclass(frozen=True, slots=True)
class Class:
    """
    Terminal matching any token of a lexical class.

    Attributes:
        name: The LexicalClass tag (coerced from its string value)
    """

    name: LexicalClass

    def __post_init__(self) -> None:
        try:
            # Frozen dataclass: normalize the tag through object.__setattr__
            object.__setattr__(self, "name", LexicalClass(self.name))
        except ValueError:
            raise MalformedGrammar(
                f"Unknown lexical class: {self.name!r} (expected one of {LexicalClass.tags()})"
            ) from None

    def matches(self, token: str, reserved: AbstractSet[str] = frozenset()) -> bool:
        return self.name.matches(token, reserved)

    def __str__(self) -> str:
        return f"<{self.name.value}>"


@dataclass(frozen=True, slots=True)
class NonTerminal:
    """Reference to the rule called ``name``."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise MalformedGrammar(f"Nonterminal name must be a non-empty string: {self.name!r}")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Empty:
    """Matches the empty sequence without consuming a token."""

    def __str__(self) -> str:
        return "ε"


EMPTY = Empty()

Terminal = Union[Literal, Class]
Symbol = Union[Literal, Class, NonTerminal, Empty]
Alternative = Tuple[Symbol, ...]


def is_terminal(symbol: Symbol) -> bool:
    """True for symbols matched directly against a token."""
    return isinstance(symbol, (Literal, Class))
