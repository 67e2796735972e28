"""
Module: grammar

Purpose:
    Provides the Rule and Grammar models - the validated, immutable set of
    production rules the recognizer works on. Rules reference each other
    by nonterminal name, so self and mutual recursion need no ordering.

Key Functions:
    - Grammar.alternatives(name): Alternatives of a nonterminal (total after construction)
    - Grammar.reserved_literals: Literal texts, excluded from word-like classes
    - Grammar.unreachable(): Declared rules the start symbol never reaches
    - Grammar.to_dict(): Serialize back to a descriptor

Dependencies:
    - dataclasses (std)
    - logging (std)
    - .symbols

Used By:
    - core.utils.serialization
    - recognizer.engine
    - recognizer.batch

Invariants:
    - Every rule has at least one alternative
    - Every NonTerminal in any alternative names a declared rule
    - The start symbol names a declared rule
    - Nonterminal names are unique
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Sequence

from ..errors import MalformedGrammar
from .symbols import EMPTY, Alternative, Class, Empty, Literal, NonTerminal, Symbol

logger = logging.getLogger(__name__)

_SYMBOL_TYPES = (Literal, Class, NonTerminal, Empty)


@dataclass(frozen=True, slots=True)
class Rule:
    """
    A nonterminal and the ordered alternatives it expands to.

    Attributes:
        name: Nonterminal name
        alternatives: Non-empty tuple of alternatives, each a tuple of symbols.
            An empty tuple is the empty sequence.

    Example:
        >>> r = Rule("S", [[Literal("a")], [Literal("a"), Literal("b")]])
        >>> len(r.alternatives)
        2
    """

    name: str
    alternatives: tuple[Alternative, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise MalformedGrammar(f"Invalid nonterminal name: {self.name!r}")

        alternatives = tuple(tuple(alt) for alt in self.alternatives)
        if not alternatives:
            raise MalformedGrammar(
                f"Rule {self.name!r} has no alternatives",
                nonterminal=self.name,
            )
        for index, alternative in enumerate(alternatives):
            for symbol in alternative:
                if not isinstance(symbol, _SYMBOL_TYPES):
                    raise MalformedGrammar(
                        f"Rule {self.name!r}, alternative {index}: not a grammar symbol: {symbol!r}",
                        nonterminal=self.name,
                    )
        object.__setattr__(self, "alternatives", alternatives)

    def references(self) -> Iterator[str]:
        """Yield every nonterminal name this rule mentions (with repeats)."""
        for alternative in self.alternatives:
            for symbol in alternative:
                if isinstance(symbol, NonTerminal):
                    yield symbol.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "nonterminal_name": self.name,
            "alternatives": [
                [symbol_to_dict(symbol) for symbol in alternative]
                for alternative in self.alternatives
            ],
        }

    def __str__(self) -> str:
        bodies = [
            " ".join(str(s) for s in alternative) if alternative else str(EMPTY)
            for alternative in self.alternatives
        ]
        return f"{self.name} -> {' | '.join(bodies)}"


class Grammar:
    """
    Validated, immutable collection of rules plus the start symbol.

    Safe to share between threads: nothing is mutated after ``__init__``.

    Attributes:
        start: Name of the start symbol
        reserved_literals: Texts of every Literal used in any rule

    Raises:
        MalformedGrammar: On duplicate rules, dangling references or an
            undeclared start symbol

    Example:
        >>> g = Grammar([Rule("S", [[Literal("a")]])], start="S")
        >>> g.alternatives("S")
        ((Literal(text='a'),),)
    """

    __slots__ = ("_rules", "_start", "_reserved")

    def __init__(self, rules: Iterable[Rule], start: str):
        table: dict[str, Rule] = {}
        for rule in rules:
            if not isinstance(rule, Rule):
                raise MalformedGrammar(f"Not a Rule: {rule!r}")
            if rule.name in table:
                raise MalformedGrammar(
                    f"Nonterminal {rule.name!r} is declared more than once",
                    nonterminal=rule.name,
                )
            table[rule.name] = rule

        if not isinstance(start, str) or start not in table:
            raise MalformedGrammar(
                f"Start symbol {start!r} is not a declared nonterminal "
                f"(declared: {sorted(table)})",
                path="start_symbol",
                nonterminal=start if isinstance(start, str) else None,
            )

        dangling = [
            f"Rule {rule.name!r} references undeclared nonterminal {ref!r}"
            for rule in table.values()
            for ref in dict.fromkeys(rule.references())
            if ref not in table
        ]
        if dangling:
            first_rule = next(
                rule.name for rule in table.values()
                if any(ref not in table for ref in rule.references())
            )
            raise MalformedGrammar(dangling[0], errors=dangling, nonterminal=first_rule)

        self._rules: Mapping[str, Rule] = MappingProxyType(table)
        self._start = start
        self._reserved = frozenset(
            symbol.text
            for rule in table.values()
            for alternative in rule.alternatives
            for symbol in alternative
            if isinstance(symbol, Literal)
        )

        unreachable = self.unreachable()
        if unreachable:
            logger.warning(
                f"Rules not reachable from start symbol {start!r}: {', '.join(unreachable)}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def start(self) -> str:
        return self._start

    @property
    def names(self) -> tuple[str, ...]:
        """Nonterminal names in declaration order."""
        return tuple(self._rules)

    @property
    def reserved_literals(self) -> frozenset[str]:
        return self._reserved

    def rule(self, name: str) -> Rule:
        return self._rules[name]

    def alternatives(self, name: str) -> tuple[Alternative, ...]:
        """
        Alternatives of a nonterminal, in declaration order.

        Total for every name referenced by the grammar; a KeyError here
        means the caller passed a name from outside the grammar.
        """
        return self._rules[name].alternatives

    def unreachable(self) -> tuple[str, ...]:
        """Declared nonterminals the start symbol can never expand to."""
        seen = {self._start}
        pending = [self._start]
        while pending:
            for ref in self._rules[pending.pop()].references():
                if ref not in seen:
                    seen.add(ref)
                    pending.append(ref)
        return tuple(name for name in self._rules if name not in seen)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Descriptor accepted by ``deserialize_grammar``."""
        return {
            "start_symbol": self._start,
            "rules": [rule.to_dict() for rule in self._rules.values()],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grammar):
            return NotImplemented
        return self._start == other._start and dict(self._rules) == dict(other._rules)

    def __hash__(self) -> int:
        return hash((self._start, tuple(self._rules.values())))

    def __str__(self) -> str:
        return "\n".join(str(rule) for rule in self._rules.values())

    def __repr__(self) -> str:
        return f"Grammar(start={self._start!r}, rules={list(self._rules)})"


def symbol_to_dict(symbol: Symbol) -> dict[str, Any]:
    """Serialize one symbol to its descriptor form."""
    if isinstance(symbol, Literal):
        return {"literal": symbol.text}
    if isinstance(symbol, Class):
        return {"class": symbol.name.value}
    if isinstance(symbol, NonTerminal):
        return {"nonterminal": symbol.name}
    return {"empty": True}


def make_rule(name: str, *alternatives: Sequence[Symbol]) -> Rule:
    """Shorthand for building a Rule in code: ``make_rule("S", [a, b], [c])``."""
    return Rule(name, tuple(tuple(alt) for alt in alternatives))
