"""
Error types shared by the grammar model and the recognizer.

``Rejected`` is deliberately absent: a rejected input is a normal result,
see ``grammar_check.recognizer.results``.
"""

from __future__ import annotations

from typing import Optional, Sequence


class GrammarCheckError(Exception):
    """Base class for errors raised by grammar_check."""


class MalformedGrammar(GrammarCheckError, ValueError):
    """
    Raised when a grammar is structurally invalid.

    Always raised at construction time, before any recognition starts.
    Also a ValueError, so bad symbol arguments can be caught either way.

    Attributes:
        reason: Human-readable description of the problem
        path: Location in the descriptor ("rules[2].alternatives[0][1]")
        errors: All individual problems found (schema validation may find several)
        nonterminal: Offending nonterminal, when one is known
    """

    def __init__(
        self,
        reason: str,
        path: str = "",
        errors: list[str] | None = None,
        nonterminal: Optional[str] = None,
    ):
        super().__init__(reason)
        self.reason = reason
        self.path = path
        self.errors = errors or [reason]
        self.nonterminal = nonterminal


class AmbiguousOrCyclicGrammar(GrammarCheckError):
    """
    Raised when a nonterminal can derive itself at the same position
    without consuming a token (left recursion included).

    Attributes:
        nonterminal: Nonterminal that was re-entered
        position: Stream position at which the cycle was found
        cycle: Nonterminals on the cycle, starting and ending with ``nonterminal``
    """

    def __init__(self, nonterminal: str, position: int, cycle: Sequence[str] = ()):
        self.nonterminal = nonterminal
        self.position = position
        self.cycle = tuple(cycle) or (nonterminal, nonterminal)
        super().__init__(
            f"Nonterminal {nonterminal!r} derives itself at position {position} "
            f"without consuming input: {' -> '.join(self.cycle)}"
        )
