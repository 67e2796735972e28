"""
Module: recognizer.results

Purpose:
    Result values of a recognition run. ``Accepted`` and ``Rejected`` are
    plain values; rejection is an expected outcome, never an exception.

Key Classes:
    - Accepted: The whole stream derives from the start symbol
    - Rejected: No derivation consumes the whole stream; carries the
      failure frontier (position, token found there, expected terminals)

Used By:
    - recognizer.engine
    - recognizer.batch
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ..core.models.tokens import END_OF_INPUT
from .diagnostics import RecognitionStats


@dataclass(frozen=True)
class Accepted:
    """
    The input is a member of the grammar's language.

    Attributes:
        length: Number of tokens consumed (the whole stream)
        stats: Counters for the run (excluded from equality)
    """
    length: int
    stats: RecognitionStats = field(default_factory=RecognitionStats, compare=False, repr=False)

    @property
    def accepted(self) -> bool:
        return True

    def __bool__(self) -> bool:
        return True

    @property
    def message(self) -> str:
        return f"accepted ({self.length} tokens)"


@dataclass(frozen=True)
class Rejected:
    """
    The input is not a member of the grammar's language.

    Attributes:
        frontier_position: Furthest position where a terminal failed to match
        frontier_token: Token at that position, None at end of input
        expected: Terminals that failed there, sorted ("end of input" when
            a derivation stopped there with tokens left over)
        stats: Counters for the run (excluded from equality)

    Example:
        >>> r = Rejected(1, "c", ('"b"',))
        >>> r.message
        'rejected at position 1: found "c", expected "b"'
    """
    frontier_position: int
    frontier_token: Optional[str]
    expected: Tuple[str, ...] = ()
    stats: RecognitionStats = field(default_factory=RecognitionStats, compare=False, repr=False)

    @property
    def accepted(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    @property
    def at_end_of_input(self) -> bool:
        return self.frontier_token is None

    @property
    def found(self) -> str:
        """Frontier token, or "end of input"."""
        return END_OF_INPUT if self.frontier_token is None else f'"{self.frontier_token}"'

    @property
    def message(self) -> str:
        text = f"rejected at position {self.frontier_position}: found {self.found}"
        if self.expected:
            text += f", expected {' or '.join(self.expected)}"
        return text


RecognitionResult = Union[Accepted, Rejected]
