"""
Module: recognizer.diagnostics

Tracks the failure frontier of one recognition run: the furthest stream
position at which a terminal (or the implicit end-of-input check) failed
to match, and what was expected there.

Also collects per-run counters for logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

from ..core.models.tokens import END_OF_INPUT


@dataclass
class RecognitionStats:
    """
    Counters for one recognition run.

    Fields:
    - memo_entries: (nonterminal, position) sub-problems solved
    - terminal_attempts: Literal/Class match attempts
    - terminal_failures: attempts that failed
    - elapsed: wall-clock seconds, filled in when the run ends
    """
    memo_entries: int = 0
    terminal_attempts: int = 0
    terminal_failures: int = 0
    elapsed: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "memo_entries": self.memo_entries,
            "terminal_attempts": self.terminal_attempts,
            "terminal_failures": self.terminal_failures,
            "elapsed": round(self.elapsed, 6),
        }

    def summary(self) -> str:
        return (
            f"{self.memo_entries} memo entries, "
            f"{self.terminal_attempts} terminal attempts "
            f"({self.terminal_failures} failed) in {self.elapsed:.3f}s"
        )


@dataclass
class FailureFrontier:
    """
    Furthest failed-match position seen so far.

    Not thread-safe: each run owns one.
    """
    collect_expected: bool = True
    position: Optional[int] = None
    expected: Set[str] = field(default_factory=set)

    def record(self, position: int, expected: str) -> None:
        """Note that ``expected`` failed to match at ``position``."""
        if self.position is None or position > self.position:
            self.position = position
            self.expected = {expected} if self.collect_expected else set()
        elif position == self.position and self.collect_expected:
            self.expected.add(expected)

    def record_end_of_input(self, position: int) -> None:
        """A derivation stopped at ``position`` but tokens remain after it."""
        self.record(position, END_OF_INPUT)

    def resolved_position(self) -> int:
        return 0 if self.position is None else self.position
