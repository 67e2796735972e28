"""
Module: recognizer.timing

Purpose:
    Per-input timings for a batch of recognition runs, so a slow input
    (long stream, large memo table) stands out in the batch log.

Key Classes:
    - RunTiming: Tokenize/recognize durations and sizes for one input
    - TimingLog: All RunTimings of one batch plus its wall time

Key Functions:
    - timed_phase: Context manager yielding a Stopwatch

Used By:
    - recognizer.batch.recognize_many
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generator, List, Optional

from .diagnostics import RecognitionStats


@dataclass
class Stopwatch:
    """Elapsed seconds of a ``timed_phase`` block, set when the block exits."""
    elapsed: float = 0.0


@contextmanager
def timed_phase() -> Generator[Stopwatch, None, None]:
    """
    Time the enclosed block.

    The duration is recorded even when the block raises.

    Example:
        >>> with timed_phase() as tokenizing:
        ...     stream = TokenStream.from_text(text)
        >>> tokenizing.elapsed
    """
    watch = Stopwatch()
    start = time.perf_counter()
    try:
        yield watch
    finally:
        watch.elapsed = time.perf_counter() - start


@dataclass(frozen=True)
class RunTiming:
    """
    Timing of one input in a batch.

    ``recognize`` is the engine's own ``RecognitionStats.elapsed`` when the
    run produced a result; runs stopped by a grammar error carry the wall
    time up to the error and no memo count.
    """
    run_id: str
    tokens: int
    tokenize: float
    recognize: float
    memo_entries: Optional[int] = None

    @property
    def total(self) -> float:
        return self.tokenize + self.recognize

    @classmethod
    def from_stats(
        cls, run_id: str, tokens: int, tokenize: float, stats: RecognitionStats
    ) -> RunTiming:
        return cls(run_id, tokens, tokenize, stats.elapsed, stats.memo_entries)

    def describe(self) -> str:
        memo = "" if self.memo_entries is None else f", {self.memo_entries} memo entries"
        return f"{self.run_id} {self.total:.3f}s ({self.tokens} tokens{memo})"


@dataclass
class TimingLog:
    """
    Timings of one ``recognize_many`` batch.

    Runs are added from worker threads, in completion order.

    Attributes:
        runs: One RunTiming per finished input
        wall_time: Duration of the whole batch, set by ``finish``
    """
    runs: List[RunTiming] = field(default_factory=list)
    wall_time: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add(self, run: RunTiming) -> None:
        with self._lock:
            self.runs.append(run)

    def finish(self, wall_time: float) -> None:
        self.wall_time = wall_time

    @property
    def busy_time(self) -> float:
        """Summed run durations; exceeds ``wall_time`` when workers overlap."""
        return sum(run.total for run in self.runs)

    def slowest(self, n: int = 3) -> List[RunTiming]:
        return sorted(self.runs, key=lambda run: run.total, reverse=True)[:n]

    def summary(self, n: int = 3) -> str:
        """One log line: batch size, wall and busy time, then the slowest inputs."""
        tokens = sum(run.tokens for run in self.runs)
        line = (
            f"{len(self.runs)} inputs, {tokens} tokens in {self.wall_time:.3f}s "
            f"({self.busy_time:.3f}s across runs)"
        )
        slowest = self.slowest(n)
        if slowest:
            line += "; slowest: " + ", ".join(run.describe() for run in slowest)
        return line
