"""
Module: recognizer.batch

Purpose:
    Validate many independent inputs against one grammar, concurrently.

Key Classes:
    - BatchOutcome: Result (or grammar error) for one input

Key Functions:
    - recognize_many(grammar, inputs, config): Run every input, results in input order

Dependencies:
    - concurrent.futures: Thread pool
    - .engine.Recognizer

Notes:
    The Grammar is shared read-only between workers; each run owns its
    memo table, so no locking is needed around recognition itself.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.errors import AmbiguousOrCyclicGrammar
from ..core.models.grammar import Grammar
from .config import RecognizerConfig
from .engine import Recognizer, TokensLike, as_token_stream
from .results import RecognitionResult
from .timing import RunTiming, TimingLog, timed_phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchOutcome:
    """
    Outcome of one input in a batch.

    Exactly one of ``result`` and ``error`` is set.
    """
    index: int
    result: Optional[RecognitionResult] = None
    error: Optional[AmbiguousOrCyclicGrammar] = None

    @property
    def accepted(self) -> bool:
        return self.result is not None and self.result.accepted


def _run_one(
    recognizer: Recognizer,
    index: int,
    tokens: TokensLike,
    timing: TimingLog,
) -> BatchOutcome:
    run_id = f"input-{index}"
    with timed_phase() as tokenizing:
        stream = as_token_stream(tokens)
    try:
        with timed_phase() as recognizing:
            result = recognizer.recognize(stream)
    except AmbiguousOrCyclicGrammar as e:
        timing.add(RunTiming(run_id, len(stream), tokenizing.elapsed, recognizing.elapsed))
        logger.warning(f"{run_id}: {e}")
        return BatchOutcome(index=index, error=e)
    timing.add(RunTiming.from_stats(run_id, len(stream), tokenizing.elapsed, result.stats))
    logger.debug(f"{run_id}: {result.message}")
    return BatchOutcome(index=index, result=result)


def recognize_many(
    grammar: Grammar,
    inputs: Sequence[TokensLike],
    config: Optional[RecognizerConfig] = None,
    timing: Optional[TimingLog] = None,
) -> List[BatchOutcome]:
    """
    Recognize every input against ``grammar``.

    Args:
        grammar: Validated grammar, shared by all runs
        inputs: Raw texts, TokenStreams or token lists
        config: Optional RecognizerConfig (``max_workers`` sizes the pool)
        timing: Optional TimingLog to collect per-input timings into

    Returns:
        One BatchOutcome per input, in input order. A cyclic grammar is
        reported per input through ``BatchOutcome.error``.
    """
    config = config or RecognizerConfig()
    timing = timing if timing is not None else TimingLog()
    recognizer = Recognizer(grammar, config)
    inputs = list(inputs)

    with timed_phase() as batch:
        if len(inputs) > 1 and config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=min(config.max_workers, len(inputs))) as pool:
                futures = [
                    pool.submit(_run_one, recognizer, index, tokens, timing)
                    for index, tokens in enumerate(inputs)
                ]
                outcomes = [future.result() for future in futures]
        else:
            # Single input or single worker: run inline
            outcomes = [
                _run_one(recognizer, index, tokens, timing)
                for index, tokens in enumerate(inputs)
            ]
    timing.finish(batch.elapsed)

    accepted = sum(1 for outcome in outcomes if outcome.accepted)
    failed = sum(1 for outcome in outcomes if outcome.error is not None)
    logger.info(
        f"Recognized {len(outcomes)} inputs: {accepted} accepted, "
        f"{len(outcomes) - accepted - failed} rejected, {failed} grammar errors"
    )
    if config.log_stats:
        logger.debug(timing.summary())
    return outcomes
