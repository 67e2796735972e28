"""
Module: recognizer.engine

Purpose:
    The recognition engine. Decides whether a grammar's start symbol
    derives exactly the whole token stream.

Algorithm:
    Memoized exhaustive search (packrat style, but over sets of end
    positions rather than a single ordered-choice result):

    ends(N, p) = union over the alternatives A of N of seq(A, p)
    seq(A, p)  = positions reachable by matching A's symbols left to right,
                 following every candidate end position of each symbol

    The input is accepted iff len(stream) is in ends(start, 0).

    Every alternative is explored, so an alternative that only matches a
    prefix never hides a later one that consumes the whole stream.

    Each (N, p) is solved once per run. While it is being solved it holds
    a provisional "in progress" memo entry; reaching that entry again means
    N derives itself at p without consuming input, which is reported as
    AmbiguousOrCyclicGrammar instead of looping.

    Derivations are generators that yield (N, p) sub-problems and receive
    their end-position sets. A work stack drives them, so deep right
    recursion does not hit the interpreter's recursion limit.

Key Classes:
    - Recognizer: Binds a Grammar and config; one memo table per recognize() call

Key Functions:
    - recognize(grammar, tokens, config): One-shot convenience wrapper

Used By:
    - recognizer.batch
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, FrozenSet, Generator, Iterable, List, Optional, Set, Tuple, Union

from ..core.errors import AmbiguousOrCyclicGrammar
from ..core.models.grammar import Grammar
from ..core.models.symbols import Empty, NonTerminal, Terminal
from ..core.models.tokens import TokenStream
from ..core.utils.serialization import deserialize_grammar
from .config import RecognizerConfig
from .diagnostics import FailureFrontier, RecognitionStats
from .results import Accepted, RecognitionResult, Rejected

logger = logging.getLogger(__name__)

# Provisional memo entry for a sub-problem that is still being solved
_IN_PROGRESS = object()

SubProblem = Tuple[str, int]
Derivation = Generator[SubProblem, FrozenSet[int], FrozenSet[int]]
TokensLike = Union[str, TokenStream, Iterable[str]]


def as_token_stream(tokens: TokensLike) -> TokenStream:
    """Accept raw text, a TokenStream, or any iterable of token strings."""
    if isinstance(tokens, TokenStream):
        return tokens
    if isinstance(tokens, str):
        return TokenStream.from_text(tokens)
    return TokenStream(tokens)


class _Run:
    """
    State of a single recognize() call: memo table, failure frontier, stats.

    Never shared between calls or threads.
    """

    def __init__(self, grammar: Grammar, stream: TokenStream, config: RecognizerConfig):
        self.grammar = grammar
        self.memo: Dict[SubProblem, Any] = {}
        self.frontier = FailureFrontier(collect_expected=config.collect_expected)
        self.stats = RecognitionStats()
        self._tokens = stream.tokens
        self._length = len(stream)
        self._reserved = grammar.reserved_literals

    def solve(self, name: str, position: int) -> FrozenSet[int]:
        """End positions of every derivation of ``name`` starting at ``position``."""
        root = (name, position)
        self.memo[root] = _IN_PROGRESS
        stack: List[Tuple[SubProblem, Derivation]] = [(root, self._expand(name, position))]
        reply: Optional[FrozenSet[int]] = None

        while stack:
            key, derivation = stack[-1]
            try:
                request = derivation.send(reply)
            except StopIteration as finished:
                stack.pop()
                reply = finished.value
                self.memo[key] = reply
                self.stats.memo_entries += 1
                continue

            cached = self.memo.get(request)
            if cached is _IN_PROGRESS:
                raise AmbiguousOrCyclicGrammar(
                    request[0], request[1], _cycle(stack, request)
                )
            if cached is not None:
                reply = cached
                continue

            self.memo[request] = _IN_PROGRESS
            stack.append((request, self._expand(*request)))
            reply = None

        return self.memo[root]

    def _expand(self, name: str, position: int) -> Derivation:
        """Derive every alternative of ``name`` at ``position``."""
        ends: Set[int] = set()
        for alternative in self.grammar.alternatives(name):
            positions: Set[int] = {position}
            for symbol in alternative:
                reached: Set[int] = set()
                for start in sorted(positions):
                    if isinstance(symbol, NonTerminal):
                        sub_ends = yield (symbol.name, start)
                        reached |= sub_ends
                    elif isinstance(symbol, Empty):
                        reached.add(start)
                    elif self._match(symbol, start):
                        reached.add(start + 1)
                positions = reached
                if not positions:
                    break
            ends |= positions
        return frozenset(ends)

    def _match(self, symbol: Terminal, position: int) -> bool:
        self.stats.terminal_attempts += 1
        if position < self._length and symbol.matches(self._tokens[position], self._reserved):
            return True
        self.stats.terminal_failures += 1
        self.frontier.record(position, str(symbol))
        return False


def _cycle(stack: List[Tuple[SubProblem, Derivation]], request: SubProblem) -> Tuple[str, ...]:
    """Nonterminals from the first occurrence of ``request`` on the stack back to it."""
    keys = [key for key, _ in stack]
    first = keys.index(request)
    return tuple(name for name, _ in keys[first:]) + (request[0],)


class Recognizer:
    """
    Recognizer for one grammar.

    The grammar is read-only, so one Recognizer may serve many threads;
    every recognize() call builds its own memo table.

    Example:
        >>> recognizer = Recognizer(grammar)
        >>> result = recognizer.recognize("contact A B 20 32")
        >>> result.accepted
        True
    """

    def __init__(self, grammar: Grammar, config: Optional[RecognizerConfig] = None):
        if not isinstance(grammar, Grammar):
            raise TypeError(f"grammar must be a Grammar, got {type(grammar).__name__}")
        self._grammar = grammar
        self._config = config or RecognizerConfig()

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def config(self) -> RecognizerConfig:
        return self._config

    def recognize(self, tokens: TokensLike) -> RecognitionResult:
        """
        Decide whether the start symbol derives exactly ``tokens``.

        Args:
            tokens: Raw text (split on whitespace), a TokenStream, or an
                iterable of token strings

        Returns:
            Accepted, or Rejected carrying the failure frontier

        Raises:
            AmbiguousOrCyclicGrammar: If a nonterminal derives itself at
                the same position without consuming input
        """
        stream = as_token_stream(tokens)
        run = _Run(self._grammar, stream, self._config)

        started = time.perf_counter()
        try:
            ends = run.solve(self._grammar.start, 0)
        finally:
            run.stats.elapsed = time.perf_counter() - started

        length = len(stream)
        if length in ends:
            result: RecognitionResult = Accepted(length, stats=run.stats)
        else:
            if ends:
                run.frontier.record_end_of_input(max(ends))
            position = run.frontier.resolved_position()
            result = Rejected(
                frontier_position=position,
                frontier_token=stream.at(position),
                expected=tuple(sorted(run.frontier.expected)),
                stats=run.stats,
            )

        if self._config.log_stats:
            logger.debug(f"{result.message}; {run.stats.summary()}")
        return result

    def accepts(self, tokens: TokensLike) -> bool:
        """Boolean shorthand for ``recognize(tokens).accepted``."""
        return self.recognize(tokens).accepted


def recognize(
    grammar: Union[Grammar, Dict[str, Any]],
    tokens: TokensLike,
    config: Optional[RecognizerConfig] = None,
) -> RecognitionResult:
    """
    One-shot recognition.

    Args:
        grammar: A Grammar, or a descriptor dict (validated and converted)
        tokens: Raw text, a TokenStream, or an iterable of token strings
        config: Optional RecognizerConfig

    Raises:
        MalformedGrammar: If ``grammar`` is a descriptor that fails validation
        AmbiguousOrCyclicGrammar: See Recognizer.recognize
    """
    if not isinstance(grammar, Grammar):
        grammar = deserialize_grammar(grammar)
    return Recognizer(grammar, config).recognize(tokens)
