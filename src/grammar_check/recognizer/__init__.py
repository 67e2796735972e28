"""
Recognizer Package

Decides membership of a token stream in a grammar's language.

Entry points:
- Recognizer / recognize: single input
- recognize_many: many inputs against one grammar, on a thread pool
"""

from .batch import BatchOutcome, recognize_many
from .config import RecognizerConfig
from .diagnostics import FailureFrontier, RecognitionStats
from .engine import Recognizer, as_token_stream, recognize
from .results import Accepted, RecognitionResult, Rejected
from .timing import RunTiming, TimingLog, timed_phase

__all__ = [
    "BatchOutcome",
    "recognize_many",
    "RecognizerConfig",
    "FailureFrontier",
    "RecognitionStats",
    "Recognizer",
    "as_token_stream",
    "recognize",
    "Accepted",
    "RecognitionResult",
    "Rejected",
    "RunTiming",
    "TimingLog",
    "timed_phase",
]
