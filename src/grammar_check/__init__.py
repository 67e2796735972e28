"""Top-level package for grammar_check.

Checks whether a whitespace-tokenized input belongs to the language of a
context-free grammar.

Provides subpackages:
- grammar_check.core – grammar model, token stream, descriptor validation, errors
- grammar_check.recognizer – the recognition engine, results and batch runs
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from .core import (
    AmbiguousOrCyclicGrammar,
    Grammar,
    GrammarCheckError,
    MalformedGrammar,
    TokenStream,
    deserialize_grammar,
    serialize_grammar,
    tokenize,
)
from .recognizer import Accepted, Recognizer, RecognizerConfig, Rejected, recognize, recognize_many


def _get_version() -> str:
    """Version of the installed distribution, or 0.0.0 from a source checkout."""
    try:
        return _pkg_version("grammar-check")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = [
    "__version__",
    "AmbiguousOrCyclicGrammar",
    "Grammar",
    "GrammarCheckError",
    "MalformedGrammar",
    "TokenStream",
    "deserialize_grammar",
    "serialize_grammar",
    "tokenize",
    "Accepted",
    "Recognizer",
    "RecognizerConfig",
    "Rejected",
    "recognize",
    "recognize_many",
]
