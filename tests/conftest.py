import copy
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import grammar_check
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


def _sym(kind: str, value=True) -> dict:
    return {kind: value}


def _numbers(count: int = 3) -> list:
    return [_sym("class", "integer") for _ in range(count)]


# S -> C
# C -> contact <identifier> <identifier> <integer> <integer> (D | R | ε)
# R -> rate <integer> <integer> <integer> (R | D | C)
# D -> delay <integer> <integer> <integer> (R | D | C)
CONTACT_GRAMMAR = {
    "start_symbol": "S",
    "rules": [
        {"nonterminal_name": "S", "alternatives": [[_sym("nonterminal", "C")]]},
        {
            "nonterminal_name": "C",
            "alternatives": [
                [
                    _sym("literal", "contact"),
                    _sym("class", "identifier"),
                    _sym("class", "identifier"),
                    _sym("class", "integer"),
                    _sym("class", "integer"),
                    tail,
                ]
                for tail in (_sym("nonterminal", "D"), _sym("nonterminal", "R"), _sym("empty"))
            ],
        },
        {
            "nonterminal_name": "R",
            "alternatives": [
                [_sym("literal", "rate"), *_numbers(), _sym("nonterminal", tail)]
                for tail in ("R", "D", "C")
            ],
        },
        {
            "nonterminal_name": "D",
            "alternatives": [
                [_sym("literal", "delay"), *_numbers(), _sym("nonterminal", tail)]
                for tail in ("R", "D", "C")
            ],
        },
    ],
}

SAMPLE_INPUT = """contact A B 20 32
rate 1 10 3
rate 5 1 26
delay 3 50 300
contact T A 10 3
delay 1 5 20
contact Y U 5 16
"""


# Common test fixtures
@pytest.fixture
def contact_grammar_data() -> dict:
    """Descriptor for the contact/rate/delay grammar (a fresh copy per test)."""
    return copy.deepcopy(CONTACT_GRAMMAR)


@pytest.fixture
def contact_grammar(contact_grammar_data):
    """The contact/rate/delay grammar, validated."""
    from grammar_check.core.utils.serialization import deserialize_grammar
    return deserialize_grammar(contact_grammar_data)


@pytest.fixture
def sample_input() -> str:
    """Seven-record input accepted by the contact grammar."""
    return SAMPLE_INPUT
