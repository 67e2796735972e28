"""
Smoke Tests for the Top-Level Package

The public names re-exported from grammar_check.
"""

import grammar_check


def test_version_when_imported_then_string():
    assert isinstance(grammar_check.__version__, str)


def test_public_api_when_used_end_to_end_then_accepts(contact_grammar_data, sample_input):
    grammar = grammar_check.deserialize_grammar(contact_grammar_data)
    result = grammar_check.recognize(grammar, grammar_check.tokenize(sample_input))

    assert isinstance(result, grammar_check.Accepted)
    assert bool(result) is True


def test_errors_when_checked_then_share_base_class():
    assert issubclass(grammar_check.MalformedGrammar, grammar_check.GrammarCheckError)
    assert issubclass(grammar_check.AmbiguousOrCyclicGrammar, grammar_check.GrammarCheckError)
