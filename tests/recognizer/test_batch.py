"""
Unit Tests for Batch Recognition

Concurrent runs against one shared grammar.
"""

import logging

from grammar_check.core.models.grammar import Grammar, make_rule
from grammar_check.core.models.symbols import NonTerminal
from grammar_check.recognizer.batch import BatchOutcome, recognize_many
from grammar_check.recognizer.config import RecognizerConfig
from grammar_check.recognizer.results import Accepted, Rejected
from grammar_check.recognizer.timing import TimingLog


class TestRecognizeMany:
    """Tests for recognize_many."""

    def test_recognize_many_when_mixed_inputs_then_results_in_order(self, contact_grammar, sample_input):
        inputs = [
            sample_input,
            "contact A B 1 2 rate",
            ["contact", "X", "Y", "3", "4"],
            sample_input + " extra",
        ]

        outcomes = recognize_many(contact_grammar, inputs, RecognizerConfig(max_workers=3))

        assert [o.index for o in outcomes] == [0, 1, 2, 3]
        assert [o.accepted for o in outcomes] == [True, False, True, False]
        assert isinstance(outcomes[0].result, Accepted)
        assert isinstance(outcomes[1].result, Rejected)
        assert outcomes[1].result.frontier_position == 6
        assert outcomes[3].result.frontier_token == "extra"

    def test_recognize_many_when_same_as_sequential_then_identical(self, contact_grammar, sample_input):
        inputs = [sample_input.replace("20", str(n)) for n in range(8)] + ["contact A"] * 4

        parallel = recognize_many(contact_grammar, inputs, RecognizerConfig(max_workers=4))
        sequential = recognize_many(contact_grammar, inputs, RecognizerConfig(max_workers=1))

        assert [o.result for o in parallel] == [o.result for o in sequential]

    def test_recognize_many_when_cyclic_grammar_then_error_per_input(self, caplog):
        grammar = Grammar([make_rule("S", [NonTerminal("S")])], start="S")

        with caplog.at_level(logging.WARNING, logger="grammar_check.recognizer.batch"):
            outcomes = recognize_many(grammar, ["a", "b"])

        assert all(o.error is not None and o.result is None for o in outcomes)
        assert not any(o.accepted for o in outcomes)
        assert outcomes[0].error.nonterminal == "S"
        assert "derives itself" in caplog.text

    def test_recognize_many_when_no_inputs_then_empty(self, contact_grammar):
        assert recognize_many(contact_grammar, []) == []

    def test_recognize_many_when_timing_given_then_runs_recorded(self, contact_grammar, sample_input):
        timing = TimingLog()

        recognize_many(contact_grammar, [sample_input, "contact A B 1 2"], timing=timing)

        runs = {run.run_id: run for run in timing.runs}
        assert set(runs) == {"input-0", "input-1"}
        assert runs["input-0"].tokens == 31
        assert runs["input-1"].tokens == 5
        assert runs["input-1"].memo_entries > 0
        assert timing.wall_time > 0.0

    def test_recognize_many_when_cyclic_grammar_then_timing_has_no_memo_count(self):
        grammar = Grammar([make_rule("S", [NonTerminal("S")])], start="S")
        timing = TimingLog()

        recognize_many(grammar, ["a"], timing=timing)

        assert timing.runs[0].memo_entries is None
        assert timing.runs[0].tokens == 1

    def test_recognize_many_when_done_then_summary_logged(self, contact_grammar, caplog):
        with caplog.at_level(logging.INFO, logger="grammar_check.recognizer.batch"):
            recognize_many(contact_grammar, ["contact A B 1 2", "rate"])
        assert "2 inputs: 1 accepted, 1 rejected, 0 grammar errors" in caplog.text


class TestBatchOutcome:
    """Tests for BatchOutcome."""

    def test_accepted_when_no_result_then_false(self):
        assert not BatchOutcome(index=0).accepted

    def test_accepted_when_accepted_result_then_true(self):
        assert BatchOutcome(index=0, result=Accepted(3)).accepted
