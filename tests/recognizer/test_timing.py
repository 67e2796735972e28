"""
Unit Tests for Batch Timing

RunTiming, TimingLog and the timed_phase stopwatch.
"""

import time

import pytest

from grammar_check.recognizer.diagnostics import RecognitionStats
from grammar_check.recognizer.timing import RunTiming, TimingLog, timed_phase


class TestRunTiming:
    """Tests for RunTiming."""

    def test_from_stats_when_built_then_uses_engine_elapsed(self):
        stats = RecognitionStats(memo_entries=12, elapsed=0.25)

        run = RunTiming.from_stats("input-0", 31, 0.05, stats)

        assert run.recognize == 0.25
        assert run.memo_entries == 12
        assert run.total == pytest.approx(0.30)

    def test_describe_when_no_memo_count_then_omitted(self):
        run = RunTiming("input-2", 1, 0.0, 0.5)
        assert run.describe() == "input-2 0.500s (1 tokens)"


class TestTimingLog:
    """Tests for TimingLog."""

    @pytest.fixture
    def log(self) -> TimingLog:
        log = TimingLog()
        log.add(RunTiming("input-0", 5, 0.1, 0.5, memo_entries=8))
        log.add(RunTiming("input-1", 31, 0.3, 0.9, memo_entries=40))
        log.add(RunTiming("input-2", 2, 0.0, 0.1))
        log.finish(0.9)
        return log

    def test_busy_time_when_runs_overlap_then_exceeds_wall_time(self, log):
        assert log.busy_time == pytest.approx(1.9)
        assert log.busy_time > log.wall_time

    def test_slowest_when_limited_then_sorted_descending(self, log):
        assert [run.run_id for run in log.slowest(2)] == ["input-1", "input-0"]

    def test_summary_when_logged_then_single_line(self, log):
        summary = log.summary(n=1)

        assert summary == (
            "3 inputs, 38 tokens in 0.900s (1.900s across runs); "
            "slowest: input-1 1.200s (31 tokens, 40 memo entries)"
        )

    def test_summary_when_empty_then_no_slowest_section(self):
        assert TimingLog().summary() == "0 inputs, 0 tokens in 0.000s (0.000s across runs)"


class TestTimedPhase:
    """Tests for timed_phase."""

    def test_timed_phase_when_block_exits_then_elapsed_set(self):
        with timed_phase() as watch:
            assert watch.elapsed == 0.0
        assert watch.elapsed >= 0.0

    def test_timed_phase_when_exception_then_still_recorded(self):
        with pytest.raises(RuntimeError):
            with timed_phase() as watch:
                time.sleep(0.001)
                raise RuntimeError("boom")
        assert watch.elapsed > 0.0
