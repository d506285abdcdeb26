"""Tests for exhaustive word discovery and the background scheduler."""

import threading
import time

import pytest

from wordflow.core import Coordinate, build_grid, is_adjacent
from wordflow.engine import (
    CancellationToken,
    DiscoveryResult,
    DiscoveryScheduler,
    WordDiscoveryEngine,
)


FLOW_WORDS = {"FARM", "FLOW", "MILD", "OILS", "ROSE", "SOIL", "SOLD", "WOES"}


class CancelAfter(CancellationToken):
    """Token that reports cancelled after a fixed number of checks."""

    def __init__(self, checks):
        super().__init__()
        self.remaining = checks

    @property
    def cancelled(self):
        self.remaining -= 1
        return self.remaining < 0


class BlockingEngine:
    """Stand-in engine that holds each run until released."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()

    def discover(self, grid, minimum_word_length=4, token=None):
        self.started.set()
        self.release.wait(timeout=5)
        if token is not None and token.cancelled:
            return None
        return DiscoveryResult()


class SlowCheckScheduler(DiscoveryScheduler):
    """Scheduler that lingers after deciding a run is still current."""

    def __init__(self, engine):
        super().__init__(engine)
        self.checked = threading.Event()

    def _is_current(self, token):
        current = super()._is_current(token)
        self.checked.set()
        time.sleep(0.1)
        return current


class TestDiscover:
    """Enumerating every word on a grid."""

    def test_finds_every_word(self, flow_rows, lexicon):
        result = WordDiscoveryEngine(lexicon).discover(build_grid(flow_rows), 4)
        assert set(result.unique_words) == FLOW_WORDS

    def test_results_are_sound(self, flow_rows, lexicon):
        """Every result is a dictionary word spelled by a duplicate-free adjacent path."""
        grid = build_grid(flow_rows)
        result = WordDiscoveryEngine(lexicon).discover(grid, 3)
        assert result.words
        for found in result.words:
            assert lexicon.is_word(found.word)
            assert grid.spell(found.path) == found.word
            assert len(set(found.path)) == len(found.path)
            assert all(is_adjacent(a, b) for a, b in zip(found.path, found.path[1:]))

    def test_minimum_length_filter(self, flow_rows, lexicon):
        engine = WordDiscoveryEngine(lexicon)
        grid = build_grid(flow_rows)
        assert "OIL" not in engine.discover(grid, 4).unique_words
        assert "OIL" in engine.discover(grid, 3).unique_words

    def test_every_path_kept(self, lexicon):
        """ABBA can be traced four ways on a 2x2 grid."""
        result = WordDiscoveryEngine(lexicon).discover(build_grid([["A", "B"], ["B", "A"]]), 4)
        assert result.unique_words == ["ABBA"]
        assert len(result.paths_for("abba")) == 4
        assert result.metrics.word_count == 1
        assert result.metrics.path_count == 4

    def test_no_words(self, lexicon):
        result = WordDiscoveryEngine(lexicon).discover(build_grid([["X", "Y"], ["Z", "Q"]]))
        assert result.words == []
        assert result.metrics.word_count == 0
        assert result.metrics.longest_word is None
        assert result.metrics.grid_utilization == 0.0

    def test_unique_words_sorted_by_length(self, flow_rows, lexicon):
        result = WordDiscoveryEngine(lexicon).discover(build_grid(flow_rows), 3)
        assert result.unique_words[0] == "OIL"
        assert result.unique_words[1:] == sorted(FLOW_WORDS)


class TestMetrics:
    """Difficulty figures derived from a run."""

    def test_flow_metrics(self, flow_rows, lexicon):
        metrics = WordDiscoveryEngine(lexicon).discover(build_grid(flow_rows), 4).metrics
        assert metrics.word_count == 8
        assert metrics.path_count == 8
        assert metrics.count_by_length == {4: 8}
        assert metrics.average_length == 4.0
        assert metrics.longest_word == "FARM"
        assert metrics.grid_utilization == 1.0
        assert metrics.uncovered == []
        assert metrics.uncommon_letter_count == 0

    def test_unreachable_letter_reported(self, cat_rows, lexicon):
        metrics = WordDiscoveryEngine(lexicon).discover(build_grid(cat_rows), 3).metrics
        assert metrics.word_count == 2
        assert metrics.uncovered == [Coordinate(0, 2)]
        assert metrics.grid_utilization == pytest.approx(6 / 7)

    def test_uncommon_letters_counted(self, lexicon):
        metrics = WordDiscoveryEngine(lexicon).discover(build_grid([["Q", "Z"], ["A", "J"]])).metrics
        assert metrics.uncommon_letter_count == 3


class TestCancellation:
    """Cooperative cancellation discards partial results."""

    def test_cancelled_before_start(self, flow_rows, lexicon):
        token = CancellationToken()
        token.cancel()
        assert WordDiscoveryEngine(lexicon).discover(build_grid(flow_rows), 4, token) is None

    def test_cancelled_mid_run(self, lexicon):
        engine = WordDiscoveryEngine(lexicon)
        engine.CHECK_INTERVAL = 1
        grid = build_grid([["A", "B"], ["B", "A"]])
        assert engine.discover(grid, 4, CancelAfter(3)) is None

    def test_uncancelled_token_completes(self, flow_rows, lexicon):
        result = WordDiscoveryEngine(lexicon).discover(build_grid(flow_rows), 4, CancellationToken())
        assert set(result.unique_words) == FLOW_WORDS

    def test_token_flag(self):
        token = CancellationToken()
        assert not token.cancelled
        token.cancel()
        assert token.cancelled


class TestScheduler:
    """Background runs, newest request wins."""

    def test_runs_in_background(self, flow_rows, lexicon):
        received = []
        with DiscoveryScheduler(WordDiscoveryEngine(lexicon)) as scheduler:
            future = scheduler.submit(build_grid(flow_rows), 4, on_result=received.append)
            result = future.result(timeout=5)
        assert set(result.unique_words) == FLOW_WORDS
        assert received == [result]

    def test_new_request_supersedes_old(self, flow_rows):
        engine = BlockingEngine()
        received = []
        scheduler = DiscoveryScheduler(engine)
        try:
            grid = build_grid(flow_rows)
            first = scheduler.submit(grid, 4, on_result=received.append)
            assert engine.started.wait(timeout=5)
            second = scheduler.submit(grid, 4, on_result=received.append)
            engine.release.set()

            assert first.result(timeout=5) is None
            latest = second.result(timeout=5)
            assert latest is not None
            assert received == [latest]
        finally:
            scheduler.shutdown()

    def test_cancel_discards_run(self, flow_rows):
        engine = BlockingEngine()
        received = []
        scheduler = DiscoveryScheduler(engine)
        try:
            future = scheduler.submit(build_grid(flow_rows), 4, on_result=received.append)
            assert engine.started.wait(timeout=5)
            scheduler.cancel()
            engine.release.set()
            assert future.result(timeout=5) is None
            assert received == []
        finally:
            scheduler.shutdown()

    def test_submit_waits_for_delivery_in_progress(self, flow_rows, lexicon):
        """A run that passed its currency check delivers before a new submit returns."""
        order = []
        scheduler = SlowCheckScheduler(WordDiscoveryEngine(lexicon))
        try:
            grid = build_grid(flow_rows)
            first = scheduler.submit(grid, 4, on_result=lambda r: order.append("first"))
            assert scheduler.checked.wait(timeout=5)
            second = scheduler.submit(grid, 4, on_result=lambda r: order.append("second"))
            order.append("submitted")

            assert first.result(timeout=5) is not None
            assert second.result(timeout=5) is not None
            assert order == ["first", "submitted", "second"]
        finally:
            scheduler.shutdown()

    def test_callback_may_submit(self, flow_rows, cat_rows, lexicon):
        """Submitting from inside on_result does not deadlock."""
        follow_ups = []
        scheduler = DiscoveryScheduler(WordDiscoveryEngine(lexicon))
        try:
            def resubmit(result):
                follow_ups.append(scheduler.submit(build_grid(cat_rows), 3))

            first = scheduler.submit(build_grid(flow_rows), 4, on_result=resubmit)
            assert first.result(timeout=5) is not None
            [follow_up] = follow_ups
            assert follow_up.result(timeout=5).unique_words == ["CAT", "DOG"]
        finally:
            scheduler.shutdown()
