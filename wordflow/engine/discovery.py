"""
Exhaustive word discovery over a grid.

Depth-first search from every letter cell, extending one unused adjacent
cell at a time and following the lexicon trie alongside. A branch stops as
soon as its letters are not a prefix of any word, which keeps a full search
of a 6x6 grid tractable.

Runs are cooperatively cancellable. ``DiscoveryScheduler`` runs them off the
calling thread, and each new request cancels the one in flight.
"""

import logging
import threading
import time
from collections import Counter
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Set

from ..core.grid import Coordinate, Grid
from ..core.lexicon import Lexicon, TrieNode
from .models import DiscoveredWord, DiscoveryMetrics, DiscoveryResult


logger = logging.getLogger(__name__)

# Letters that make a grid harder to use up
UNCOMMON_LETTERS = frozenset("JKQVXZ")


class CancellationToken:
    """Thread-safe flag a running search polls to know it should stop."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class _SearchCancelled(Exception):
    """Unwinds the recursion when the token is cancelled."""


def compute_metrics(grid: Grid, words: List[DiscoveredWord]) -> DiscoveryMetrics:
    """Aggregate word counts, lengths and grid utilization for a set of discoveries."""
    unique = sorted({w.word for w in words}, key=lambda w: (-len(w), w))
    letter_cells = grid.letter_coordinates()

    covered: Set[Coordinate] = set()
    for w in words:
        covered.update(w.path)

    count_by_length = Counter(len(w) for w in unique)
    uncommon = sum(
        1 for c in letter_cells if grid.cell_at(c).letter in UNCOMMON_LETTERS
    )

    return DiscoveryMetrics(
        word_count=len(unique),
        path_count=len(words),
        count_by_length=dict(sorted(count_by_length.items())),
        average_length=sum(len(w) for w in unique) / len(unique) if unique else 0.0,
        longest_word=unique[0] if unique else None,
        grid_utilization=len(covered) / len(letter_cells) if letter_cells else 0.0,
        uncovered=[c for c in letter_cells if c not in covered],
        uncommon_letter_count=uncommon,
    )


class WordDiscoveryEngine:
    """
    Finds every lexicon word spelled by an adjacency-valid, duplicate-free path.

    Holds only the read-only lexicon; every run owns its own visited set and
    trie cursor, so one engine can serve concurrent runs.
    """

    # Nodes visited between cancellation checks
    CHECK_INTERVAL = 256

    def __init__(self, lexicon: Lexicon):
        self.lexicon = lexicon

    def discover(
        self,
        grid: Grid,
        minimum_word_length: int = 4,
        token: Optional[CancellationToken] = None,
    ) -> Optional[DiscoveryResult]:
        """
        Enumerate every (word, path) on the grid.

        Multiple paths to the same word are all kept.

        Args:
            grid: The grid to search
            minimum_word_length: Shortest word to record
            token: Optional cancellation token

        Returns:
            DiscoveryResult, or None if the run was cancelled. Partial
            results are discarded.
        """
        start = time.perf_counter()
        found: List[DiscoveredWord] = []
        visited: Set[Coordinate] = set()
        path: List[Coordinate] = []
        letters: List[str] = []
        steps = 0

        def _search(coordinate: Coordinate, letter: str, node: TrieNode) -> None:
            nonlocal steps
            steps += 1
            if token is not None and steps % self.CHECK_INTERVAL == 0 and token.cancelled:
                raise _SearchCancelled()

            visited.add(coordinate)
            path.append(coordinate)
            letters.append(letter)

            if node.is_word and len(path) >= minimum_word_length:
                found.append(DiscoveredWord(word="".join(letters), path=tuple(path)))

            for neighbor in grid.neighbors(coordinate):
                if neighbor in visited:
                    continue
                next_letter = grid.cell_at(neighbor).letter
                child = node.children.get(next_letter)
                if child is not None:
                    _search(neighbor, next_letter, child)

            letters.pop()
            path.pop()
            visited.discard(coordinate)

        if token is not None and token.cancelled:
            return None

        try:
            for coordinate in grid.letter_coordinates():
                letter = grid.cell_at(coordinate).letter
                node = self.lexicon.root.children.get(letter)
                if node is not None:
                    _search(coordinate, letter, node)
        except _SearchCancelled:
            logger.debug("Discovery cancelled after %d steps", steps)
            return None

        duration = time.perf_counter() - start
        logger.debug(
            "Discovery found %d paths on a %dx%d grid in %.3f seconds (%d steps)",
            len(found), grid.width, grid.height, duration, steps,
        )
        return DiscoveryResult(
            words=found,
            metrics=compute_metrics(grid, found),
            duration_seconds=duration,
        )


class DiscoveryScheduler:
    """
    Runs discovery in a background thread, newest request wins.

    Submitting a grid cancels whatever run is in flight. A superseded run
    resolves its future to None and never calls ``on_result``.

    The currency check and ``on_result`` run under one reentrant lock, so a
    ``submit`` from another thread waits for a delivery in progress, and a
    callback may itself call ``submit``.
    """

    def __init__(self, engine: WordDiscoveryEngine, max_workers: int = 1):
        self.engine = engine
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="wordflow-discovery"
        )
        self._lock = threading.RLock()
        self._current: Optional[CancellationToken] = None

    def submit(
        self,
        grid: Grid,
        minimum_word_length: int = 4,
        on_result: Optional[Callable[[DiscoveryResult], None]] = None,
    ) -> "Future[Optional[DiscoveryResult]]":
        """
        Queue an analysis, superseding any earlier one.

        Args:
            grid: The grid to analyze
            minimum_word_length: Shortest word to record
            on_result: Called with the result only if this run is still current

        Returns:
            Future resolving to the DiscoveryResult, or None if superseded
        """
        token = CancellationToken()
        with self._lock:
            if self._current is not None:
                self._current.cancel()
            self._current = token
        return self._executor.submit(self._run, grid, minimum_word_length, token, on_result)

    def _is_current(self, token: CancellationToken) -> bool:
        with self._lock:
            return token is self._current and not token.cancelled

    def _run(
        self,
        grid: Grid,
        minimum_word_length: int,
        token: CancellationToken,
        on_result: Optional[Callable[[DiscoveryResult], None]],
    ) -> Optional[DiscoveryResult]:
        result = self.engine.discover(grid, minimum_word_length, token)
        if result is None:
            logger.debug("Discarding cancelled discovery run")
            return None
        with self._lock:
            if not self._is_current(token):
                logger.debug("Discarding superseded discovery run")
                return None
            if on_result:
                on_result(result)
        return result

    def cancel(self) -> None:
        """Cancel the run in flight, if any."""
        with self._lock:
            if self._current is not None:
                self._current.cancel()

    def shutdown(self, wait: bool = True) -> None:
        self.cancel()
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "DiscoveryScheduler":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
