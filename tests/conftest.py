"""Shared fixtures for WordFlow tests."""

from pathlib import Path

import pytest

from wordflow.core import Coordinate, Lexicon, Puzzle, SolutionWord, build_grid


DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def make_puzzle(rows, words, minimum_word_length=4, puzzle_id="test", title="Test Puzzle") -> Puzzle:
    """Build a puzzle from rows and a {word: [(x, y), ...]} mapping."""
    return Puzzle(
        id=puzzle_id,
        title=title,
        grid=build_grid(rows),
        words=tuple(
            SolutionWord(word=word, path=tuple(Coordinate(x, y) for x, y in path))
            for word, path in words.items()
        ),
        minimum_word_length=minimum_word_length,
    )


@pytest.fixture
def lexicon() -> Lexicon:
    """Hand-picked words, built in memory. No file I/O."""
    return Lexicon.from_words([
        # 3-letter
        "cat", "dog", "cot", "nan", "oil",
        # 4-letter
        "abba", "cats", "farm", "flow", "mild", "oils", "pond", "rend",
        "rose", "soil", "sold", "star", "woes",
        # 5-letter
        "stare",
    ])


@pytest.fixture
def cat_rows():
    """3x3 grid with two blanks."""
    return [
        ["C", "A", "T"],
        [None, "D", "O"],
        ["G", None, "G"],
    ]


@pytest.fixture
def cat_puzzle(cat_rows) -> Puzzle:
    return make_puzzle(
        cat_rows,
        {"CAT": [(0, 0), (1, 0), (2, 0)]},
        minimum_word_length=3,
        puzzle_id="cat",
        title="Cat",
    )


@pytest.fixture
def flow_rows():
    """4x4 grid where every letter is used by a solution word."""
    return [
        ["F", "L", "O", "W"],
        ["A", None, None, "O"],
        ["R", "O", "S", "E"],
        ["M", "I", "L", "D"],
    ]


@pytest.fixture
def flow_puzzle(flow_rows) -> Puzzle:
    return make_puzzle(
        flow_rows,
        {
            "FLOW": [(0, 0), (1, 0), (2, 0), (3, 0)],
            "FARM": [(0, 0), (0, 1), (0, 2), (0, 3)],
            "ROSE": [(0, 2), (1, 2), (2, 2), (3, 2)],
            "MILD": [(0, 3), (1, 3), (2, 3), (3, 3)],
            "WOES": [(3, 0), (3, 1), (3, 2), (2, 2)],
        },
        puzzle_id="flow",
        title="Flow",
    )


@pytest.fixture
def data_dir() -> Path:
    """Bundled sample data shipped with the repo."""
    return DATA_DIR


@pytest.fixture
def build_puzzle():
    """Factory fixture wrapping make_puzzle."""
    return make_puzzle
