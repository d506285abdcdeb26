"""
Test suite for puzzle validation.

Tests all violation codes:
- Dictionary (WORD_NOT_IN_DICTIONARY)
- Path structure (PATH_OUT_OF_BOUNDS, PATH_THROUGH_BLANK, DUPLICATE_COORDINATE_IN_PATH, PATH_NOT_CONTIGUOUS)
- Spelling (PATH_SPELLING_MISMATCH)
- Coverage (UNUSED_LETTER)
"""

import pytest

from wordflow.core import Coordinate, PuzzleValidationFailed, ensure_playable, validate_puzzle


class TestValidPuzzles:
    """Puzzles that pass every check."""

    def test_flow_puzzle_valid(self, flow_puzzle, lexicon):
        result = validate_puzzle(flow_puzzle, lexicon)
        assert result.valid is True
        assert result.errors == []
        assert result.words == ["FLOW", "FARM", "ROSE", "MILD", "WOES"]
        assert result.coverage == 1.0

    def test_result_carries_rendered_grid(self, flow_puzzle, lexicon):
        result = validate_puzzle(flow_puzzle, lexicon)
        assert result.grid == "FLOW\nA..O\nROSE\nMILD"
        assert result.puzzle_id == "flow"

    def test_lowercase_solution_word(self, build_puzzle, lexicon):
        """Solution words are compared case-insensitively."""
        puzzle = build_puzzle(
            [["C", "A", "T", "S"]],
            {"cats": [(0, 0), (1, 0), (2, 0), (3, 0)]},
        )
        assert validate_puzzle(puzzle, lexicon).valid

    def test_ensure_playable_returns_result(self, flow_puzzle, lexicon):
        assert ensure_playable(flow_puzzle, lexicon).valid


class TestCoverage:
    """Every letter cell must be used by some solution path."""

    def test_unused_letter_reported_with_coordinate(self, cat_rows, build_puzzle, lexicon):
        puzzle = build_puzzle(
            cat_rows,
            {
                "CAT": [(0, 0), (1, 0), (2, 0)],
                "DOG": [(1, 1), (2, 1), (2, 2)],
            },
            minimum_word_length=3,
        )
        result = validate_puzzle(puzzle, lexicon)
        assert result.valid is False
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.code == "UNUSED_LETTER"
        assert error.coordinate == Coordinate(0, 2)
        assert "'G'" in error.message
        assert result.letters_used == 6
        assert result.letters_total == 7

    def test_every_unused_letter_reported(self, cat_puzzle, lexicon):
        """Only CAT is defined, so D, O and both Gs are unused."""
        result = validate_puzzle(cat_puzzle, lexicon)
        unused = [e.coordinate for e in result.errors if e.code == "UNUSED_LETTER"]
        assert unused == [(1, 1), (2, 1), (0, 2), (2, 2)]

    def test_blanks_do_not_need_coverage(self, build_puzzle, lexicon):
        puzzle = build_puzzle(
            [["C", "A", "T"], [None, None, None]],
            {"CAT": [(0, 0), (1, 0), (2, 0)]},
            minimum_word_length=3,
        )
        assert validate_puzzle(puzzle, lexicon).valid


class TestDictionary:
    """Solution words must be dictionary words."""

    def test_word_not_in_dictionary(self, build_puzzle, lexicon):
        puzzle = build_puzzle(
            [["T", "A", "C", "O"]],
            {"TACO": [(0, 0), (1, 0), (2, 0), (3, 0)]},
        )
        result = validate_puzzle(puzzle, lexicon)
        assert [e.code for e in result.errors] == ["WORD_NOT_IN_DICTIONARY"]
        assert result.errors[0].word == "TACO"


class TestPathStructure:
    """Canonical paths must be well formed."""

    def test_non_contiguous_path(self, build_puzzle, lexicon):
        puzzle = build_puzzle(
            [["C", "A", "X", "T"]],
            {"CAT": [(0, 0), (1, 0), (3, 0)]},
            minimum_word_length=3,
        )
        result = validate_puzzle(puzzle, lexicon)
        codes = [e.code for e in result.errors]
        assert "PATH_NOT_CONTIGUOUS" in codes
        assert "PATH_SPELLING_MISMATCH" not in codes
        gap = result.errors_by_code()["PATH_NOT_CONTIGUOUS"][0]
        assert gap.coordinate == Coordinate(3, 0)
        assert "(1, 0) and (3, 0)" in gap.message

    def test_duplicate_coordinate(self, build_puzzle, lexicon):
        puzzle = build_puzzle(
            [["A", "N"]],
            {"NAN": [(1, 0), (0, 0), (1, 0)]},
            minimum_word_length=3,
        )
        result = validate_puzzle(puzzle, lexicon)
        assert [e.code for e in result.errors] == ["DUPLICATE_COORDINATE_IN_PATH"]
        assert result.errors[0].coordinate == Coordinate(1, 0)

    def test_path_out_of_bounds(self, cat_rows, build_puzzle, lexicon):
        puzzle = build_puzzle(
            cat_rows,
            {"CAT": [(0, 0), (1, 0), (2, 0), (3, 0)]},
            minimum_word_length=3,
        )
        result = validate_puzzle(puzzle, lexicon)
        codes = [e.code for e in result.errors]
        assert "PATH_OUT_OF_BOUNDS" in codes
        assert "PATH_SPELLING_MISMATCH" not in codes

    def test_path_through_blank(self, cat_rows, build_puzzle, lexicon):
        puzzle = build_puzzle(
            cat_rows,
            {"CAT": [(0, 0), (0, 1), (1, 0)]},
            minimum_word_length=3,
        )
        result = validate_puzzle(puzzle, lexicon)
        blank = result.errors_by_code()["PATH_THROUGH_BLANK"]
        assert blank[0].coordinate == Coordinate(0, 1)
        assert "PATH_SPELLING_MISMATCH" not in result.errors_by_code()


class TestSpelling:
    """The canonical path must spell its word."""

    def test_spelling_mismatch(self, cat_rows, build_puzzle, lexicon):
        puzzle = build_puzzle(
            cat_rows,
            {"COT": [(0, 0), (1, 0), (2, 0)]},
            minimum_word_length=3,
        )
        result = validate_puzzle(puzzle, lexicon)
        mismatch = result.errors_by_code()["PATH_SPELLING_MISMATCH"]
        assert len(mismatch) == 1
        assert mismatch[0].word == "COT"
        assert "spells 'CAT'" in mismatch[0].message


class TestBatchReporting:
    """Validation collects everything instead of stopping at the first failure."""

    def test_all_violations_reported(self, cat_rows, build_puzzle, lexicon):
        puzzle = build_puzzle(
            cat_rows,
            {
                "COT": [(0, 0), (1, 0), (2, 0)],
                "TACO": [(2, 0), (1, 0), (0, 0), (2, 1)],
                "DOG": [(1, 1), (2, 1), (2, 2), (5, 5)],
            },
            minimum_word_length=3,
        )
        result = validate_puzzle(puzzle, lexicon)
        codes = set(result.errors_by_code())
        assert codes == {
            "WORD_NOT_IN_DICTIONARY",
            "PATH_SPELLING_MISMATCH",
            "PATH_NOT_CONTIGUOUS",
            "PATH_OUT_OF_BOUNDS",
            "UNUSED_LETTER",
        }

    def test_ensure_playable_raises_with_every_error(self, cat_puzzle, lexicon):
        with pytest.raises(PuzzleValidationFailed) as exc_info:
            ensure_playable(cat_puzzle, lexicon)
        assert exc_info.value.puzzle_title == "Cat"
        assert len(exc_info.value.errors) == 4
        assert "with 4 error(s)" in str(exc_info.value)
