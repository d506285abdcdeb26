"""
Structural validation of puzzle definitions.

Validates, per solution word:
1. Dictionary membership
2. Path well-formedness (in bounds, no blanks, no duplicates, contiguous)
3. Spelling (the path spells the word on the grid)

Then coverage: every letter cell must sit on some solution path.

All violations for a puzzle are collected and returned together.
"""

import logging
from typing import List, Set

from .errors import PuzzleValidationFailed
from .grid import Coordinate, Grid, is_adjacent, render_grid
from .lexicon import Lexicon
from .models import Puzzle, SolutionWord, ValidationError, ValidationResult
from . import cascade


logger = logging.getLogger(__name__)


def validate_dictionary(words: List[SolutionWord], lexicon: Lexicon) -> List[ValidationError]:
    """Check every solution word exists in the dictionary."""
    errors: List[ValidationError] = []
    for solution in words:
        if not lexicon.contains(solution.word):
            errors.append(ValidationError(
                code="WORD_NOT_IN_DICTIONARY",
                message=f"'{solution.word}' is not in the dictionary",
                word=solution.word,
                cascade_level=cascade.MEDIUM,
            ))
    return errors


def validate_path(solution: SolutionWord, grid: Grid) -> List[ValidationError]:
    """Check a canonical path stays on letters, never repeats, and never skips."""
    errors: List[ValidationError] = []
    word = solution.word

    for coordinate in solution.path:
        if not grid.in_bounds(coordinate):
            errors.append(ValidationError(
                code="PATH_OUT_OF_BOUNDS",
                message=(
                    f"Path for '{word}' leaves the {grid.width}x{grid.height} grid "
                    f"at ({coordinate.x}, {coordinate.y})"
                ),
                word=word,
                coordinate=coordinate,
                cascade_level=cascade.CRITICAL,
            ))
        elif grid.cell_at(coordinate).is_blank:
            errors.append(ValidationError(
                code="PATH_THROUGH_BLANK",
                message=f"Path for '{word}' crosses blank cell ({coordinate.x}, {coordinate.y})",
                word=word,
                coordinate=coordinate,
                cascade_level=cascade.CRITICAL,
            ))

    seen: Set[Coordinate] = set()
    for coordinate in solution.path:
        if coordinate in seen:
            errors.append(ValidationError(
                code="DUPLICATE_COORDINATE_IN_PATH",
                message=f"Path for '{word}' visits ({coordinate.x}, {coordinate.y}) more than once",
                word=word,
                coordinate=coordinate,
                cascade_level=cascade.CRITICAL,
            ))
            break
        seen.add(coordinate)

    for prev, current in zip(solution.path, solution.path[1:]):
        if not is_adjacent(prev, current):
            errors.append(ValidationError(
                code="PATH_NOT_CONTIGUOUS",
                message=(
                    f"Path for '{word}' is not contiguous: gap between "
                    f"({prev.x}, {prev.y}) and ({current.x}, {current.y})"
                ),
                word=word,
                coordinate=current,
                cascade_level=cascade.CRITICAL,
            ))
            break

    return errors


def validate_spelling(solution: SolutionWord, grid: Grid) -> List[ValidationError]:
    """Check the path spells the word. Assumes every coordinate holds a letter."""
    spelled = grid.spell(solution.path)
    if spelled.upper() != solution.word.upper():
        return [ValidationError(
            code="PATH_SPELLING_MISMATCH",
            message=f"Path for '{solution.word}' spells '{spelled}' on the grid",
            word=solution.word,
            cascade_level=cascade.HIGH,
        )]
    return []


def validate_coverage(grid: Grid, used: Set[Coordinate]) -> List[ValidationError]:
    """Report every letter cell that no solution path touches."""
    errors: List[ValidationError] = []
    for coordinate in grid.letter_coordinates():
        if coordinate not in used:
            letter = grid.cell_at(coordinate).letter
            errors.append(ValidationError(
                code="UNUSED_LETTER",
                message=f"The letter '{letter}' at ({coordinate.x}, {coordinate.y}) is not used in any word",
                coordinate=coordinate,
                cascade_level=cascade.LOW,
            ))
    return errors


def validate_puzzle(puzzle: Puzzle, lexicon: Lexicon) -> ValidationResult:
    """
    Validate a puzzle definition.

    Returns a ValidationResult with:
    - valid: True if there are no violations
    - errors: Every violation found, in word order then coverage
    - words: The solution words
    - grid: Rendered grid string
    - letters_used / letters_total: Coverage counts
    """
    grid = puzzle.grid
    all_errors: List[ValidationError] = []
    used: Set[Coordinate] = set()

    logger.debug("Validating puzzle '%s' (ID: %s)", puzzle.title, puzzle.id)

    all_errors.extend(validate_dictionary(list(puzzle.words), lexicon))

    for solution in puzzle.words:
        path_errors = validate_path(solution, grid)
        all_errors.extend(path_errors)

        # Spelling is undefined off the grid or across blanks
        if not any(e.code in ("PATH_OUT_OF_BOUNDS", "PATH_THROUGH_BLANK") for e in path_errors):
            all_errors.extend(validate_spelling(solution, grid))

        used.update(c for c in solution.path if grid.is_letter(c))

    all_errors.extend(validate_coverage(grid, used))

    result = ValidationResult(
        valid=len(all_errors) == 0,
        puzzle_id=puzzle.id,
        errors=all_errors,
        words=[s.word for s in puzzle.words],
        grid=render_grid(grid),
        letters_used=len(used),
        letters_total=grid.letter_count(),
    )

    if result.valid:
        logger.debug("Validation successful for puzzle '%s'", puzzle.title)
    else:
        logger.info(
            "Puzzle '%s' has %d validation error(s)", puzzle.title, len(all_errors)
        )
    return result


def ensure_playable(puzzle: Puzzle, lexicon: Lexicon) -> ValidationResult:
    """
    Validate a puzzle before it is offered for play.

    Raises:
        PuzzleValidationFailed: If any violation is found
    """
    result = validate_puzzle(puzzle, lexicon)
    if not result.valid:
        raise PuzzleValidationFailed(puzzle.title, result.errors)
    return result
