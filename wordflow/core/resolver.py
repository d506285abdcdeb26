"""Turns a committed trace path into a word or a classified rejection."""

from typing import Iterable, Sequence

from .grid import Coordinate
from .models import AlreadyFound, InvalidWord, Puzzle, Success, TooShort, ValidationOutcome
from .scoring import score


def resolve(
    path: Sequence[Coordinate],
    puzzle: Puzzle,
    already_found: Iterable[str] = (),
) -> ValidationOutcome:
    """
    Classify a traced path against a puzzle.

    Matching is by spelled string only: any adjacency-valid path that spells
    a solution word is accepted, not just that word's canonical path.
    Pure; recording the found word is the caller's job.

    Args:
        path: Committed coordinates, in trace order
        puzzle: The puzzle being played
        already_found: Words found so far this session (any case)

    Returns:
        Success, AlreadyFound, TooShort or InvalidWord
    """
    word = puzzle.grid.spell(path).upper()

    if len(word) < puzzle.minimum_word_length:
        return TooShort(word=word)

    if word in {w.upper() for w in already_found}:
        return AlreadyFound(word=word)

    if word not in puzzle.word_set:
        return InvalidWord(word=word)

    return Success(word=word, score=score(word), path=tuple(path))
