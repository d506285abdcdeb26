"""Data models for puzzles, found words, path outcomes and validation reports."""

from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .grid import Coordinate, Grid


Path = Tuple[Coordinate, ...]


class SolutionWord(BaseModel):
    """One designer-intended way to spell a word on the grid."""
    model_config = ConfigDict(frozen=True)

    word: str = Field(..., min_length=1)
    path: Path

    @field_validator("word")
    @classmethod
    def _uppercase(cls, word: str) -> str:
        return word.strip().upper()


class Puzzle(BaseModel):
    """A complete puzzle definition: grid plus the words to be found."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    grid: Grid
    words: Tuple[SolutionWord, ...]
    minimum_word_length: int = Field(default=4, ge=1)

    @property
    def word_set(self) -> frozenset:
        """Distinct solution words (uppercase)."""
        return frozenset(s.word for s in self.words)

    def solution_for(self, word: str) -> Optional[SolutionWord]:
        """First solution entry spelling ``word``, compared case-insensitively."""
        word = word.upper()
        for solution in self.words:
            if solution.word == word:
                return solution
        return None


class FoundWord(BaseModel):
    """A word the player has found. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    word: str
    path: Path
    score: int
    found_at: datetime


# Path resolution outcomes. Rejections are normal results, never exceptions.

class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    word: str
    score: int
    path: Path


class AlreadyFound(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["already_found"] = "already_found"
    word: str


class TooShort(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["too_short"] = "too_short"
    word: str = ""


class InvalidWord(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["invalid_word"] = "invalid_word"
    word: str = ""


ValidationOutcome = Annotated[
    Union[Success, AlreadyFound, TooShort, InvalidWord],
    Field(discriminator="kind"),
]


# Structural validation report

ViolationCode = Literal[
    "WORD_NOT_IN_DICTIONARY",
    "PATH_NOT_CONTIGUOUS",
    "DUPLICATE_COORDINATE_IN_PATH",
    "PATH_OUT_OF_BOUNDS",
    "PATH_THROUGH_BLANK",
    "PATH_SPELLING_MISMATCH",
    "UNUSED_LETTER",
    "ADDITIONAL_ERRORS",
]


class ValidationError(BaseModel):
    """A single structural violation in a puzzle definition."""
    code: ViolationCode
    message: str
    word: Optional[str] = None
    coordinate: Optional[Coordinate] = None
    cascade_level: int = 0  # 1=CRITICAL, 2=HIGH, 3=MEDIUM, 4=LOW


class ValidationResult(BaseModel):
    """Result of validating one puzzle."""
    valid: bool
    puzzle_id: str = ""
    errors: List[ValidationError] = Field(default_factory=list)
    words: List[str] = Field(default_factory=list)
    grid: Optional[str] = None
    letters_used: int = 0
    letters_total: int = 0

    @property
    def coverage(self) -> float:
        """Fraction of letter cells that sit on at least one solution path."""
        if not self.letters_total:
            return 1.0
        return self.letters_used / self.letters_total

    def errors_by_code(self) -> Dict[str, List[ValidationError]]:
        grouped: Dict[str, List[ValidationError]] = {}
        for err in self.errors:
            grouped.setdefault(err.code, []).append(err)
        return grouped
