"""Grid, dictionary, path resolution, scoring and puzzle validation."""

from .errors import OutOfBoundsError, LexiconUnavailable, PuzzleLoadError, PuzzleValidationFailed
from .grid import Coordinate, Cell, Grid, is_adjacent, build_grid, render_grid
from .lexicon import Lexicon, TrieNode, load_lexicon
from .models import (
    SolutionWord,
    Puzzle,
    FoundWord,
    Success,
    AlreadyFound,
    TooShort,
    InvalidWord,
    ValidationOutcome,
    ValidationError,
    ValidationResult,
)
from .scoring import score
from .resolver import resolve
from .validate import validate_puzzle, ensure_playable
from .parsing import parse_puzzle, parse_puzzles, load_puzzles

__all__ = [
    # Errors
    "OutOfBoundsError",
    "LexiconUnavailable",
    "PuzzleLoadError",
    "PuzzleValidationFailed",
    # Grid
    "Coordinate",
    "Cell",
    "Grid",
    "is_adjacent",
    "build_grid",
    "render_grid",
    # Dictionary
    "Lexicon",
    "TrieNode",
    "load_lexicon",
    # Models
    "SolutionWord",
    "Puzzle",
    "FoundWord",
    "Success",
    "AlreadyFound",
    "TooShort",
    "InvalidWord",
    "ValidationOutcome",
    "ValidationError",
    "ValidationResult",
    # Gameplay
    "score",
    "resolve",
    # Validation
    "validate_puzzle",
    "ensure_playable",
    # Loading
    "parse_puzzle",
    "parse_puzzles",
    "load_puzzles",
]
