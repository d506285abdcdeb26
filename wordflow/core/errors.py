"""Exceptions raised by the core."""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Coordinate, ValidationError


class OutOfBoundsError(IndexError):
    """A coordinate outside the grid was accessed."""

    def __init__(self, coordinate: "Coordinate", width: int, height: int):
        self.coordinate = coordinate
        self.width = width
        self.height = height
        super().__init__(
            f"Coordinate ({coordinate.x}, {coordinate.y}) is outside the "
            f"{width}x{height} grid"
        )


class LexiconUnavailable(RuntimeError):
    """The dictionary could not be loaded. Nothing downstream can run without it."""


class PuzzleLoadError(ValueError):
    """A puzzle document could not be decoded."""


class PuzzleValidationFailed(ValueError):
    """A puzzle failed structural validation; carries every violation found."""

    def __init__(self, puzzle_title: str, errors: List["ValidationError"]):
        self.puzzle_title = puzzle_title
        self.errors = errors
        details = "\n".join(f"- {e.message}" for e in errors)
        super().__init__(
            f"Validation failed for puzzle '{puzzle_title}' with "
            f"{len(errors)} error(s):\n{details}"
        )
