"""Puzzle document decoding."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import PuzzleLoadError
from .grid import Coordinate, Grid
from .models import Puzzle, SolutionWord


logger = logging.getLogger(__name__)


class PathPoint(BaseModel):
    x: int
    y: int


class WordDocument(BaseModel):
    word: str
    path: List[PathPoint]


class PuzzleDocument(BaseModel):
    """
    On-disk puzzle shape.

    ``grid`` is a 2D array of single letters, with null for blank cells.
    Width and height come from the array dimensions.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    grid: List[List[Optional[str]]]
    words: List[WordDocument] = Field(default_factory=list)
    minimum_word_length: Optional[int] = Field(default=None, ge=1, alias="minimumWordLength")

    def to_puzzle(self, default_minimum_word_length: int = 4) -> Puzzle:
        return Puzzle(
            id=self.id,
            title=self.title,
            grid=Grid(rows=self.grid),
            words=tuple(
                SolutionWord(
                    word=w.word,
                    path=tuple(Coordinate(p.x, p.y) for p in w.path),
                )
                for w in self.words
            ),
            minimum_word_length=self.minimum_word_length or default_minimum_word_length,
        )


def parse_puzzle(data: Dict[str, Any], default_minimum_word_length: int = 4) -> Puzzle:
    """
    Decode one puzzle document into a Puzzle.

    Raises:
        PuzzleLoadError: If the document does not match the expected shape
    """
    try:
        document = PuzzleDocument.model_validate(data)
        return document.to_puzzle(default_minimum_word_length)
    except PydanticValidationError as e:
        label = (data.get("title") or data.get("id")) if isinstance(data, dict) else None
        raise PuzzleLoadError(
            f"Failed to decode puzzle{f' {label!r}' if label else ''}: {e}"
        ) from e


def parse_puzzles(
    data: Union[List[Dict[str, Any]], Dict[str, Any]],
    default_minimum_word_length: int = 4,
) -> List[Puzzle]:
    """Decode a single puzzle document or a list of them."""
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise PuzzleLoadError(
            f"Expected a puzzle object or a list of puzzles, got {type(data).__name__}"
        )
    return [parse_puzzle(item, default_minimum_word_length) for item in data]


def load_puzzles(path: Union[str, Path], default_minimum_word_length: int = 4) -> List[Puzzle]:
    """
    Load puzzles from a JSON file.

    Raises:
        PuzzleLoadError: If the file is missing, is not JSON, or fails to decode
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise PuzzleLoadError(f"Puzzle file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise PuzzleLoadError(f"Failed to load puzzle data from {path}: {e}") from e

    puzzles = parse_puzzles(data, default_minimum_word_length)
    logger.debug("Loaded %d puzzle(s) from %s", len(puzzles), path)
    return puzzles
