"""Game session: found words and running score for one puzzle."""

import random
from datetime import datetime
from typing import List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..core.grid import Coordinate
from ..core.models import FoundWord, Puzzle, Success, ValidationOutcome
from ..core.resolver import resolve


class GameSession(BaseModel):
    """
    Immutable snapshot of a game in progress.

    Every submission returns a new snapshot plus the outcome, so the
    presentation layer reacts to an explicit return value.

    Attributes:
        puzzle: The static puzzle definition
        found_words: Words found so far, in the order found
        score: Running total
        started_at: When the session began
    """

    model_config = ConfigDict(frozen=True)

    puzzle: Puzzle
    found_words: Tuple[FoundWord, ...] = ()
    score: int = 0
    started_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def start(cls, puzzle: Puzzle, now: Optional[datetime] = None) -> "GameSession":
        """Factory method to begin a fresh session on a puzzle."""
        return cls(puzzle=puzzle, started_at=now or datetime.now())

    @classmethod
    def start_from(
        cls,
        puzzles: Sequence[Puzzle],
        index: Optional[int] = None,
        rng: Optional[random.Random] = None,
        now: Optional[datetime] = None,
    ) -> "GameSession":
        """
        Begin a session on one puzzle from a loaded list.

        Args:
            puzzles: Puzzles as returned by load_puzzles
            index: Position of the puzzle to play; picked at random when None
            rng: Random source for the pick (defaults to the module generator)
            now: Session start time

        Raises:
            ValueError: If there are no puzzles
            IndexError: If index is outside the list
        """
        if not puzzles:
            raise ValueError("No puzzles to choose from")
        if index is None:
            index = (rng or random).randrange(len(puzzles))
        elif not 0 <= index < len(puzzles):
            raise IndexError(f"Puzzle index {index} is out of bounds for {len(puzzles)} puzzles")
        return cls.start(puzzles[index], now=now)

    @property
    def found_set(self) -> Set[str]:
        return {f.word for f in self.found_words}

    @property
    def remaining_words(self) -> List[str]:
        """Solution words not yet found, in puzzle order."""
        found = self.found_set
        remaining: List[str] = []
        for solution in self.puzzle.words:
            if solution.word not in found and solution.word not in remaining:
                remaining.append(solution.word)
        return remaining

    @property
    def is_complete(self) -> bool:
        """True once every distinct solution word has been found."""
        return self.puzzle.word_set <= self.found_set

    def submit(
        self,
        path: Sequence[Coordinate],
        now: Optional[datetime] = None,
    ) -> Tuple["GameSession", ValidationOutcome]:
        """
        Resolve a traced path and record it if it is a new solution word.

        Args:
            path: Committed path from the trace machine
            now: Timestamp for the found word (defaults to now)

        Returns:
            (next session, outcome). The session is unchanged unless the
            outcome is Success.
        """
        outcome = resolve(path, self.puzzle, self.found_set)
        if not isinstance(outcome, Success):
            return self, outcome

        found = FoundWord(
            word=outcome.word,
            path=outcome.path,
            score=outcome.score,
            found_at=now or datetime.now(),
        )
        session = self.model_copy(update={
            "found_words": self.found_words + (found,),
            "score": self.score + outcome.score,
        })
        return session, outcome

    def faded_cells(self) -> Set[Coordinate]:
        """Letter cells that no remaining word's canonical path uses."""
        remaining = set(self.remaining_words)
        active: Set[Coordinate] = set()
        for solution in self.puzzle.words:
            if solution.word in remaining:
                active.update(solution.path)
        return set(self.puzzle.grid.letter_coordinates()) - active

    def get_state(self) -> dict:
        """
        Get the current session state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "puzzle_id": self.puzzle.id,
            "score": self.score,
            "found_words": [f.word for f in self.found_words],
            "remaining": len(self.remaining_words),
            "is_complete": self.is_complete,
            "started_at": self.started_at.isoformat(),
        }
