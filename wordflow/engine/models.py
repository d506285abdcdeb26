"""
Pydantic models for the engine layer.

Configuration, gesture events, trace snapshots and discovery results.
The logic classes (TraceStateMachine, GameSession, WordDiscoveryEngine)
live in their own modules.
"""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..core.grid import Coordinate
from ..core.models import Path


# Type aliases
EventKind = Literal["down", "move", "up"]


class AppConfig(BaseModel):
    """Configuration for a WordFlow run."""
    dictionary_path: str = "data/words.txt"
    puzzles_path: str = "data/puzzles.json"
    minimum_word_length: int = Field(default=4, ge=1)
    debounce_seconds: float = Field(default=0.05, ge=0.0)
    max_errors: int = Field(default=5, ge=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class PointerEvent(BaseModel):
    """
    One gesture sample, already mapped to a grid cell.

    ``coordinate`` is None when the pointer is off the grid.
    ``at`` is a monotonic timestamp in seconds.
    """
    model_config = ConfigDict(frozen=True)

    kind: EventKind
    coordinate: Optional[Coordinate] = None
    at: float = 0.0


class TraceState(BaseModel):
    """
    Immutable snapshot of the trace in progress.

    An empty path is the Idle state. ``pending`` is the cell waiting out its
    debounce, committed once ``deadline`` passes.
    """
    model_config = ConfigDict(frozen=True)

    path: Path = ()
    pending: Optional[Coordinate] = None
    deadline: Optional[float] = None

    @property
    def is_tracing(self) -> bool:
        return bool(self.path)

    @property
    def last(self) -> Optional[Coordinate]:
        return self.path[-1] if self.path else None


IDLE = TraceState()


class TraceStep(BaseModel):
    """Result of feeding one event to the state machine."""
    model_config = ConfigDict(frozen=True)

    state: TraceState
    committed: Optional[Path] = None  # Finished path, set only on pointer up


class DiscoveredWord(BaseModel):
    """A dictionary word and one path that spells it on the grid."""
    model_config = ConfigDict(frozen=True)

    word: str
    path: Path


class DiscoveryMetrics(BaseModel):
    """Aggregate difficulty figures for a grid."""
    word_count: int = 0
    path_count: int = 0
    count_by_length: Dict[int, int] = Field(default_factory=dict)
    average_length: float = 0.0
    longest_word: Optional[str] = None
    grid_utilization: float = 0.0
    uncovered: List[Coordinate] = Field(default_factory=list)
    uncommon_letter_count: int = 0


class DiscoveryResult(BaseModel):
    """Everything found in one complete discovery run."""
    words: List[DiscoveredWord] = Field(default_factory=list)
    metrics: DiscoveryMetrics = Field(default_factory=DiscoveryMetrics)
    duration_seconds: float = 0.0

    @property
    def unique_words(self) -> List[str]:
        """Distinct words, sorted by length then alphabetically."""
        return sorted({w.word for w in self.words}, key=lambda w: (len(w), w))

    def paths_for(self, word: str) -> List[Tuple[Coordinate, ...]]:
        word = word.upper()
        return [w.path for w in self.words if w.word == word]
