"""
Gesture-to-path state machine.

Turns a stream of pointer samples into committed paths of grid cells.
Every transition is a pure function of (state, event); the debounce timer
is a ``deadline`` on the state, advanced by the event timestamps or by an
external clock calling ``tick``. No real timers, so a late tick against a
state that has moved on is a no-op.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..core.grid import Coordinate, Grid, is_adjacent
from ..core.models import Path as CoordinatePath
from .models import IDLE, EventKind, PointerEvent, TraceState, TraceStep


logger = logging.getLogger(__name__)

# Short delay before a hovered cell is selected, so sliding through a cell
# on the way to another does not select it
DEFAULT_DEBOUNCE = 0.05


class TraceStateMachine:
    """
    Tracks one gesture at a time over a grid.

    States:
        Idle: empty path
        Tracing: non-empty path, optionally with a pending candidate

    Attributes:
        grid: The grid being traced
        debounce: Seconds a candidate must be held before it is selected
    """

    def __init__(self, grid: Grid, debounce: float = DEFAULT_DEBOUNCE):
        if debounce < 0:
            raise ValueError(f"debounce must be non-negative, got {debounce}")
        self.grid = grid
        self.debounce = debounce

    def _selectable(self, coordinate: Optional[Coordinate]) -> bool:
        return coordinate is not None and self.grid.is_letter(coordinate)

    @staticmethod
    def _can_extend(path: CoordinatePath, coordinate: Coordinate) -> bool:
        return bool(path) and is_adjacent(path[-1], coordinate) and coordinate not in path

    @staticmethod
    def _clear_pending(state: TraceState) -> TraceState:
        if state.pending is None:
            return state
        return TraceState(path=state.path)

    def tick(self, state: TraceState, now: float) -> TraceState:
        """
        Commit the pending candidate if its deadline has passed.

        Safe to call at any time: with no candidate, or before the deadline,
        the state comes back unchanged.
        """
        if state.pending is None or state.deadline is None or now < state.deadline:
            return state
        if not self._can_extend(state.path, state.pending):
            return TraceState(path=state.path)
        return TraceState(path=state.path + (state.pending,))

    def begin(self, coordinate: Optional[Coordinate]) -> TraceState:
        """Start a trace. The first cell is selected immediately."""
        if not self._selectable(coordinate):
            return IDLE
        return TraceState(path=(Coordinate(*coordinate),))

    def move(self, state: TraceState, coordinate: Optional[Coordinate], at: float) -> TraceState:
        """Apply a pointer move. Assumes any due deadline has already fired."""
        if not state.is_tracing:
            return state

        # Off the grid or over a blank: abandon the candidate
        if not self._selectable(coordinate):
            return self._clear_pending(state)

        coordinate = Coordinate(*coordinate)
        path = state.path

        # Back on the last cell: the candidate keeps its deadline
        if coordinate == path[-1]:
            return state

        # Backtracking is immediate
        if len(path) > 1 and coordinate == path[-2]:
            return TraceState(path=path[:-1])

        # Still on the candidate: let its deadline run
        if coordinate == state.pending:
            return state

        if self._can_extend(path, coordinate):
            return TraceState(path=path, pending=coordinate, deadline=at + self.debounce)

        # Not adjacent, or already used
        return self._clear_pending(state)

    def finish(self, state: TraceState) -> TraceStep:
        """End the gesture, committing any candidate still waiting on its debounce."""
        if not state.is_tracing:
            return TraceStep(state=IDLE)

        path = state.path
        if state.pending is not None and self._can_extend(path, state.pending):
            path = path + (state.pending,)
        return TraceStep(state=IDLE, committed=path)

    def handle(self, state: TraceState, event: PointerEvent) -> TraceStep:
        """
        Feed one pointer sample to the machine.

        Args:
            state: Current snapshot
            event: The sample

        Returns:
            TraceStep with the new state, and the finished path on pointer up
        """
        if event.kind == "down":
            return TraceStep(state=self.begin(event.coordinate))

        state = self.tick(state, event.at)

        if event.kind == "move":
            return TraceStep(state=self.move(state, event.coordinate, event.at))

        return self.finish(state)


def replay_gestures(
    machine: TraceStateMachine,
    events: Iterable[PointerEvent],
) -> List[CoordinatePath]:
    """Run a recorded event stream through the machine and return every committed path."""
    state = IDLE
    committed: List[CoordinatePath] = []
    for event in events:
        step = machine.handle(state, event)
        state = step.state
        if step.committed is not None:
            committed.append(step.committed)
    return committed


class GestureRecord(BaseModel):
    """On-disk gesture sample: ``{"kind": "move", "x": 1, "y": 0, "at": 0.12}``."""
    kind: EventKind
    x: Optional[int] = None
    y: Optional[int] = None
    at: float = 0.0

    def to_event(self) -> PointerEvent:
        coordinate = None
        if self.x is not None and self.y is not None:
            coordinate = Coordinate(self.x, self.y)
        return PointerEvent(kind=self.kind, coordinate=coordinate, at=self.at)


def load_gestures(path: Union[str, Path]) -> List[PointerEvent]:
    """
    Load a recorded gesture stream from a JSON list.

    Raises:
        ValueError: If the file is not a valid gesture list
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    try:
        records = TypeAdapter(List[GestureRecord]).validate_python(data)
        events = [r.to_event() for r in records]
    except PydanticValidationError as e:
        raise ValueError(f"Invalid gesture log {path}: {e}") from e

    logger.debug("Loaded %d gesture events from %s", len(events), path)
    return events
