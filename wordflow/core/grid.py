"""Grid model: coordinate addressing, 8-directional adjacency and spelling."""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

from .errors import OutOfBoundsError


# All eight neighbor offsets, row above first
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


class Coordinate(NamedTuple):
    """Zero-based (column, row) position on the grid."""
    x: int
    y: int


class Cell(BaseModel):
    """A single grid position. A cell without a letter is blank."""
    model_config = ConfigDict(frozen=True)

    letter: Optional[str] = None
    coordinate: Coordinate

    @property
    def is_blank(self) -> bool:
        return self.letter is None


def is_adjacent(a: Coordinate, b: Coordinate) -> bool:
    """True iff a and b are distinct and touch horizontally, vertically or diagonally."""
    if a == b:
        return False
    return max(abs(a.x - b.x), abs(a.y - b.y)) <= 1


class Grid(BaseModel):
    """
    Rectangular letter grid with blank-cell support.

    Built from rows of optional letters (``None`` or ``""`` is a blank).
    Letters are normalized to uppercase. Every coordinate in
    ``[0, width) x [0, height)`` maps to exactly one ``Cell``.
    """
    model_config = ConfigDict(frozen=True)

    rows: Tuple[Tuple[Optional[str], ...], ...]

    _cells: Dict[Coordinate, Cell] = PrivateAttr(default_factory=dict)
    _neighbors: Dict[Coordinate, Tuple[Coordinate, ...]] = PrivateAttr(default_factory=dict)

    @field_validator("rows", mode="before")
    @classmethod
    def _normalize_rows(cls, rows):
        if not rows or not rows[0]:
            raise ValueError("Grid must have at least one row and one column")

        width = len(rows[0])
        normalized = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
            letters = []
            for x, letter in enumerate(row):
                if letter is None or not str(letter).strip():
                    letters.append(None)
                    continue
                letter = str(letter).strip().upper()
                if len(letter) != 1 or not letter.isalpha():
                    raise ValueError(
                        f"Cell ({x}, {y}) must hold a single letter, got '{letter}'"
                    )
                letters.append(letter)
            normalized.append(tuple(letters))
        return tuple(normalized)

    def model_post_init(self, __context) -> None:
        """Index cells and precompute neighbor lists."""
        cells: Dict[Coordinate, Cell] = {}
        for y, row in enumerate(self.rows):
            for x, letter in enumerate(row):
                coordinate = Coordinate(x, y)
                cells[coordinate] = Cell(letter=letter, coordinate=coordinate)
        self._cells = cells

        neighbors: Dict[Coordinate, Tuple[Coordinate, ...]] = {}
        for coordinate, cell in cells.items():
            if cell.is_blank:
                continue
            adjacent = []
            for dx, dy in DIRECTIONS:
                other = Coordinate(coordinate.x + dx, coordinate.y + dy)
                if other in cells and not cells[other].is_blank:
                    adjacent.append(other)
            neighbors[coordinate] = tuple(adjacent)
        self._neighbors = neighbors

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def cells(self) -> Mapping[Coordinate, Cell]:
        """Read-only view of every cell keyed by coordinate."""
        return MappingProxyType(self._cells)

    def in_bounds(self, coordinate: Coordinate) -> bool:
        return 0 <= coordinate.x < self.width and 0 <= coordinate.y < self.height

    def cell_at(self, coordinate: Coordinate) -> Cell:
        """
        Get the cell at a coordinate.

        Raises:
            OutOfBoundsError: If the coordinate is outside the grid
        """
        cell = self._cells.get(Coordinate(*coordinate))
        if cell is None:
            raise OutOfBoundsError(Coordinate(*coordinate), self.width, self.height)
        return cell

    def is_letter(self, coordinate: Coordinate) -> bool:
        """True if the coordinate is inside the grid and holds a letter."""
        cell = self._cells.get(coordinate)
        return cell is not None and not cell.is_blank

    @staticmethod
    def is_adjacent(a: Coordinate, b: Coordinate) -> bool:
        return is_adjacent(a, b)

    def neighbors(self, coordinate: Coordinate) -> Tuple[Coordinate, ...]:
        """Adjacent coordinates that hold a letter. Empty for blanks."""
        if not self.in_bounds(coordinate):
            raise OutOfBoundsError(coordinate, self.width, self.height)
        return self._neighbors.get(coordinate, ())

    def spell(self, path: Sequence[Coordinate]) -> str:
        """
        Concatenate the letters along a path.

        Raises:
            OutOfBoundsError: If a coordinate is outside the grid
            ValueError: If the path crosses a blank cell
        """
        letters = []
        for coordinate in path:
            cell = self.cell_at(coordinate)
            if cell.is_blank:
                raise ValueError(
                    f"Path crosses blank cell at ({cell.coordinate.x}, {cell.coordinate.y})"
                )
            letters.append(cell.letter)
        return "".join(letters)

    def letter_coordinates(self) -> List[Coordinate]:
        """All non-blank coordinates in row-major order."""
        return [c for c, cell in self._cells.items() if not cell.is_blank]

    def letter_count(self) -> int:
        return len(self._neighbors)


def build_grid(rows: Iterable[Iterable[Optional[str]]]) -> Grid:
    """Build a grid from rows of letters, with None for blanks."""
    return Grid(rows=[list(row) for row in rows])


def render_grid(grid: Grid, highlight: Iterable[Coordinate] = ()) -> str:
    """Render the grid to a string, blanks as '.', highlighted cells lowercase."""
    marked = set(highlight)
    lines = []
    for y, row in enumerate(grid.rows):
        line = ""
        for x, letter in enumerate(row):
            if letter is None:
                line += "."
            elif (x, y) in marked:
                line += letter.lower()
            else:
                line += letter
        lines.append(line)
    return "\n".join(lines)
