"""
Occupancy grid: a rectangle of EMPTY/FULL squares addressed by Point.
"""

from __future__ import annotations
import enum
import json
from typing import Iterable, List, Optional, Sequence, Set

import numpy as np

from .point import Point


class Square(enum.Enum):
    """State of one cell: EMPTY is freely traversable, FULL is not at all."""

    EMPTY = 0
    FULL = 1

    def char(self) -> str:
        """Return 'o' for EMPTY, 'x' for FULL."""
        return "o" if self is Square.EMPTY else "x"


# Offsets of the 8 cells surrounding a point
_NEIGHBOUR_OFFSETS = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class Grid:
    """
    Width x height grid of Squares, (0, 0) at the top-left.

    Cells are stored in a uint8 array of shape (height, width) indexed
    [y, x], holding Square values.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        self.width = int(width)
        self.height = int(height)
        self.cells = np.full(
            (self.height, self.width), Square.EMPTY.value, dtype=np.uint8
        )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Grid:
        """Build a grid from rows of 0 (EMPTY) / 1 (FULL), rows[y][x]."""
        if not rows or not rows[0]:
            raise ValueError("Grid rows must be non-empty")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid rows must all have the same length")
        grid = cls(width, len(rows))
        grid.cells[:, :] = (np.asarray(rows) != 0).astype(np.uint8)
        return grid

    @classmethod
    def load(cls, path: str) -> Grid:
        """
        Load a grid from a JSON file.

        Two layouts are accepted:
            {"map": [[0, 1, ...], ...]}
            {"width": W, "height": H, "full": [[x, y], ...]}
        Raises RuntimeError if the file cannot be read or understood.
        """
        try:
            with open(path, "r") as f:
                data = json.load(f)
            if "map" in data:
                return cls.from_rows(data["map"])
            grid = cls(int(data["width"]), int(data["height"]))
            for pos in data.get("full", []):
                p = Point.of(pos)
                if not grid.in_bounds(p):
                    raise ValueError(f"cell {p} is outside the grid")
                grid.set_square(p, Square.FULL)
            return grid
        except Exception as e:
            raise RuntimeError(f"Failed to load grid from {path}: {e}")

    def save(self, path: str) -> None:
        """Write the grid to `path` in the {"map": ...} layout."""
        with open(path, "w") as f:
            json.dump({"map": self.cells.tolist()}, f)

    @property
    def dimensions(self) -> Point:
        """Point(width, height), one past the largest coordinate."""
        return Point(self.width, self.height)

    def in_bounds(self, p: Point) -> bool:
        return 0 <= p[0] < self.width and 0 <= p[1] < self.height

    def get_square(self, p: Point) -> Square:
        return Square(int(self.cells[p[1], p[0]]))

    def set_square(self, p: Point, square: Square) -> None:
        self.cells[p[1], p[0]] = square.value

    def is_blocked(self, p: Point) -> bool:
        """Return True if `p` is FULL or outside the grid."""
        if not self.in_bounds(p):
            return True
        return self.cells[p[1], p[0]] == Square.FULL.value

    def neighbours(self, p: Point) -> Set[Point]:
        """
        Cells adjacent to `p` cardinally or diagonally, skipping `p` itself
        and anything past the grid edges.
        """
        p = Point.of(p)
        result: Set[Point] = set()
        for offset in _NEIGHBOUR_OFFSETS:
            candidate = p + offset
            if self.in_bounds(candidate):
                result.add(candidate)
        return result

    def empty_neighbours(self, p: Point) -> Set[Point]:
        """Same as neighbours() but only EMPTY cells."""
        return {n for n in self.neighbours(p) if not self.is_blocked(n)}

    def empty_point(self, rng: np.random.Generator) -> Point:
        """
        Return a random EMPTY cell drawn with `rng`.
        Raises RuntimeError if every cell is FULL.
        """
        empty = np.argwhere(self.cells == Square.EMPTY.value)
        if len(empty) == 0:
            raise RuntimeError("Grid has no empty cells")
        y, x = empty[rng.integers(len(empty))]
        return Point(int(x), int(y))

    def populate(self, n_full: int, rng: np.random.Generator) -> Grid:
        """
        Mark `n_full` randomly chosen cells FULL (cells may be picked more
        than once). Asking for more cells than the grid has fills it
        completely. Returns the grid.
        """
        if n_full > self.width * self.height:
            self.cells.fill(Square.FULL.value)
            return self
        if n_full <= 0:
            return self
        xs = rng.integers(0, self.width, size=n_full)
        ys = rng.integers(0, self.height, size=n_full)
        self.cells[ys, xs] = Square.FULL.value
        return self

    def clear(self) -> None:
        """Set every square EMPTY."""
        self.cells.fill(Square.EMPTY.value)

    def count(self, square: Square) -> int:
        return int(np.count_nonzero(self.cells == square.value))

    def to_string(self, path: Optional[Iterable[Point]] = None) -> str:
        """
        Render one line per row using Square.char(), drawing cells that lie
        on `path` as '.'.
        """
        on_path = {Point.of(p) for p in path} if path else set()
        lines: List[str] = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if (x, y) in on_path:
                    row.append(".")
                else:
                    row.append(Square(int(self.cells[y, x])).char())
            lines.append("".join(row))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<Grid {self.width}x{self.height} full={self.count(Square.FULL)}>"
