"""
Integer grid positions.
"""

from __future__ import annotations
from typing import NamedTuple, Tuple, Union


class Point(NamedTuple):
    """
    An (x, y) cell on the grid.

    Being a tuple, points order lexicographically (x, then y) and hash like
    plain tuples, so they work as set members and dict keys. Addition and
    subtraction are component-wise rather than tuple concatenation.
    """

    x: int
    y: int

    @classmethod
    def of(cls, p: Union[Point, Tuple[int, int]]) -> Point:
        """Normalise an (x, y) pair (ints or floats) to a Point."""
        if isinstance(p, Point):
            return p
        return cls(int(p[0]), int(p[1]))

    def __add__(self, other: Tuple[int, int]) -> Point:  # type: ignore[override]
        return Point(self.x + other[0], self.y + other[1])

    def __sub__(self, other: Tuple[int, int]) -> Point:
        return Point(self.x - other[0], self.y - other[1])

    def manhattan(self, other: Tuple[int, int]) -> int:
        """Distance to `other` moving only parallel to the axes."""
        return abs(self.x - other[0]) + abs(self.y - other[1])

    def __str__(self) -> str:
        return f"{self.x}, {self.y}"
