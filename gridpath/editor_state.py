"""
Editing state behind the grid viewer: waypoints, edit mode and the last
pathfinding result. Free of pygame so it can be driven directly.
"""

from __future__ import annotations
import enum
import logging
from typing import List, Set

import numpy as np

from .config import CARDINAL_COST, DIAGONAL_COST
from .grid import Grid, Square
from .pathfinding import AStar, Route
from .point import Point

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    # Clicking a cell toggles it between EMPTY and FULL
    NORMAL = "normal"
    # Clicking a cell moves the selected waypoint there
    SETTING_WAYPOINT = "setting_waypoint"


class EditorState:
    """
    Waypoints, mode and status shown by the editor.

    waypoints[0] is the start and waypoints[-1] the end; there are always at
    least two. `status` is (message, kind) where kind is one of the keys of
    config.STATUS_COLORS.
    """

    def __init__(
        self,
        grid: Grid,
        cardinal_cost: int = CARDINAL_COST,
        diagonal_cost: int = DIAGONAL_COST,
    ) -> None:
        self.grid = grid
        self.cardinal_cost = cardinal_cost
        self.diagonal_cost = diagonal_cost
        self.waypoints: List[Point] = []
        self.mode = Mode.NORMAL
        self.selected = 0
        self._path: Route = []
        self._path_set: Set[Point] = set()
        self.status = ("", "idle")
        self._reset_waypoints()

    def _reset_waypoints(self) -> None:
        # Start in the top-left, end in the bottom-right
        self.waypoints = [
            Point(0, 0),
            Point(self.grid.width - 1, self.grid.height - 1),
        ]
        self.selected = 0
        self.mode = Mode.NORMAL
        self.path = []

    @property
    def path(self) -> Route:
        """Route found by the last pathfind, empty once the grid is edited."""
        return self._path

    @path.setter
    def path(self, route: Route) -> None:
        self._path = route
        self._path_set = set(route)

    def click(self, p: Point) -> None:
        """Handle a click on grid cell `p` according to the current mode."""
        p = Point.of(p)
        if not self.grid.in_bounds(p):
            return
        self.path = []
        if self.mode is Mode.SETTING_WAYPOINT:
            self.grid.set_square(p, Square.EMPTY)
            self.waypoints[self.selected] = p
            logger.info(
                "Waypoint %s set to %s", self.waypoint_label(self.selected), p
            )
        elif p not in self.waypoints:
            if self.grid.get_square(p) is Square.EMPTY:
                self.grid.set_square(p, Square.FULL)
            else:
                self.grid.set_square(p, Square.EMPTY)
        self.mode = Mode.NORMAL
        self.status = ("", "idle")

    def pathfind(self, use_heuristic: bool = False) -> Route:
        """
        Route through the waypoints, in creation order or furthest from the
        end first, and record the result.
        """
        pathfinder = AStar(
            self.grid,
            cardinal_cost=self.cardinal_cost,
            diagonal_cost=self.diagonal_cost,
        )
        if use_heuristic:
            self.path = pathfinder.route_by_distance_heuristic(self.waypoints)
        else:
            self.path = pathfinder.route_in_order(self.waypoints)
        if self.path:
            self.status = ("Success!", "success")
        else:
            self.status = ("Couldn't find path", "failure")
        logger.info(
            "Pathfind (heuristic=%s) through %d waypoints: %d cells",
            use_heuristic,
            len(self.waypoints),
            len(self.path),
        )
        return self.path

    def repopulate(self, n_full: int, rng: np.random.Generator) -> None:
        """Clear the grid, fill `n_full` random cells and keep waypoints empty."""
        self.grid.clear()
        self.grid.populate(n_full, rng)
        for p in self.waypoints:
            self.grid.set_square(p, Square.EMPTY)
        self.path = []
        logger.info("Repopulated grid with %d cells", n_full)

    def clear(self) -> None:
        self.grid.clear()
        self.path = []

    def new_grid(self, width: int, height: int) -> None:
        """Replace the grid with an empty one and reset the waypoints."""
        self.grid = Grid(width, height)
        self._reset_waypoints()
        self.status = ("", "idle")
        logger.info("New %dx%d grid", width, height)

    def begin_set_waypoint(self) -> None:
        self.mode = Mode.SETTING_WAYPOINT
        self.status = ("Setting Waypoint", "pending")

    def add_waypoint(self) -> None:
        """Insert a waypoint at (0, 0) just before the end and select it."""
        index = len(self.waypoints) - 1
        self.waypoints.insert(index, Point(0, 0))
        self.selected = index
        self.path = []

    def delete_waypoint(self) -> None:
        """Remove the selected waypoint; the start and end cannot be removed."""
        index = self.selected
        if index == 0 or index == len(self.waypoints) - 1:
            self.status = ("Can't delete start/end", "failure")
            return
        del self.waypoints[index]
        self.selected = min(index, len(self.waypoints) - 1)
        self.path = []

    def select_next(self) -> None:
        self.selected = (self.selected + 1) % len(self.waypoints)

    def select_previous(self) -> None:
        self.selected = (self.selected - 1) % len(self.waypoints)

    def waypoint_label(self, index: int) -> str:
        if index == 0:
            return "start"
        if index == len(self.waypoints) - 1:
            return "end"
        return str(index)

    def cell_kind(self, p: Point) -> str:
        """
        How cell `p` should be drawn: "start", "end", "waypoint", "path",
        "full" or "empty", in that order of precedence.
        """
        p = Point.of(p)
        if p == self.waypoints[0]:
            return "start"
        if p == self.waypoints[-1]:
            return "end"
        if p in self.waypoints:
            return "waypoint"
        if p in self._path_set:
            return "path"
        if self.grid.is_blocked(p):
            return "full"
        return "empty"
