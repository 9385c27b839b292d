"""
Pathfinding utilities: grid-based A* search and waypoint routing.
"""

from __future__ import annotations
import abc
import heapq
import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Set, Tuple

from .config import CARDINAL_COST, DIAGONAL_COST
from .point import Point

if TYPE_CHECKING:
    from .grid import Grid

logger = logging.getLogger(__name__)

Route = List[Point]


def heuristic(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """Manhattan distance heuristic for grid."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_next_to(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    """True if `a` and `b` are distinct cells touching cardinally or diagonally."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return max(dx, dy) == 1


class Node:
    """One grid cell as seen by a single A* run."""

    __slots__ = ("position", "heuristic", "g", "parent")

    def __init__(
        self,
        position: Point,
        heuristic: int,
        g: int = 0,
        parent: Optional[int] = None,
    ) -> None:
        self.position = position
        # Manhattan distance to the destination, fixed at creation
        self.heuristic = heuristic
        # Cost of the best known route from the origin
        self.g = g
        # Arena index of the predecessor; None for the origin
        self.parent = parent

    @property
    def f(self) -> int:
        return self.heuristic + self.g

    def __repr__(self) -> str:
        return (
            f"<Node {tuple(self.position)} h={self.heuristic} g={self.g} "
            f"parent={self.parent}>"
        )


class NodeArena:
    """
    All nodes created during one search, referenced by list index.

    `open` and `closed` hold indices and never share one. `index_of` maps a
    cell to its node so a cell is only ever given one node per search.
    """

    def __init__(self) -> None:
        self.nodes: List[Node] = []
        self.open: Set[int] = set()
        self.closed: Set[int] = set()
        self.index_of: Dict[Point, int] = {}
        # (f, index) entries; may hold stale entries for relaxed nodes
        self._heap: List[Tuple[int, int]] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def add(self, node: Node) -> int:
        """Store `node` and return its index."""
        index = len(self.nodes)
        self.nodes.append(node)
        self.index_of[node.position] = index
        return index

    def push_open(self, index: int) -> None:
        self.open.add(index)
        heapq.heappush(self._heap, (self.nodes[index].f, index))

    def close(self, index: int) -> None:
        self.open.discard(index)
        self.closed.add(index)

    def pop_smallest(self) -> int:
        """
        Remove and return the open node with the smallest f-value, lowest
        index first among equal f-values.
        """
        while self._heap:
            f, index = heapq.heappop(self._heap)
            if index in self.open and self.nodes[index].f == f:
                return index
        raise IndexError("pop from an empty open set")

    def lookup(self, p: Point) -> Optional[int]:
        return self.index_of.get(p)


class PathFinder(abc.ABC):
    """
    Base class of pathfinding algorithms over a Grid.

    Subclasses implement search(); routing through several waypoints is
    built on top of it here.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid

    @abc.abstractmethod
    def search(
        self, origin: Tuple[int, int], destination: Tuple[int, int]
    ) -> Route:
        """
        Return the cells from origin to destination inclusive, or an empty
        list if no path is possible.
        """

    def route_in_order(self, waypoints: Sequence[Tuple[int, int]]) -> Route:
        """
        Route through `waypoints` in the given order, concatenating the path
        of each leg. Returns an empty list if there are fewer than two
        waypoints or any leg cannot be found.
        """
        if len(waypoints) < 2:
            logger.debug("Need at least 2 waypoints, got %d", len(waypoints))
            return []
        route: Route = []
        for i in range(1, len(waypoints)):
            leg = self.search(waypoints[i - 1], waypoints[i])
            if not leg:
                logger.debug(
                    "No path for leg %d (%s -> %s)",
                    i,
                    waypoints[i - 1],
                    waypoints[i],
                )
                return []
            route.extend(leg)
        return route

    def route_by_distance_heuristic(
        self, waypoints: Sequence[Tuple[int, int]]
    ) -> Route:
        """
        Route from the first to the last waypoint, visiting the ones in
        between furthest-from-the-end first (by Manhattan distance). Equal
        distances keep their input order.
        """
        if len(waypoints) < 2:
            logger.debug("Need at least 2 waypoints, got %d", len(waypoints))
            return []
        if len(waypoints) == 2:
            return self.search(waypoints[0], waypoints[1])
        origin = Point.of(waypoints[0])
        destination = Point.of(waypoints[-1])
        midpoints = [Point.of(p) for p in waypoints[1:-1]]
        # sorted() is stable, reverse=True included
        ordered = sorted(
            midpoints, key=lambda p: heuristic(p, destination), reverse=True
        )
        return self.route_in_order([origin, *ordered, destination])

    def get_name(self) -> str:
        return self.__class__.__name__


class AStar(PathFinder):
    """
    A* over the 8-connected grid with integer step costs.

    The heuristic is the Manhattan distance in cells while steps cost
    `cardinal_cost` / `diagonal_cost`, and the search stops as soon as it
    expands a cell next to the destination.

    When a cheaper way into an open node is found its parent is always
    updated; `refresh_costs` decides whether its cost (and so its f-value)
    is updated too. With refresh_costs=False the stored cost keeps the value
    from when the node was first reached.
    """

    def __init__(
        self,
        grid: Grid,
        cardinal_cost: int = CARDINAL_COST,
        diagonal_cost: int = DIAGONAL_COST,
        refresh_costs: bool = True,
    ) -> None:
        super().__init__(grid)
        self.cardinal_cost = cardinal_cost
        self.diagonal_cost = diagonal_cost
        self.refresh_costs = refresh_costs

    @property
    def cardinal_cost(self) -> int:
        """Cost of moving north/south/east/west."""
        return self._cardinal_cost

    @cardinal_cost.setter
    def cardinal_cost(self, value: int) -> None:
        self._cardinal_cost = _check_cost("cardinal_cost", value)

    @property
    def diagonal_cost(self) -> int:
        """Cost of moving north-east/north-west/south-east/south-west."""
        return self._diagonal_cost

    @diagonal_cost.setter
    def diagonal_cost(self, value: int) -> None:
        self._diagonal_cost = _check_cost("diagonal_cost", value)

    def step_cost(self, a: Tuple[int, int], b: Tuple[int, int]) -> int:
        """Diagonal cost if `a` and `b` are one diagonal step apart, else cardinal."""
        if abs(a[0] - b[0]) == 1 and abs(a[1] - b[1]) == 1:
            return self._diagonal_cost
        return self._cardinal_cost

    def search(
        self, origin: Tuple[int, int], destination: Tuple[int, int]
    ) -> Route:
        origin = Point.of(origin)
        destination = Point.of(destination)
        if origin == destination and not self.grid.is_blocked(origin):
            return [origin]
        arena, last = self.explore(origin, destination)
        if last is None:
            return []
        # Walk parents back from the destination, which hangs off `last`
        reversed_route: Route = [destination]
        index: Optional[int] = last
        while index is not None:
            node = arena.nodes[index]
            reversed_route.append(node.position)
            index = node.parent
        reversed_route.reverse()
        return reversed_route

    def explore(
        self, origin: Point, destination: Point
    ) -> Tuple[NodeArena, Optional[int]]:
        """
        Run the search loop and return the arena together with the index of
        the expanded node next to `destination` (None if there is none).
        """
        arena = NodeArena()
        grid = self.grid
        if grid.is_blocked(origin) or grid.is_blocked(destination):
            logger.debug(
                "Blocked endpoint: origin=%s destination=%s", origin, destination
            )
            return arena, None

        origin_index = arena.add(Node(origin, heuristic(origin, destination)))
        arena.close(origin_index)

        neighbours = grid.empty_neighbours(origin)
        if not neighbours:
            logger.debug("Origin %s has no empty neighbours", origin)
            return arena, None
        for p in sorted(neighbours):
            index = arena.add(
                Node(
                    p,
                    heuristic(p, destination),
                    self.step_cost(origin, p),
                    origin_index,
                )
            )
            arena.push_open(index)

        current = origin_index
        while arena.open and not is_next_to(
            arena.nodes[current].position, destination
        ):
            current = arena.pop_smallest()
            arena.close(current)
            self._expand(arena, current, destination)

        if not is_next_to(arena.nodes[current].position, destination):
            logger.debug(
                "Open set exhausted after %d nodes: %s unreachable from %s",
                len(arena),
                destination,
                origin,
            )
            return arena, None
        return arena, current

    def _expand(self, arena: NodeArena, current: int, destination: Point) -> None:
        """Discover or relax every empty neighbour of the node at `current`."""
        node = arena.nodes[current]
        for p in sorted(self.grid.empty_neighbours(node.position)):
            g = node.g + self.step_cost(node.position, p)
            index = arena.lookup(p)
            if index is None:
                index = arena.add(Node(p, heuristic(p, destination), g, current))
                arena.push_open(index)
            elif index in arena.open:
                neighbour = arena.nodes[index]
                if g < neighbour.g:
                    neighbour.parent = current
                    if self.refresh_costs:
                        neighbour.g = g
                        arena.push_open(index)


def _check_cost(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value
