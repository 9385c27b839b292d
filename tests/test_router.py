import pytest

from gridpath.grid import Grid, Square
from gridpath.pathfinding import AStar, PathFinder
from gridpath.point import Point


class RecordingFinder(PathFinder):
    """PathFinder stub: straight two-cell legs, optionally failing some."""

    def __init__(self, grid=None, failing=()):
        super().__init__(grid)
        self.calls = []
        self.failing = set(failing)

    def search(self, origin, destination):
        self.calls.append((tuple(origin), tuple(destination)))
        if (tuple(origin), tuple(destination)) in self.failing:
            return []
        return [Point.of(origin), Point.of(destination)]


def test_pathfinder_is_abstract():
    with pytest.raises(TypeError):
        PathFinder(Grid(2, 2))


@pytest.mark.parametrize("waypoints", [[], [(0, 0)]])
def test_too_few_waypoints(waypoints):
    finder = RecordingFinder()
    assert finder.route_in_order(waypoints) == []
    assert finder.route_by_distance_heuristic(waypoints) == []
    assert finder.calls == []


def test_route_in_order_concatenates_legs():
    finder = AStar(Grid(6, 6))
    a, b, c = (0, 0), (5, 0), (5, 5)
    expected = finder.search(a, b) + finder.search(b, c)
    assert finder.route_in_order([a, b, c]) == expected
    # Each leg keeps its own endpoints
    assert expected.count((5, 0)) == 2


def test_route_in_order_visits_in_given_order():
    finder = RecordingFinder()
    finder.route_in_order([(0, 0), (3, 3), (1, 1), (4, 4)])
    assert finder.calls == [
        ((0, 0), (3, 3)),
        ((3, 3), (1, 1)),
        ((1, 1), (4, 4)),
    ]


def test_route_in_order_fails_on_any_empty_leg():
    finder = RecordingFinder(failing=[((3, 3), (1, 1))])
    assert finder.route_in_order([(0, 0), (3, 3), (1, 1), (4, 4)]) == []


def test_route_in_order_with_unreachable_waypoint():
    grid = Grid(5, 5)
    for x in range(5):
        grid.set_square(Point(x, 2), Square.FULL)
    finder = AStar(grid)
    assert finder.route_in_order([(0, 0), (4, 0), (4, 4)]) == []
    assert finder.route_in_order([(0, 0), (4, 0), (2, 1)])


def test_heuristic_with_two_waypoints_matches_search():
    grid = Grid(7, 7)
    grid.set_square(Point(3, 3), Square.FULL)
    finder = AStar(grid)
    assert finder.route_by_distance_heuristic([(0, 0), (6, 6)]) == finder.search(
        (0, 0), (6, 6)
    )


@pytest.mark.parametrize(
    "midpoints",
    [[(1, 1), (8, 8)], [(8, 8), (1, 1)]],
)
def test_heuristic_visits_furthest_midpoint_first(midpoints):
    finder = RecordingFinder()
    start, end = (0, 0), (9, 9)
    finder.route_by_distance_heuristic([start, *midpoints, end])
    assert finder.calls == [
        ((0, 0), (1, 1)),
        ((1, 1), (8, 8)),
        ((8, 8), (9, 9)),
    ]


def test_heuristic_ties_keep_input_order():
    finder = RecordingFinder()
    # (5, 9) and (9, 5) are both 4 from the end
    finder.route_by_distance_heuristic([(0, 0), (5, 9), (9, 5), (0, 9), (9, 9)])
    assert finder.calls == [
        ((0, 0), (0, 9)),
        ((0, 9), (5, 9)),
        ((5, 9), (9, 5)),
        ((9, 5), (9, 9)),
    ]


def test_heuristic_fails_on_any_empty_leg():
    finder = RecordingFinder(failing=[((8, 8), (9, 9))])
    assert finder.route_by_distance_heuristic([(0, 0), (1, 1), (8, 8), (9, 9)]) == []


def test_heuristic_route_on_grid():
    grid = Grid(10, 10)
    finder = AStar(grid)
    route = finder.route_by_distance_heuristic([(0, 0), (8, 8), (1, 1), (9, 9)])
    assert route[0] == (0, 0)
    assert route[-1] == (9, 9)
    # (1, 1) is further from the end, so it is reached before (8, 8)
    assert route.index((1, 1)) < route.index((8, 8))
    assert route == finder.route_in_order([(0, 0), (1, 1), (8, 8), (9, 9)])
