import pytest

from tile_pathfinder.core.tile_map import GridMap, MoverRule, TileBasedMap
from tile_pathfinder.pathfinding.astar import DIAGONAL_PENALTY, AStarPathFinder
from tile_pathfinder.pathfinding.errors import (
    CoordinateOutOfRangeError,
    NegativeMovementCostError,
)
from tile_pathfinder.pathfinding.heuristics import ManhattanHeuristic


def _finder(tile_map, budget=100, diagonal=False, heuristic=None):
    return AStarPathFinder(tile_map, budget, diagonal, heuristic)


def test_blocked_target_returns_none_without_search():
    grid = GridMap(5, 5, blocked={(4, 4)})
    finder = _finder(grid)
    assert finder.find_path(None, 0, 0, 4, 4) is None
    assert not grid.visited
    assert finder.expanded == 0


def test_start_equals_target_single_step():
    finder = _finder(GridMap(3, 3))
    path = finder.find_path(None, 1, 1, 1, 1)
    assert path is not None
    assert path.coords() == [(1, 1)]
    assert path[0].cost == 0.0


def test_open_grid_orthogonal_shortest_path():
    finder = _finder(GridMap(5, 5), heuristic=ManhattanHeuristic())
    path = finder.find_path(None, 0, 0, 4, 4)
    assert path is not None
    assert len(path) == 9
    assert path.total_cost == pytest.approx(8.0)
    assert path.coords()[0] == (0, 0) and path.coords()[-1] == (4, 4)
    for a, b in zip(path, path.steps[1:]):
        assert abs(a.x - b.x) + abs(a.y - b.y) == 1
        assert b.cost == pytest.approx(a.cost + 1.0)


def test_default_heuristic_also_optimal_on_open_grid():
    path = _finder(GridMap(5, 5)).find_path(None, 0, 0, 4, 4)
    assert path.total_cost == pytest.approx(8.0)
    assert len(path) == 9


def test_diagonal_moves_with_and_without_penalty():
    finder = _finder(GridMap(5, 5), diagonal=True)

    plain = finder.find_path(None, 0, 0, 4, 4)
    assert plain.coords() == [(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)]
    assert plain.total_cost == pytest.approx(4.0)

    penalised = finder.find_path(None, 0, 0, 4, 4, use_diagonal_penalty=True)
    assert len(penalised) == 5
    assert penalised.total_cost == pytest.approx(4 * (1 + DIAGONAL_PENALTY))


def test_corner_cutting_rejected_when_both_sides_blocked():
    grid = GridMap(3, 3, blocked={(2, 1), (1, 2)})
    finder = _finder(grid, diagonal=True)
    assert finder.find_path(None, 1, 1, 2, 2) is None


def test_corner_cutting_rejected_when_one_side_blocked():
    grid = GridMap(3, 3, blocked={(2, 1)})
    finder = _finder(grid, diagonal=True)
    path = finder.find_path(None, 1, 1, 2, 2)
    assert path.coords() == [(1, 1), (1, 2), (2, 2)]
    assert path.total_cost == pytest.approx(2.0)


def test_budget_exhaustion_returns_none():
    finder = _finder(GridMap(5, 5), budget=1)
    assert finder.find_path(None, 0, 0, 4, 4) is None

    finder.set_max_search_distance(50)
    assert finder.max_search_distance == 50
    assert finder.find_path(None, 0, 0, 4, 4) is not None


def test_zero_budget_still_allows_trivial_path():
    finder = _finder(GridMap(3, 3), budget=0)
    assert finder.find_path(None, 0, 0, 2, 2) is None
    assert finder.find_path(None, 2, 2, 2, 2).coords() == [(2, 2)]


def test_reopening_closed_node_finds_true_minimum():
    # S A X T
    # B C D #
    # Entering A costs 10, so the top route to X costs 11 but the bottom
    # route costs 4. The heuristic lures the search along the top first so X
    # is closed at cost 11 before the cheaper route reaches it.
    grid = GridMap(4, 2, blocked={(3, 1)}, costs={(1, 0): 10})
    estimates = {(0, 1): 10.5, (3, 0): 100.0}
    admitted = []

    def misleading(tile_map, mover, x, y, tx, ty):
        admitted.append((x, y))
        return estimates.get((x, y), 0.0)

    finder = _finder(grid, heuristic=misleading)
    path = finder.find_path(None, 0, 0, 3, 0)

    assert path.coords() == [(0, 0), (0, 1), (1, 1), (2, 1), (2, 0), (3, 0)]
    assert path.total_cost == pytest.approx(5.0)
    assert admitted.count((2, 0)) == 2


def test_repeated_search_is_identical():
    grid = GridMap(8, 6, blocked={(3, y) for y in range(5)}, costs={(5, 2): 4})
    finder = _finder(grid, diagonal=True)
    first = finder.find_path(None, 0, 0, 7, 5, True)
    second = finder.find_path(None, 0, 0, 7, 5, True)
    assert first is not None
    assert first == second


def test_reuse_after_failed_search():
    grid = GridMap(5, 5, blocked={(2, y) for y in range(5)})
    finder = _finder(grid)
    assert finder.find_path(None, 0, 0, 4, 0) is None
    grid.set_blocked(2, 4, False)
    path = finder.find_path(None, 0, 0, 4, 0)
    assert path is not None
    assert path.contains(2, 4)
    assert path.total_cost == pytest.approx(12.0)


def test_path_avoids_expensive_tiles():
    grid = GridMap(3, 3, costs={(1, 0): 9, (1, 1): 9})
    path = _finder(grid).find_path(None, 0, 0, 2, 0)
    assert path.contains(1, 2)
    assert path.total_cost == pytest.approx(6.0)


def test_blocked_start_can_be_left():
    grid = GridMap(3, 1, blocked={(0, 0)})
    path = _finder(grid).find_path(None, 0, 0, 2, 0)
    assert path.coords() == [(0, 0), (1, 0), (2, 0)]


def test_mover_rules_change_result():
    wall = {(2, y) for y in range(3)}
    grid = GridMap(5, 3, blocked=wall, mover_rules={"bird": MoverRule(passes_blocked=True)})
    finder = _finder(grid)
    assert finder.find_path("walker", 0, 1, 4, 1) is None
    path = finder.find_path("bird", 0, 1, 4, 1)
    assert path.coords() == [(0, 1), (1, 1), (2, 1), (3, 1), (4, 1)]


def test_on_visited_notified():
    grid = GridMap(3, 3)
    _finder(grid).find_path(None, 0, 0, 2, 0)
    assert (1, 0) in grid.visited
    assert all(0 <= x < 3 and 0 <= y < 3 for x, y in grid.visited)


@pytest.mark.parametrize("coords", [(-1, 0, 2, 2), (0, 0, 3, 0), (0, 5, 1, 1)])
def test_out_of_range_coordinates_raise(coords):
    finder = _finder(GridMap(3, 3))
    with pytest.raises(CoordinateOutOfRangeError):
        finder.find_path(None, *coords)
    assert finder.find_path(None, 0, 0, 2, 2) is not None


class _NegativeMap(TileBasedMap):
    def width_in_tiles(self):
        return 3

    def height_in_tiles(self):
        return 3

    def blocked(self, mover, x, y):
        return False

    def movement_cost(self, mover, sx, sy, tx, ty):
        return -1.0


def test_negative_movement_cost_fails_fast():
    finder = _finder(_NegativeMap())
    with pytest.raises(NegativeMovementCostError):
        finder.find_path(None, 0, 0, 2, 2)


def test_default_on_visited_is_noop():
    class Plain(_NegativeMap):
        def movement_cost(self, mover, sx, sy, tx, ty):
            return 1.0

    path = _finder(Plain()).find_path(None, 0, 0, 2, 0)
    assert path.total_cost == pytest.approx(2.0)
