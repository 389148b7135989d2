"""Grid A* search."""

from .astar import DIAGONAL_PENALTY, AStarPathFinder, PathFinder, build_pathfinder
from .errors import CoordinateOutOfRangeError, NegativeMovementCostError, PathfindingError
from .heuristics import (
    ClosestHeuristic,
    ClosestSquaredHeuristic,
    Heuristic,
    ManhattanHeuristic,
    get_heuristic,
)
from .path import Path, Step

__all__ = [
    "DIAGONAL_PENALTY",
    "AStarPathFinder",
    "PathFinder",
    "build_pathfinder",
    "CoordinateOutOfRangeError",
    "NegativeMovementCostError",
    "PathfindingError",
    "ClosestHeuristic",
    "ClosestSquaredHeuristic",
    "Heuristic",
    "ManhattanHeuristic",
    "get_heuristic",
    "Path",
    "Step",
]
