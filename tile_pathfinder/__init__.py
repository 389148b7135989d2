"""Tile-grid A* pathfinding."""

from .core.tile_map import GridMap, MoverRule, TileBasedMap
from .pathfinding import AStarPathFinder, Path, Step, build_pathfinder

__all__ = [
    "AStarPathFinder",
    "GridMap",
    "MoverRule",
    "Path",
    "Step",
    "TileBasedMap",
    "build_pathfinder",
]
