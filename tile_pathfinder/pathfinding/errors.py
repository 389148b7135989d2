"""Exceptions raised by the pathfinder."""

from __future__ import annotations


class PathfindingError(Exception):
    """Base error for pathfinding failures that are not a plain "no path"."""


class CoordinateOutOfRangeError(PathfindingError, IndexError):
    """Raised when a start or target coordinate lies outside the map."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"coordinate ({x}, {y}) out of range for {width}x{height} map"
        )
        self.x = x
        self.y = y


class NegativeMovementCostError(PathfindingError, ValueError):
    """Raised when a map reports a negative cost for a single step."""


__all__ = [
    "PathfindingError",
    "CoordinateOutOfRangeError",
    "NegativeMovementCostError",
]
