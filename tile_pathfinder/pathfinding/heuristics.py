"""Cost-to-target estimators used to order A* exploration."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict


class Heuristic(ABC):
    """Estimate the remaining cost from a tile to the target."""

    @abstractmethod
    def estimate(
        self, tile_map: Any, mover: Any, x: int, y: int, tx: int, ty: int
    ) -> float:
        """Return a non-negative estimate of the cost from ``(x, y)`` to ``(tx, ty)``."""
        raise NotImplementedError

    def __call__(
        self, tile_map: Any, mover: Any, x: int, y: int, tx: int, ty: int
    ) -> float:
        return self.estimate(tile_map, mover, x, y, tx, ty)


class ClosestHeuristic(Heuristic):
    """Straight-line distance to the target."""

    def estimate(self, tile_map, mover, x, y, tx, ty):
        dx = tx - x
        dy = ty - y
        return math.sqrt(dx * dx + dy * dy)


class ClosestSquaredHeuristic(Heuristic):
    """Squared straight-line distance.

    Overestimates on anything but adjacent tiles, so the search converges
    faster at the price of optimality.
    """

    def estimate(self, tile_map, mover, x, y, tx, ty):
        dx = tx - x
        dy = ty - y
        return float(dx * dx + dy * dy)


class ManhattanHeuristic(Heuristic):
    """Sum of axis distances scaled by the cheapest possible step cost."""

    def __init__(self, minimum_cost: float = 1.0) -> None:
        if minimum_cost < 0:
            raise ValueError("minimum_cost must be non-negative")
        self.minimum_cost = minimum_cost

    def estimate(self, tile_map, mover, x, y, tx, ty):
        return self.minimum_cost * (abs(x - tx) + abs(y - ty))


_HEURISTICS: Dict[str, Callable[[], Heuristic]] = {
    "closest": ClosestHeuristic,
    "closest_squared": ClosestSquaredHeuristic,
    "manhattan": ManhattanHeuristic,
}


def get_heuristic(name: str) -> Heuristic:
    """Return a new heuristic instance registered under ``name``."""

    try:
        factory = _HEURISTICS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(_HEURISTICS))
        raise ValueError(f"Unknown heuristic: {name!r} (expected one of {known})") from None
    return factory()


__all__ = [
    "Heuristic",
    "ClosestHeuristic",
    "ClosestSquaredHeuristic",
    "ManhattanHeuristic",
    "get_heuristic",
]
