"""Map query surface consumed by the pathfinder, plus a simple grid implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple


Coord = Tuple[int, int]


class TileBasedMap(ABC):
    """Grid the pathfinder searches.

    ``mover`` arguments are passed through untouched from the caller, so
    blocking and costs may depend on who is moving.
    """

    @abstractmethod
    def width_in_tiles(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def height_in_tiles(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def blocked(self, mover: Any, x: int, y: int) -> bool:
        """Return ``True`` if ``mover`` cannot occupy ``(x, y)``."""
        raise NotImplementedError

    @abstractmethod
    def movement_cost(self, mover: Any, sx: int, sy: int, tx: int, ty: int) -> float:
        """Return the non-negative cost of one step from ``(sx, sy)`` to ``(tx, ty)``."""
        raise NotImplementedError

    def on_visited(self, x: int, y: int) -> None:
        """Called whenever the search evaluates ``(x, y)``."""


@dataclass
class MoverRule:
    """Traversal rule for one kind of mover."""

    passes_blocked: bool = False
    cost_scale: float = 1.0


def mover_kind(mover: Any) -> Optional[str]:
    """Return the rule key for ``mover``: its ``kind`` attribute or the string itself."""

    if isinstance(mover, str):
        return mover
    return getattr(mover, "kind", None)


class GridMap(TileBasedMap):
    """In-memory grid of blocked flags and per-tile entry costs."""

    def __init__(
        self,
        width: int,
        height: int,
        blocked: Iterable[Coord] = (),
        costs: Optional[Dict[Coord, float]] = None,
        mover_rules: Optional[Dict[str, MoverRule]] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("map dimensions must be positive")
        self.width = width
        self.height = height
        self._blocked: set[Coord] = set()
        self._costs: Dict[Coord, float] = {}
        self.mover_rules: Dict[str, MoverRule] = dict(mover_rules or {})
        self.visited: Counter[Coord] = Counter()

        for x, y in blocked:
            self.set_blocked(x, y)
        for (x, y), cost in (costs or {}).items():
            self.set_cost(x, y, cost)

    # ------------------------------------------------------------------
    # Terrain editing
    # ------------------------------------------------------------------
    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} map")

    def set_blocked(self, x: int, y: int, value: bool = True) -> None:
        self._check(x, y)
        if value:
            self._blocked.add((x, y))
        else:
            self._blocked.discard((x, y))

    def is_blocked(self, x: int, y: int) -> bool:
        """Return the terrain flag, ignoring mover rules."""
        return (x, y) in self._blocked

    def set_cost(self, x: int, y: int, cost: float) -> None:
        """Set the cost of entering ``(x, y)``."""
        self._check(x, y)
        self._costs[(x, y)] = float(cost)

    def tile_cost(self, x: int, y: int) -> float:
        return self._costs.get((x, y), 1.0)

    def rule_for(self, mover: Any) -> MoverRule:
        kind = mover_kind(mover)
        if kind is None:
            return MoverRule()
        return self.mover_rules.get(kind, MoverRule())

    # ------------------------------------------------------------------
    # TileBasedMap
    # ------------------------------------------------------------------
    def width_in_tiles(self) -> int:
        return self.width

    def height_in_tiles(self) -> int:
        return self.height

    def blocked(self, mover: Any, x: int, y: int) -> bool:
        if (x, y) not in self._blocked:
            return False
        return not self.rule_for(mover).passes_blocked

    def movement_cost(self, mover: Any, sx: int, sy: int, tx: int, ty: int) -> float:
        return self.tile_cost(tx, ty) * self.rule_for(mover).cost_scale

    def on_visited(self, x: int, y: int) -> None:
        self.visited[(x, y)] += 1

    def clear_visited(self) -> None:
        self.visited.clear()


__all__ = ["Coord", "TileBasedMap", "MoverRule", "mover_kind", "GridMap"]
