"""A* search over a :class:`~tile_pathfinder.core.tile_map.TileBasedMap`."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union

from ..core.tile_map import TileBasedMap
from .errors import CoordinateOutOfRangeError, NegativeMovementCostError
from .frontier import Frontier, VisitedSet
from .heuristics import ClosestHeuristic, Heuristic, get_heuristic
from .nodes import NodeGrid, SearchNode
from .path import Path, Step

logger = logging.getLogger(__name__)

# Extra cost of a diagonal step over a unit orthogonal one (sqrt(2) - 1).
DIAGONAL_PENALTY = 0.41421

_ORTHOGONAL_OFFSETS = ((0, -1), (-1, 0), (1, 0), (0, 1))
_ALL_OFFSETS = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)

HeuristicLike = Union[Heuristic, Callable[..., float]]


class PathFinder(ABC):
    """Something that can plot a route across a tile map."""

    @abstractmethod
    def find_path(
        self,
        mover: Any,
        sx: int,
        sy: int,
        tx: int,
        ty: int,
        use_diagonal_penalty: Optional[bool] = None,
    ) -> Optional[Path]:
        """Return a path from ``(sx, sy)`` to ``(tx, ty)`` or ``None``."""
        raise NotImplementedError


class AStarPathFinder(PathFinder):
    """Pathfinder that reuses one node grid for every search.

    Instances are not safe to share between concurrent searches; keep one
    per thread or guard :meth:`find_path` with a lock.
    """

    def __init__(
        self,
        tile_map: TileBasedMap,
        max_search_distance: int,
        allow_diagonal_movement: bool,
        heuristic: HeuristicLike | None = None,
        use_diagonal_penalty: bool = False,
    ) -> None:
        self.tile_map = tile_map
        self.allow_diagonal_movement = allow_diagonal_movement
        self.use_diagonal_penalty = use_diagonal_penalty
        self._max_search_distance = int(max_search_distance)
        if heuristic is None:
            heuristic = ClosestHeuristic()
        self._estimate = getattr(heuristic, "estimate", heuristic)
        self.heuristic = heuristic

        self.width = tile_map.width_in_tiles()
        self.height = tile_map.height_in_tiles()
        self.nodes = NodeGrid(self.width, self.height)
        self._open = Frontier()
        self._closed = VisitedSet()
        self.expanded = 0

    # ------------------------------------------------------------------
    # Budget
    # ------------------------------------------------------------------
    @property
    def max_search_distance(self) -> int:
        return self._max_search_distance

    def set_max_search_distance(self, distance: int) -> None:
        """Change the depth budget used by subsequent searches."""
        self._max_search_distance = int(distance)

    # ------------------------------------------------------------------
    # Cost hooks
    # ------------------------------------------------------------------
    def get_heuristic_cost(self, mover: Any, x: int, y: int, tx: int, ty: int) -> float:
        return float(self._estimate(self.tile_map, mover, x, y, tx, ty))

    def get_movement_cost(self, mover: Any, sx: int, sy: int, tx: int, ty: int) -> float:
        cost = self.tile_map.movement_cost(mover, sx, sy, tx, ty)
        if cost < 0:
            raise NegativeMovementCostError(
                f"negative movement cost {cost} from ({sx}, {sy}) to ({tx}, {ty})"
            )
        return float(cost)

    def is_valid_location(self, mover: Any, sx: int, sy: int, x: int, y: int) -> bool:
        """Return ``True`` if ``mover`` may stand on ``(x, y)``.

        The start tile is always valid so a mover can leave a blocked cell.
        """
        if not self.nodes.in_bounds(x, y):
            return False
        if x == sx and y == sy:
            return True
        return not self.tile_map.blocked(mover, x, y)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _check_coords(self, x: int, y: int) -> None:
        if not self.nodes.in_bounds(x, y):
            raise CoordinateOutOfRangeError(x, y, self.width, self.height)

    def find_path(
        self,
        mover: Any,
        sx: int,
        sy: int,
        tx: int,
        ty: int,
        use_diagonal_penalty: Optional[bool] = None,
    ) -> Optional[Path]:
        self._check_coords(sx, sy)
        self._check_coords(tx, ty)
        if use_diagonal_penalty is None:
            use_diagonal_penalty = self.use_diagonal_penalty
        self.expanded = 0

        if self.tile_map.blocked(mover, tx, ty):
            logger.debug("Target (%d,%d) blocked for mover %r; no search.", tx, ty, mover)
            return None

        start = self.nodes.node(sx, sy)
        target = self.nodes.node(tx, ty)

        start.cost = 0.0
        start.depth = 0
        start.parent = None
        self._closed.clear()
        self._open.clear()
        self._open.push(start)
        target.parent = None

        logger.debug(
            "Searching (%d,%d) -> (%d,%d) for mover %r, budget %d",
            sx, sy, tx, ty, mover, self._max_search_distance,
        )

        max_depth = 0
        while max_depth < self._max_search_distance and self._open:
            current = self._open.peek()
            if current is target:
                break

            self._open.remove(current)
            self._closed.add(current)
            self.expanded += 1

            max_depth = self._search_neighbours(
                mover, sx, sy, tx, ty, use_diagonal_penalty, current, max_depth
            )

        if target is not start and target.parent is None:
            if max_depth >= self._max_search_distance:
                logger.debug(
                    "Search budget %d exhausted after %d expansions.",
                    self._max_search_distance, self.expanded,
                )
            else:
                logger.debug("No path after %d expansions.", self.expanded)
            return None

        path = self._reconstruct(start, target)
        logger.debug(
            "Path found: %d steps, cost %.3f, %d expansions.",
            len(path), path.total_cost, self.expanded,
        )
        return path

    def _search_neighbours(
        self,
        mover: Any,
        sx: int,
        sy: int,
        tx: int,
        ty: int,
        use_diagonal_penalty: bool,
        current: SearchNode,
        max_depth: int,
    ) -> int:
        offsets = _ALL_OFFSETS if self.allow_diagonal_movement else _ORTHOGONAL_OFFSETS
        for dx, dy in offsets:
            diagonal = dx != 0 and dy != 0

            # [B][#][B]
            # [#][A][#]
            # [B][#][B]
            # No squeezing diagonally between two walls.
            if diagonal and (
                not self.is_valid_location(mover, sx, sy, current.x, current.y + dy)
                or not self.is_valid_location(mover, sx, sy, current.x + dx, current.y)
            ):
                continue

            xp = current.x + dx
            yp = current.y + dy
            if not self.is_valid_location(mover, sx, sy, xp, yp):
                continue

            next_cost = current.cost + self.get_movement_cost(
                mover, current.x, current.y, xp, yp
            )
            if diagonal and use_diagonal_penalty:
                next_cost += DIAGONAL_PENALTY

            neighbour = self.nodes.node(xp, yp)
            self.tile_map.on_visited(xp, yp)

            if next_cost < neighbour.cost:
                if neighbour in self._open:
                    self._open.remove(neighbour)
                if neighbour in self._closed:
                    self._closed.discard(neighbour)

            if neighbour not in self._open and neighbour not in self._closed:
                neighbour.cost = next_cost
                neighbour.heuristic = self.get_heuristic_cost(mover, xp, yp, tx, ty)
                max_depth = max(max_depth, neighbour.set_parent(current))
                self._open.push(neighbour)

        return max_depth

    def _reconstruct(self, start: SearchNode, target: SearchNode) -> Path:
        steps = []
        node = target
        while node is not start:
            steps.append(Step(node.x, node.y, node.cost))
            node = self.nodes[node.parent]
        steps.append(Step(start.x, start.y, start.cost))
        steps.reverse()
        return Path(steps)


def build_pathfinder(tile_map: TileBasedMap, cfg: Any = None) -> AStarPathFinder:
    """Create an :class:`AStarPathFinder` from the ``pathfinding`` config section.

    ``use_diagonal_penalty`` becomes the finder's default for
    :meth:`AStarPathFinder.find_path` calls that do not pass the flag.
    """

    if cfg is None:
        from ..config import CONFIG

        cfg = CONFIG.pathfinding
    return AStarPathFinder(
        tile_map,
        max_search_distance=cfg.max_search_distance,
        allow_diagonal_movement=cfg.allow_diagonal_movement,
        heuristic=get_heuristic(cfg.heuristic),
        use_diagonal_penalty=cfg.use_diagonal_penalty,
    )


__all__ = ["DIAGONAL_PENALTY", "PathFinder", "AStarPathFinder", "build_pathfinder"]
