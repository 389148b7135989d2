"""Pre-allocated per-tile search records."""

from __future__ import annotations

from typing import Iterator, List, Optional


class SearchNode:
    """Search state for a single tile.

    ``parent`` holds the linear index of the predecessor on the best known
    path, or ``None``.
    """

    __slots__ = ("x", "y", "index", "cost", "heuristic", "depth", "parent")

    def __init__(self, x: int, y: int, index: int) -> None:
        self.x = x
        self.y = y
        self.index = index
        self.cost = 0.0
        self.heuristic = 0.0
        self.depth = 0
        self.parent: Optional[int] = None

    @property
    def priority(self) -> float:
        return self.cost + self.heuristic

    def set_parent(self, parent: "SearchNode") -> int:
        """Link to ``parent`` and return the resulting search depth."""
        self.parent = parent.index
        self.depth = parent.depth + 1
        return self.depth

    def __repr__(self) -> str:
        return (
            f"SearchNode(x={self.x}, y={self.y}, cost={self.cost}, "
            f"heuristic={self.heuristic}, depth={self.depth}, parent={self.parent})"
        )


class NodeGrid:
    """Arena of ``width * height`` nodes addressed by ``y * width + x``.

    Allocated once and reused by every search on the owning pathfinder.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("grid dimensions must be positive")
        self.width = width
        self.height = height
        self._nodes: List[SearchNode] = [
            SearchNode(x, y, y * width + x)
            for y in range(height)
            for x in range(width)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index_of(self, x: int, y: int) -> int:
        return y * self.width + x

    def node(self, x: int, y: int) -> SearchNode:
        return self._nodes[self.index_of(x, y)]

    def __getitem__(self, index: int) -> SearchNode:
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[SearchNode]:
        return iter(self._nodes)


__all__ = ["SearchNode", "NodeGrid"]
