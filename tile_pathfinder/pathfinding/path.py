"""Step sequences returned by the pathfinder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, NamedTuple, Tuple


class Step(NamedTuple):
    """A single tile on a path with the cumulative cost to reach it."""

    x: int
    y: int
    cost: float


@dataclass(frozen=True)
class Path:
    """Immutable sequence of :class:`Step` records from start to target."""

    steps: Tuple[Step, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(Step(*step) for step in self.steps))

    @classmethod
    def from_coords(cls, coords: Iterable[Tuple[int, int, float]]) -> "Path":
        """Build a path from ``(x, y, cost)`` triples."""
        return cls(tuple(Step(x, y, cost) for x, y, cost in coords))

    @property
    def length(self) -> int:
        return len(self.steps)

    @property
    def total_cost(self) -> float:
        """Cumulative cost recorded on the final step."""
        return self.steps[-1].cost if self.steps else 0.0

    def get_step(self, index: int) -> Step:
        return self.steps[index]

    def get_x(self, index: int) -> int:
        return self.steps[index].x

    def get_y(self, index: int) -> int:
        return self.steps[index].y

    def contains(self, x: int, y: int) -> bool:
        """Return ``True`` if the path passes through ``(x, y)``."""
        return any(step.x == x and step.y == y for step in self.steps)

    def coords(self) -> List[Tuple[int, int]]:
        return [(step.x, step.y) for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]


__all__ = ["Step", "Path"]
