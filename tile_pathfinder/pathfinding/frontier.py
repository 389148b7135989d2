"""Open and closed sets for the A* driver."""

from __future__ import annotations

import itertools
from heapq import heappop, heappush
from typing import Dict, List, Optional, Set

from .nodes import SearchNode


class Frontier:
    """Priority queue of nodes ordered by ``cost + heuristic``.

    Equal priorities come out in insertion order. Removal is lazy: the heap
    entry is marked dead and skipped when it reaches the top.
    """

    _REMOVED = -1

    def __init__(self) -> None:
        self._heap: List[list] = []
        self._entries: Dict[int, list] = {}
        self._counter = itertools.count()

    def clear(self) -> None:
        self._heap.clear()
        self._entries.clear()
        self._counter = itertools.count()

    def push(self, node: SearchNode) -> None:
        """Insert ``node`` using its current priority."""
        if node.index in self._entries:
            self.remove(node)
        entry = [node.priority, next(self._counter), node.index, node]
        self._entries[node.index] = entry
        heappush(self._heap, entry)

    def remove(self, node: SearchNode) -> None:
        entry = self._entries.pop(node.index, None)
        if entry is not None:
            entry[2] = self._REMOVED

    def _prune(self) -> None:
        while self._heap and self._heap[0][2] == self._REMOVED:
            heappop(self._heap)

    def peek(self) -> Optional[SearchNode]:
        """Return the cheapest node without removing it."""
        self._prune()
        return self._heap[0][3] if self._heap else None

    def pop(self) -> SearchNode:
        """Remove and return the cheapest node."""
        self._prune()
        if not self._heap:
            raise KeyError("pop from an empty frontier")
        entry = heappop(self._heap)
        del self._entries[entry[2]]
        return entry[3]

    def __contains__(self, node: SearchNode) -> bool:
        return node.index in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


class VisitedSet:
    """Nodes already expanded during the current search."""

    def __init__(self) -> None:
        self._indices: Set[int] = set()

    def clear(self) -> None:
        self._indices.clear()

    def add(self, node: SearchNode) -> None:
        self._indices.add(node.index)

    def discard(self, node: SearchNode) -> None:
        self._indices.discard(node.index)

    def __contains__(self, node: SearchNode) -> bool:
        return node.index in self._indices

    def __len__(self) -> int:
        return len(self._indices)


__all__ = ["Frontier", "VisitedSet"]
