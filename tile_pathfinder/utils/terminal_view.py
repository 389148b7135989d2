"""ASCII overlay of a search result for terminal diagnostics."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from ..core.tile_map import GridMap
from ..pathfinding.path import Path


# Basic ANSI colour codes used by :func:`render_search`
_COLOURS = {
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "white": "\x1b[37m",
    "reset": "\x1b[0m",
}

# glyph, colour
_GLYPHS = {
    "blocked": ("#", "white"),
    "open": (".", "reset"),
    "visited": (":", "blue"),
    "path": ("*", "yellow"),
    "start": ("S", "green"),
    "target": ("T", "red"),
}


def _cell_kind(tile_map: GridMap, path_cells: set, path: Optional[Path], x: int, y: int) -> str:
    if path is not None and path.length:
        if (x, y) == (path[0].x, path[0].y):
            return "start"
        if (x, y) == (path[-1].x, path[-1].y):
            return "target"
    if (x, y) in path_cells:
        return "path"
    if tile_map.is_blocked(x, y):
        return "blocked"
    if tile_map.visited.get((x, y)):
        return "visited"
    return "open"


def render_search(tile_map: GridMap, path: Optional[Path] = None, *, colour: bool = False) -> str:
    """Return ``tile_map`` as text with ``path`` and visited tiles marked."""

    path_cells = set(path.coords()) if path is not None else set()
    lines: list[str] = []
    for y in range(tile_map.height):
        row: list[str] = []
        for x in range(tile_map.width):
            glyph, tint = _GLYPHS[_cell_kind(tile_map, path_cells, path, x, y)]
            if colour:
                row.append(f"{_COLOURS[tint]}{glyph}")
            else:
                row.append(glyph)
        if colour:
            row.append(_COLOURS["reset"])
        lines.append("".join(row))
    return "\n".join(lines)


def print_search(
    tile_map: GridMap, path: Optional[Path] = None, stream: TextIO | None = None
) -> None:
    """Write :func:`render_search` output to ``stream`` (``stdout`` by default)."""

    out = stream if stream is not None else sys.stdout
    out.write(render_search(tile_map, path, colour=out.isatty()) + "\n")
    out.flush()


__all__ = ["render_search", "print_search"]
