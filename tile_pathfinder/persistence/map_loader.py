"""Load tile maps from ASCII art or YAML documents.

ASCII legend: ``.`` open, ``#`` blocked, ``1``-``9`` open with that entry
cost, ``S`` start, ``T`` target. Row 0 is the first line.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..core.tile_map import Coord, GridMap, MoverRule


class MapFormatError(ValueError):
    """Raised when a map document cannot be parsed."""


@dataclass
class MapDocument:
    """A parsed map with optional start and target markers."""

    tile_map: GridMap
    start: Optional[Coord] = None
    target: Optional[Coord] = None


def parse_ascii_map(text: str, mover_rules: Dict[str, MoverRule] | None = None) -> MapDocument:
    """Parse an ASCII block into a :class:`MapDocument`."""

    rows = [line.rstrip() for line in text.splitlines()]
    # Only blank lines around the grid are dropped; an empty row inside it
    # fails the width check below.
    while rows and not rows[0]:
        rows.pop(0)
    while rows and not rows[-1]:
        rows.pop()
    if not rows:
        raise MapFormatError("map has no rows")
    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise MapFormatError(
                f"row {i} has width {len(row)}, expected {width}"
            )

    tile_map = GridMap(width, len(rows), mover_rules=mover_rules)
    start: Optional[Coord] = None
    target: Optional[Coord] = None
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == "#":
                tile_map.set_blocked(x, y)
            elif ch in "123456789":
                tile_map.set_cost(x, y, int(ch))
            elif ch == "S":
                start = (x, y)
            elif ch == "T":
                target = (x, y)
            elif ch != ".":
                raise MapFormatError(f"unknown tile {ch!r} at ({x}, {y})")
    return MapDocument(tile_map=tile_map, start=start, target=target)


def _coord(value: Any, key: str) -> Optional[Coord]:
    if value is None:
        return None
    try:
        x, y = value
        return int(x), int(y)
    except (TypeError, ValueError):
        raise MapFormatError(f"{key} must be a pair of integers, got {value!r}") from None


def _mover_rules(data: Any) -> Dict[str, MoverRule]:
    if not data:
        return {}
    if not isinstance(data, dict):
        raise MapFormatError("movers must be a mapping of kind -> rule")
    rules: Dict[str, MoverRule] = {}
    for kind, cfg in data.items():
        cfg = cfg or {}
        if not isinstance(cfg, dict):
            raise MapFormatError(f"rule for mover {kind!r} must be a mapping, got {cfg!r}")
        passes_blocked = cfg.get("passes_blocked", False)
        if not isinstance(passes_blocked, bool):
            raise MapFormatError(f"passes_blocked for mover {kind!r} must be true or false")
        try:
            cost_scale = float(cfg.get("cost_scale", 1.0))
        except (TypeError, ValueError):
            raise MapFormatError(
                f"cost_scale for mover {kind!r} must be a number, got {cfg.get('cost_scale')!r}"
            ) from None
        if cost_scale < 0:
            raise MapFormatError(f"cost_scale for mover {kind!r} must be non-negative")
        rules[str(kind)] = MoverRule(passes_blocked=passes_blocked, cost_scale=cost_scale)
    return rules


def map_from_dict(data: Dict[str, Any]) -> MapDocument:
    """Build a :class:`MapDocument` from a decoded YAML mapping."""

    if not isinstance(data, dict) or "tiles" not in data:
        raise MapFormatError("map document needs a 'tiles' block")
    doc = parse_ascii_map(str(data["tiles"]), _mover_rules(data.get("movers")))
    start = _coord(data.get("start"), "start")
    target = _coord(data.get("target"), "target")
    if start is not None:
        doc.start = start
    if target is not None:
        doc.target = target
    return doc


def load_map(path: str | Path) -> MapDocument:
    """Read a map from ``path``.

    ``.yaml``/``.yml`` files are parsed as documents; anything else is read
    as a bare ASCII block.
    """

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MapFormatError(f"{path} is not valid UTF-8: {exc}") from exc
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise MapFormatError(f"invalid YAML in {path}: {exc}") from exc
        return map_from_dict(data)
    return parse_ascii_map(text)


__all__ = ["MapDocument", "MapFormatError", "parse_ascii_map", "map_from_dict", "load_map"]
