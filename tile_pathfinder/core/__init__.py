"""Host-facing map contract."""

from .tile_map import Coord, GridMap, MoverRule, TileBasedMap, mover_kind

__all__ = ["Coord", "GridMap", "MoverRule", "TileBasedMap", "mover_kind"]
