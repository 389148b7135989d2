"""Command line entry point: load a map, run one search, report the result."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import CONFIG, load_config
from .core.tile_map import Coord
from .pathfinding.astar import AStarPathFinder
from .pathfinding.errors import PathfindingError
from .pathfinding.heuristics import get_heuristic
from .persistence.map_loader import MapFormatError, load_map
from .utils.terminal_view import print_search


logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NO_PATH = 1
EXIT_BAD_INPUT = 2


def configure_logging(cfg=None) -> None:
    """Apply root and per-module log levels from the ``logging`` config section."""

    cfg = cfg if cfg is not None else CONFIG.logging
    numeric_level = getattr(logging, cfg.global_level, logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    for module_name, level_str in (cfg.module_levels or {}).items():
        module_numeric_level = getattr(logging, str(level_str).upper(), None)
        if isinstance(module_numeric_level, int):
            logging.getLogger(module_name).setLevel(module_numeric_level)
        else:
            logger.warning("Invalid log level '%s' for module '%s' in config.", level_str, module_name)


def _parse_coord(text: str) -> Coord:
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y, got {text!r}") from None
    return x, y


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tile_pathfinder",
        description="Find a path across a tile map file.",
    )
    parser.add_argument("map", type=Path, help="Map file (.yaml document or bare ASCII grid)")
    parser.add_argument("--start", type=_parse_coord, help="Start tile as X,Y (overrides the map's S)")
    parser.add_argument("--target", type=_parse_coord, help="Target tile as X,Y (overrides the map's T)")
    parser.add_argument("--mover", default=None, help="Mover kind used for map rules")
    parser.add_argument("--max-distance", type=int, default=None, help="Search depth budget")
    parser.add_argument("--heuristic", default=None, help="closest, closest_squared or manhattan")
    parser.add_argument("--no-diagonal", action="store_true", help="Only move orthogonally")
    parser.add_argument("--no-diagonal-penalty", action="store_true", help="Charge diagonal steps like orthogonal ones")
    parser.add_argument("--show", action="store_true", help="Print the map with the path and visited tiles")
    parser.add_argument("--config", type=Path, default=None, help="Alternative config.yaml")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config) if args.config else CONFIG
    configure_logging(cfg.logging)
    pf_cfg = cfg.pathfinding

    try:
        doc = load_map(args.map)
    except (OSError, MapFormatError) as exc:
        logger.error("Could not load map %s: %s", args.map, exc)
        return EXIT_BAD_INPUT

    start = args.start or doc.start
    target = args.target or doc.target
    if start is None or target is None:
        logger.error("Map %s needs a start and a target (S/T tiles or --start/--target).", args.map)
        return EXIT_BAD_INPUT

    try:
        heuristic = get_heuristic(args.heuristic or pf_cfg.heuristic)
    except ValueError as exc:
        logger.error("%s", exc)
        return EXIT_BAD_INPUT

    finder = AStarPathFinder(
        doc.tile_map,
        max_search_distance=args.max_distance if args.max_distance is not None else pf_cfg.max_search_distance,
        allow_diagonal_movement=pf_cfg.allow_diagonal_movement and not args.no_diagonal,
        heuristic=heuristic,
    )
    use_penalty = pf_cfg.use_diagonal_penalty and not args.no_diagonal_penalty

    try:
        path = finder.find_path(args.mover, start[0], start[1], target[0], target[1], use_penalty)
    except PathfindingError as exc:
        logger.error("Search failed: %s", exc)
        return EXIT_BAD_INPUT

    if path is None:
        print(f"no path from {start} to {target}")
    else:
        for step in path:
            print(f"{step.x},{step.y}\t{step.cost:.3f}")
        print(f"{len(path)} steps, total cost {path.total_cost:.3f}")
    if args.show:
        print_search(doc.tile_map, path)

    return EXIT_FOUND if path is not None else EXIT_NO_PATH


if __name__ == "__main__":
    sys.exit(main())
