from pathlib import Path

import pytest
import yaml

from tile_pathfinder.config import CONFIG, LoggingConfig, PathfindingConfig, load_config
from tile_pathfinder.core.tile_map import GridMap
from tile_pathfinder.pathfinding.astar import DIAGONAL_PENALTY, build_pathfinder
from tile_pathfinder.pathfinding.heuristics import ManhattanHeuristic


def test_config_module_loads_config():
    assert isinstance(CONFIG.pathfinding, PathfindingConfig)
    assert isinstance(CONFIG.logging, LoggingConfig)
    assert CONFIG.pathfinding.max_search_distance == 500
    assert CONFIG.pathfinding.heuristic == "closest"


def test_config_file_keys():
    root = Path(__file__).resolve().parents[2]
    data = yaml.safe_load((root / "config.yaml").read_text())
    assert data["pathfinding"]["allow_diagonal_movement"] is True
    assert data["logging"]["global_level"] == "INFO"


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "nope.yaml")
    assert cfg.pathfinding == PathfindingConfig()
    assert cfg.logging.module_levels == {}


def test_partial_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("pathfinding:\n  max_search_distance: 7\n  heuristic: manhattan\nlogging:\n  global_level: debug\n")
    cfg = load_config(path)
    assert cfg.pathfinding.max_search_distance == 7
    assert cfg.pathfinding.allow_diagonal_movement is True
    assert cfg.logging.global_level == "DEBUG"

    finder = build_pathfinder(GridMap(3, 3), cfg.pathfinding)
    assert finder.max_search_distance == 7
    assert isinstance(finder.heuristic, ManhattanHeuristic)


def test_build_pathfinder_uses_global_config():
    finder = build_pathfinder(GridMap(2, 2))
    assert finder.max_search_distance == CONFIG.pathfinding.max_search_distance
    assert finder.allow_diagonal_movement == CONFIG.pathfinding.allow_diagonal_movement


def test_build_pathfinder_applies_diagonal_penalty(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("pathfinding:\n  allow_diagonal_movement: true\n  use_diagonal_penalty: true\n")
    finder = build_pathfinder(GridMap(3, 3), load_config(path).pathfinding)
    assert finder.use_diagonal_penalty is True

    penalised = finder.find_path(None, 0, 0, 2, 2)
    assert penalised.total_cost == pytest.approx(2 * (1 + DIAGONAL_PENALTY))
    plain = finder.find_path(None, 0, 0, 2, 2, use_diagonal_penalty=False)
    assert plain.total_cost == pytest.approx(2.0)


def test_config_has_no_unused_sections(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("paths:\n  maps: maps\n")
    cfg = load_config(path)
    assert not hasattr(cfg, "paths")
