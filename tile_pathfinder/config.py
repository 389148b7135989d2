"""Simple configuration loader for tile_pathfinder."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"


@dataclass
class PathfindingConfig:
    """Configuration values for the pathfinding section."""

    max_search_distance: int = 500
    allow_diagonal_movement: bool = True
    use_diagonal_penalty: bool = True
    heuristic: str = "closest"


@dataclass
class LoggingConfig:
    """Root and per-module log levels."""

    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Top level configuration dataclass."""

    pathfinding: PathfindingConfig
    logging: LoggingConfig


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""

    pf_data = data.get("pathfinding") or {}
    pathfinding = PathfindingConfig(
        max_search_distance=int(pf_data.get("max_search_distance", 500)),
        allow_diagonal_movement=bool(pf_data.get("allow_diagonal_movement", True)),
        use_diagonal_penalty=bool(pf_data.get("use_diagonal_penalty", True)),
        heuristic=str(pf_data.get("heuristic", "closest")),
    )

    log_data = data.get("logging") or {}
    logging_cfg = LoggingConfig(
        global_level=str(log_data.get("global_level", "INFO")).upper(),
        module_levels=dict(log_data.get("module_levels") or {}),
    )

    return Config(pathfinding=pathfinding, logging=logging_cfg)


def load_config(path: Path = CONFIG_PATH) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`."""

    path = Path(path)
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
    else:
        raw = {}
    return _parse_config(raw)


# Load configuration at module import time.
CONFIG = load_config()


__all__ = [
    "CONFIG",
    "Config",
    "PathfindingConfig",
    "LoggingConfig",
    "load_config",
]
