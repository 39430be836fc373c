# -*- coding: utf-8 -*-
"""
Rule engine of a sliding-tile merging puzzle played on a fixed-size grid.
"""

from .config import ConfigurationError, GridConfig
from .core import Annotation, Cell, Direction, Grid, apply_move, new_game, spawn_tile
from .envs import SlidingTileGame

__all__ = [
    "ConfigurationError",
    "GridConfig",
    "Annotation",
    "Cell",
    "Direction",
    "Grid",
    "apply_move",
    "new_game",
    "spawn_tile",
    "SlidingTileGame",
]
