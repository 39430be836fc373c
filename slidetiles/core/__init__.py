# -*- coding: utf-8 -*-
"""
This module provides the grid engine of the sliding-tile game.

It includes the grid data model, the directional slide and merge transform, tile spawning with an
injected random source, new-game creation and checks for legal directions and finished games.
"""

from .gameboard import (
    TWO_PROBABILITY,
    apply_move,
    new_game,
    slide_and_merge,
    spawn_tile,
    traversal_order,
)
from .gamemove import can_move, illegal_directions, is_done, legal_directions
from .models import Annotation, Cell, Direction, Grid
from .random_source import GeneratorSource, RandomSource, ScriptedSource

__all__ = [
    "Annotation",
    "Cell",
    "Direction",
    "Grid",
    "RandomSource",
    "GeneratorSource",
    "ScriptedSource",
    "TWO_PROBABILITY",
    "apply_move",
    "new_game",
    "slide_and_merge",
    "spawn_tile",
    "traversal_order",
    "can_move",
    "legal_directions",
    "illegal_directions",
    "is_done",
]
