# -*- coding: utf-8 -*-
"""
Python implementation of a sliding-tile game session.

This module provides the `SlidingTileGame` class, which owns a grid and its random source and plays
moves on it.
"""

from .game import SlidingTileGame

__all__ = ["SlidingTileGame"]
