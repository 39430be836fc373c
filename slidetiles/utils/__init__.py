# -*- coding: utf-8 -*-
"""
This module provides presentation helpers computed from the game grid.
"""

from .animation import origin_offsets

__all__ = ["origin_offsets"]
