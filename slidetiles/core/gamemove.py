"""
Game move utilities, providing functions for determining legal and illegal directions and the end of
a game.

These are dry runs: every check is made on a copy, so the grid passed in is never modified.
"""

from slidetiles.core.gameboard import slide_and_merge
from slidetiles.core.models import Direction, Grid


def can_move(grid: Grid, direction: Direction) -> bool:
    """
    Check if a move in the given direction would change the grid.

    Parameters
    ----------
    grid : Grid
        The game grid to check. Not modified.
    direction : Direction
        Direction to check.

    Returns
    -------
    bool
        True if at least one tile would slide or merge.
    """
    return slide_and_merge(grid.copy(), direction)


def legal_directions(grid: Grid) -> list[Direction]:
    """
    Determine the directions that change the grid.

    Parameters
    ----------
    grid : Grid
        The game grid to check.

    Returns
    -------
    list[Direction]
        Legal directions, in declaration order of ``Direction``.
    """
    return [direction for direction in Direction if can_move(grid, direction)]


def illegal_directions(grid: Grid) -> list[Direction]:
    """
    Determine the directions that leave the grid unchanged.

    Parameters
    ----------
    grid : Grid
        The game grid to check.

    Returns
    -------
    list[Direction]
        Illegal directions, in declaration order of ``Direction``.
    """
    return [direction for direction in Direction if not can_move(grid, direction)]


def is_done(grid: Grid) -> bool:
    """
    Check if the game has ended.

    The game is over when no direction changes the grid: the board is full and no two adjacent
    tiles are equal.
    """
    return not legal_directions(grid)
