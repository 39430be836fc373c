"""
Core of the sliding-tile game: directional slide and merge, tile spawning and new games.
"""

import logging
from typing import Optional

from numpy import argwhere, ndarray, zeros

from slidetiles.config import GridConfig
from slidetiles.core.models import NO_ORIGIN, Annotation, Direction, Grid
from slidetiles.core.random_source import RandomSource

# ##>: Probability that a spawned tile is a 2 (otherwise a 4).
TWO_PROBABILITY: float = 0.9

# ##>: Module logger.
_logger = logging.getLogger(__name__)


def traversal_order(delta: int, size: int) -> range:
    """
    Order in which the indices of one axis are visited during a move.

    Parameters
    ----------
    delta : int
        Component of the move direction along this axis.
    size : int
        Number of indices along this axis.

    Returns
    -------
    range
        High-to-low when the move goes toward higher indices, low-to-high otherwise.

    Notes
    -----
    Tiles are processed starting from the edge the grid collapses toward, so that a tile already
    pushed to the edge is never read again as if it could still move.
    """
    if delta == 1:
        return range(size - 1, -1, -1)
    return range(size)


def _set_origin(grid: Grid, row: int, col: int, origin: tuple[int, int]) -> None:
    """Record where a cell's content started this move, unless already recorded."""
    if grid.origins[row, col, 0] == NO_ORIGIN:
        grid.origins[row, col] = origin


def _clear_cell(grid: Grid, row: int, col: int) -> None:
    grid.values[row, col] = 0
    grid.annotations[row, col] = Annotation.NONE
    grid.origins[row, col] = NO_ORIGIN


def slide_tile(grid: Grid, row: int, col: int, direction: Direction) -> tuple[int, int, bool]:
    """
    Slide the tile at (row, col) through empty cells until it is blocked.

    Parameters
    ----------
    grid : Grid
        The grid, **modified in-place.**
    row, col : int
        Position of a nonempty cell.
    direction : Direction
        Direction of the move.

    Returns
    -------
    tuple[int, int, bool]
        Final position of the tile and whether it moved at all.
    """
    row_delta, col_delta = direction.delta
    moved = False

    while grid.contains(row + row_delta, col + col_delta):
        next_row, next_col = row + row_delta, col + col_delta
        if grid.values[next_row, next_col] != 0:
            break

        # ##: Carry the content, its origin included, into the empty neighbour.
        grid.values[next_row, next_col] = grid.values[row, col]
        grid.origins[next_row, next_col] = grid.origins[row, col]
        grid.annotations[next_row, next_col] = Annotation.MOVED
        _set_origin(grid, next_row, next_col, (row, col))
        _clear_cell(grid, row, col)

        row, col = next_row, next_col
        moved = True

    return row, col, moved


def merge_tile(grid: Grid, merged: ndarray, row: int, col: int, direction: Direction) -> bool:
    """
    Merge the tile at (row, col) into its neighbour in the move direction, if allowed.

    Parameters
    ----------
    grid : Grid
        The grid, **modified in-place.**
    merged : ndarray
        Boolean array flagging cells that already absorbed a merge this move, **modified in-place.**
    row, col : int
        Position of the tile after sliding.
    direction : Direction
        Direction of the move.

    Returns
    -------
    bool
        True if a merge happened.

    Notes
    -----
    A destination cell absorbs at most one merge per move: three equal tiles in a row produce one
    doubled tile and one untouched tile.
    """
    row_delta, col_delta = direction.delta
    next_row, next_col = row + row_delta, col + col_delta

    if not grid.contains(next_row, next_col):
        return False
    if grid.values[next_row, next_col] != grid.values[row, col] or merged[next_row, next_col]:
        return False

    grid.values[next_row, next_col] *= 2
    grid.annotations[next_row, next_col] = Annotation.MERGED
    _set_origin(grid, next_row, next_col, (row, col))
    merged[next_row, next_col] = True
    _clear_cell(grid, row, col)
    return True


def slide_and_merge(grid: Grid, direction: Direction) -> bool:
    """
    Slide and merge every tile of the grid in a direction, without spawning a tile.

    Parameters
    ----------
    grid : Grid
        The grid, **modified in-place.** Its annotations are reset before processing.
    direction : Direction
        Direction of the move.

    Returns
    -------
    bool
        True if at least one tile moved or merged.

    Raises
    ------
    TypeError
        If ``direction`` is not a ``Direction``.
    """
    if not isinstance(direction, Direction):
        raise TypeError(f'Expected a Direction, got {type(direction).__name__}')

    # ##: Stale animation data from the previous move never leaks into this one.
    grid.clear_annotations()

    row_delta, col_delta = direction.delta
    merged = zeros(grid.shape, dtype=bool)
    changed = False

    for row in traversal_order(row_delta, grid.rows):
        for col in traversal_order(col_delta, grid.cols):
            if grid.values[row, col] == 0:
                continue

            current_row, current_col, moved = slide_tile(grid, row, col, direction)
            if merge_tile(grid, merged, current_row, current_col, direction):
                moved = True
            changed = changed or moved

    return changed


def spawn_tile(
    grid: Grid, rng: RandomSource, two_probability: float = TWO_PROBABILITY
) -> Optional[tuple[int, int]]:
    """
    Place a new tile (2 or 4) in a uniformly chosen empty cell.

    Parameters
    ----------
    grid : Grid
        The grid, **modified in-place.**
    rng : RandomSource
        Source of the cell pick and of the value draw.
    two_probability : float, optional
        Probability that the new tile is a 2 (default is 0.9).

    Returns
    -------
    tuple[int, int] or None
        Coordinate of the new tile, or None when the board is full.

    Notes
    -----
    - Empty cells are enumerated in row-major order before the pick.
    - A full board is a legitimate game state, not an error: nothing is written.
    """
    empty_cells = argwhere(grid.values == 0)
    if len(empty_cells) == 0:
        _logger.debug('Board is full, no tile spawned')
        return None

    row, col = (int(index) for index in empty_cells[rng.pick(len(empty_cells))])
    value = 2 if rng.uniform() < two_probability else 4

    grid.values[row, col] = value
    grid.annotations[row, col] = Annotation.NEW
    _logger.debug('Spawned a %d at (%d, %d)', value, row, col)
    return row, col


def apply_move(
    grid: Grid, direction: Direction, rng: RandomSource, two_probability: float = TWO_PROBABILITY
) -> bool:
    """
    Apply a move to the grid, then spawn one tile if the grid changed.

    Parameters
    ----------
    grid : Grid
        The grid, **modified in-place.**
    direction : Direction
        Direction of the move.
    rng : RandomSource
        Source used for the spawn. Never consulted when the move changes nothing.
    two_probability : float, optional
        Probability that the spawned tile is a 2 (default is 0.9).

    Returns
    -------
    bool
        True if at least one tile moved or merged.

    Notes
    -----
    When nothing moves, the values are left exactly as received; only the annotations are cleared.
    """
    changed = slide_and_merge(grid, direction)

    if changed:
        spawn_tile(grid, rng, two_probability=two_probability)
    else:
        _logger.debug('Move %s left the grid unchanged', direction.name)

    return changed


def new_game(rng: RandomSource, config: Optional[GridConfig] = None) -> Grid:
    """
    Create a fresh grid with its starting tiles.

    Parameters
    ----------
    rng : RandomSource
        Source used for the starting spawns.
    config : GridConfig, optional
        Grid configuration (default is a 4x4 grid with two starting tiles).

    Returns
    -------
    Grid
        The new grid. Each starting spawn sees the previous one, so they never share a cell.
    """
    config = config or GridConfig()
    grid = Grid(config.rows, config.cols)
    for _ in range(config.start_tiles):
        spawn_tile(grid, rng, two_probability=config.two_probability)
    return grid
