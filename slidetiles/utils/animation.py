"""Animation hints computed from the per-cell origins recorded during a move."""

from numpy import int64, ndarray, zeros

from slidetiles.core.models import Grid


def origin_offsets(grid: Grid, tile_size: int = 125) -> ndarray:
    """
    Compute the pixel offset each tile should animate from.

    Parameters
    ----------
    grid : Grid
        The game grid after a move.
    tile_size : int, optional
        Size of a rendered tile in pixels (default is 125).

    Returns
    -------
    ndarray
        Array of shape (rows, cols, 2) holding ``(from_x, from_y)`` for each cell: the offset of the
        cell's origin relative to the cell itself. Cells without an origin get ``(0, 0)``.
    """
    offsets = zeros((grid.rows, grid.cols, 2), dtype=int64)
    for (row, col), cell in grid.cells():
        if cell.origin is None:
            continue
        origin_row, origin_col = cell.origin
        offsets[row, col] = ((origin_col - col) * tile_size, (origin_row - row) * tile_size)
    return offsets
