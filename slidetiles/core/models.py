"""
Data model of the sliding-tile game: directions, per-cell annotations, cells and the grid.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator, Optional

from numpy import array, full, int8, int64, ndarray, zeros

from slidetiles.config import ConfigurationError

# ##>: Marker stored in the origin array when a cell has no origin this move.
NO_ORIGIN = -1


class Direction(Enum):
    """
    Direction of a move, valued by its unit delta (row_delta, col_delta).
    """

    LEFT = (0, -1)
    RIGHT = (0, 1)
    UP = (-1, 0)
    DOWN = (1, 0)

    @property
    def delta(self) -> tuple[int, int]:
        """Unit step (row_delta, col_delta) of the direction."""
        return self.value

    @classmethod
    def from_name(cls, name: str) -> 'Direction':
        """
        Translate a direction name such as ``"left"`` into a direction.

        Parameters
        ----------
        name : str
            Case-insensitive direction name.

        Returns
        -------
        Direction
            The matching direction.

        Raises
        ------
        ValueError
            If the name is not one of left, right, up or down.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f'Unknown direction: {name!r}') from None


class Annotation(IntEnum):
    """
    Why a cell looks the way it does after the current move. Used for animation only.
    """

    NONE = 0
    NEW = 1
    MERGED = 2
    MOVED = 3


@dataclass(frozen=True, eq=False)
class Cell:
    """
    Read-only view of one grid square.

    Two cells are equal when their values are equal; annotation and origin are ignored.
    """

    value: int
    annotation: Annotation = Annotation.NONE
    origin: Optional[tuple[int, int]] = None

    @property
    def is_empty(self) -> bool:
        return self.value == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)


def _is_valid_value(values: ndarray) -> ndarray:
    """Element-wise check that values are 0 or a power of two from 2 upward."""
    return (values == 0) | ((values >= 2) & ((values & (values - 1)) == 0))


class Grid:
    """
    Fixed-size rectangular board of cells.

    The grid keeps its cells in three numpy arrays: tile values, annotation codes and origin
    coordinates. The engine mutates these arrays in place during a move.

    Parameters
    ----------
    rows : int
        Number of rows, must be positive.
    cols : int
        Number of columns, must be positive.

    Raises
    ------
    ConfigurationError
        If a dimension is not positive.
    """

    def __init__(self, rows: int = 4, cols: int = 4):
        if rows <= 0 or cols <= 0:
            raise ConfigurationError(f'Grid dimensions must be positive, got {rows}x{cols}')

        self.values: ndarray = zeros((rows, cols), dtype=int64)
        self.annotations: ndarray = zeros((rows, cols), dtype=int8)
        self.origins: ndarray = full((rows, cols, 2), NO_ORIGIN, dtype=int64)

    @classmethod
    def from_values(cls, values) -> 'Grid':
        """
        Build a grid holding the given tile values, with no annotations.

        Parameters
        ----------
        values : array_like
            Two-dimensional nested sequence or array of tile values.

        Returns
        -------
        Grid
            A new grid with the same shape as ``values``.

        Raises
        ------
        ValueError
            If the input is not two-dimensional, or holds a value that is neither 0 nor a power of two.
        """
        board = array(values, dtype=int64)
        if board.ndim != 2:
            raise ValueError(f'Grid values must be two-dimensional, got {board.ndim} dimension(s)')
        if not _is_valid_value(board).all():
            raise ValueError('Grid values must be 0 or a power of two')

        grid = cls(*board.shape)
        grid.values[...] = board
        return grid

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    @property
    def rows(self) -> int:
        return self.values.shape[0]

    @property
    def cols(self) -> int:
        return self.values.shape[1]

    def contains(self, row: int, col: int) -> bool:
        """
        Check whether a coordinate lies inside the grid.

        Negative coordinates are out of bounds; they are never wrapped around.
        """
        return 0 <= row < self.rows and 0 <= col < self.cols

    def origin(self, row: int, col: int) -> Optional[tuple[int, int]]:
        """Origin of the cell content for the current move, if any."""
        origin_row, origin_col = self.origins[row, col]
        if origin_row == NO_ORIGIN:
            return None
        return int(origin_row), int(origin_col)

    def __getitem__(self, index: tuple[int, int]) -> Cell:
        row, col = index
        if not self.contains(row, col):
            raise IndexError(f'Cell {index} is outside a {self.rows}x{self.cols} grid')
        return Cell(
            value=int(self.values[row, col]),
            annotation=Annotation(int(self.annotations[row, col])),
            origin=self.origin(row, col),
        )

    def cells(self) -> Iterator[tuple[tuple[int, int], Cell]]:
        """Iterate over ``((row, col), cell)`` pairs in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col), self[row, col]

    def clear_annotations(self) -> None:
        """Reset every annotation and origin to their empty state."""
        self.annotations.fill(Annotation.NONE)
        self.origins.fill(NO_ORIGIN)

    def copy(self) -> 'Grid':
        """Independent copy of the grid, annotations included."""
        clone = Grid(self.rows, self.cols)
        clone.values[...] = self.values
        clone.annotations[...] = self.annotations
        clone.origins[...] = self.origins
        return clone

    def __repr__(self) -> str:
        return f'Grid({self.values.tolist()!r})'
