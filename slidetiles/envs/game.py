"""Game session wrapping the grid engine for an interactive caller."""

import logging
from typing import Optional, Union

from numpy import ndarray

from slidetiles.config import GridConfig
from slidetiles.core.gameboard import apply_move, new_game
from slidetiles.core.gamemove import is_done
from slidetiles.core.models import Direction, Grid
from slidetiles.core.random_source import GeneratorSource, RandomSource
from slidetiles.utils.animation import origin_offsets

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class SlidingTileGame:
    """
    Sliding-tile game session.

    This class owns the grid and the random source of one game, and translates caller commands into
    engine moves.
    """

    def __init__(
        self, config: Optional[GridConfig] = None, seed: Optional[int] = None, rng: Optional[RandomSource] = None
    ):
        """
        Initialize the game and its first grid.

        Parameters
        ----------
        config : GridConfig, optional
            Grid configuration (default is a 4x4 grid).
        seed : int, optional
            Seed of the default random source.
        rng : RandomSource, optional
            Random source to use instead of a seeded numpy generator. Cannot be combined with ``seed``.

        Raises
        ------
        ValueError
            If both ``seed`` and ``rng`` are given.
        """
        if seed is not None and rng is not None:
            raise ValueError('Pass either a seed or a random source, not both')

        self.config = config or GridConfig()
        self._rng: RandomSource = rng if rng is not None else GeneratorSource(seed)
        self.moves = 0

        self.reset()

    @property
    def grid(self) -> Grid:
        """Current grid, annotations included."""
        return self._grid

    @property
    def observation(self) -> ndarray:
        """Copy of the current tile values as a 2D numpy array."""
        return self._grid.values.copy()

    @property
    def offsets(self) -> ndarray:
        """Pixel offsets each tile animates from, sized by the configured tile size."""
        return origin_offsets(self._grid, tile_size=self.config.tile_size)

    @property
    def is_finished(self) -> bool:
        """True if no direction changes the grid anymore."""
        return is_done(self._grid)

    def reset(self, seed: Optional[int] = None) -> Grid:
        """
        Start a new game on an empty grid with its starting tiles.

        Parameters
        ----------
        seed : int, optional
            If given, reseed the game with a fresh numpy random source.

        Returns
        -------
        Grid
            The new grid.
        """
        if seed is not None:
            self._rng = GeneratorSource(seed)

        self._grid = new_game(self._rng, config=self.config)
        self.moves = 0
        _logger.debug('New %dx%d game started', self.config.rows, self.config.cols)
        return self._grid

    def step(self, direction: Union[Direction, str]) -> tuple[Grid, bool, bool]:
        """
        Apply a move to the grid.

        Parameters
        ----------
        direction : Direction or str
            Direction of the move, or its name (left, right, up, down).

        Returns
        -------
        tuple[Grid, bool, bool]
            A tuple containing:
            - The updated grid
            - Whether the move changed the grid
            - Whether the game is finished after this move

        Raises
        ------
        ValueError
            If a direction name is unknown.
        """
        if isinstance(direction, str):
            direction = Direction.from_name(direction)

        changed = apply_move(self._grid, direction, self._rng, two_probability=self.config.two_probability)
        if changed:
            self.moves += 1

        done = self.is_finished
        if done:
            _logger.info('Game finished after %d moves, max tile %d', self.moves, self._grid.values.max())
        return self._grid, changed, done

    def render(self) -> None:  # pragma: no cover
        """
        Print the current tile values to the console.
        """
        for row in self._grid.values.tolist():
            print(' \t'.join(map(str, row)))
