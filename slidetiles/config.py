"""
Configuration for the sliding-tile engine.

The grid dimensions and spawn settings are validated once, when the configuration is built, so that
moves never have to re-check them.
"""

from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised when the engine is configured with invalid dimensions or settings."""


@dataclass(frozen=True)
class GridConfig:
    """
    Configuration of a game grid.

    Attributes
    ----------
    rows : int
        Number of rows of the grid.
    cols : int
        Number of columns of the grid.
    start_tiles : int
        Number of tiles spawned on a fresh grid.
    two_probability : float
        Probability that a spawned tile is a 2 (otherwise a 4).
    tile_size : int
        Size of a rendered tile in pixels, used for animation offsets.
    """

    # ##>: Board dimensions.
    rows: int = 4
    cols: int = 4

    # ##>: Spawn parameters.
    start_tiles: int = 2
    two_probability: float = 0.9

    # ##>: Presentation hint.
    tile_size: int = 125

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(f'Grid dimensions must be positive, got {self.rows}x{self.cols}')
        if not 0 <= self.start_tiles <= self.rows * self.cols:
            raise ConfigurationError(
                f'start_tiles must be between 0 and {self.rows * self.cols}, got {self.start_tiles}'
            )
        if not 0.0 <= self.two_probability <= 1.0:
            raise ConfigurationError(f'two_probability must be in [0, 1], got {self.two_probability}')
        if self.tile_size <= 0:
            raise ConfigurationError(f'tile_size must be positive, got {self.tile_size}')

    @property
    def shape(self) -> tuple[int, int]:
        """Shape of the grid as (rows, cols)."""
        return self.rows, self.cols
