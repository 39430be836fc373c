"""
Tests for the grid engine: slide, merge, spawn and new games.
"""

from itertools import cycle
from unittest import TestCase, main

import numpy as np

from slidetiles.config import ConfigurationError, GridConfig
from slidetiles.core.gameboard import (
    TWO_PROBABILITY,
    apply_move,
    new_game,
    slide_and_merge,
    spawn_tile,
    traversal_order,
)
from slidetiles.core.models import Annotation, Direction, Grid
from slidetiles.core.random_source import GeneratorSource, ScriptedSource


def is_valid_board(values: np.ndarray) -> bool:
    """Every value is 0 or a power of two from 2 upward."""
    nonzero = values[values != 0]
    return bool(np.all((nonzero >= 2) & ((nonzero & (nonzero - 1)) == 0)))


class TestTraversalOrder(TestCase):
    """Rows and columns are visited starting from the edge the grid collapses toward."""

    def test_positive_delta_goes_high_to_low(self):
        self.assertEqual(list(traversal_order(1, 4)), [3, 2, 1, 0])

    def test_other_deltas_go_low_to_high(self):
        self.assertEqual(list(traversal_order(-1, 4)), [0, 1, 2, 3])
        self.assertEqual(list(traversal_order(0, 3)), [0, 1, 2])


class TestSlideAndMerge(TestCase):
    """Test the slide and merge pass, without spawning."""

    def assert_move(self, values, direction, expected):
        grid = Grid.from_values(values)
        changed = slide_and_merge(grid, direction)
        np.testing.assert_array_equal(grid.values, np.array(expected))
        return grid, changed

    def test_no_double_merge_left(self):
        """Three equal tiles produce one merge only."""
        _, changed = self.assert_move([[2, 2, 2, 0]], Direction.LEFT, [[4, 2, 0, 0]])
        self.assertTrue(changed)

    def test_no_double_merge_right(self):
        self.assert_move([[2, 2, 2, 0]], Direction.RIGHT, [[0, 0, 2, 4]])

    def test_two_pairs(self):
        self.assert_move([[2, 2, 2, 2]], Direction.LEFT, [[4, 4, 0, 0]])
        self.assert_move([[2, 2, 2, 2]], Direction.RIGHT, [[0, 0, 4, 4]])

    def test_merged_cell_does_not_absorb_again(self):
        """A cell doubled by a merge does not take a second merge in the same move."""
        self.assert_move([[4, 0, 4, 8]], Direction.LEFT, [[8, 8, 0, 0]])

    def test_vertical_moves(self):
        column = [[2], [2], [4], [4]]
        self.assert_move(column, Direction.UP, [[4], [8], [0], [0]])
        self.assert_move(column, Direction.DOWN, [[0], [0], [4], [8]])

    def test_full_board(self):
        board = [[2, 2, 4, 4], [0, 2, 2, 4], [2, 0, 0, 2], [2, 2, 2, 2]]
        expected = [[4, 8, 0, 0], [4, 4, 0, 0], [4, 0, 0, 0], [4, 4, 0, 0]]
        self.assert_move(board, Direction.LEFT, expected)

    def test_end_to_end_single_row(self):
        """[[0, 0, 2, 2]] collapsed left gives a single merged 4."""
        grid, changed = self.assert_move([[0, 0, 2, 2]], Direction.LEFT, [[4, 0, 0, 0]])
        self.assertTrue(changed)
        self.assertEqual(grid[0, 0].annotation, Annotation.MERGED)
        self.assertEqual(grid[0, 0].origin, (0, 2))

    def test_moved_annotation_and_origin(self):
        grid, _ = self.assert_move([[2, 0, 0, 4]], Direction.LEFT, [[2, 4, 0, 0]])

        # ##>: The blocked tile is untouched.
        self.assertEqual(grid[0, 0].annotation, Annotation.NONE)
        self.assertIsNone(grid[0, 0].origin)

        # ##>: The sliding tile remembers where it started.
        self.assertEqual(grid[0, 1].annotation, Annotation.MOVED)
        self.assertEqual(grid[0, 1].origin, (0, 3))

        # ##>: Vacated cells carry no annotation.
        self.assertEqual(grid[0, 3].annotation, Annotation.NONE)
        self.assertIsNone(grid[0, 3].origin)

    def test_origin_first_write_wins(self):
        """A tile that slides then absorbs a merge keeps its pre-slide origin."""
        grid, _ = self.assert_move([[0, 2, 0, 2]], Direction.LEFT, [[4, 0, 0, 0]])
        self.assertEqual(grid[0, 0].annotation, Annotation.MERGED)
        self.assertEqual(grid[0, 0].origin, (0, 1))

    def test_merge_origin_is_the_mover_position(self):
        """A tile merging into an untouched neighbour gives it the mover's post-slide position."""
        grid, _ = self.assert_move([[2, 0, 2]], Direction.LEFT, [[4, 0, 0]])
        self.assertEqual(grid[0, 0].annotation, Annotation.MERGED)
        self.assertEqual(grid[0, 0].origin, (0, 1))

    def test_merge_origin_vertical(self):
        grid, _ = self.assert_move([[2], [0], [2]], Direction.DOWN, [[0], [0], [4]])
        self.assertEqual(grid[2, 0].annotation, Annotation.MERGED)
        self.assertEqual(grid[2, 0].origin, (1, 0))

    def test_mass_conservation_without_merge(self):
        before = np.array([[2, 0, 4, 0], [0, 8, 0, 16]])
        grid, changed = self.assert_move(before, Direction.RIGHT, [[0, 0, 2, 4], [0, 0, 8, 16]])
        self.assertTrue(changed)
        self.assertEqual(sorted(before[before != 0]), sorted(grid.values[grid.values != 0]))

    def test_sum_conservation_with_one_merge(self):
        before = np.array([[2, 0, 2, 8], [0, 4, 0, 16]])
        grid, _ = self.assert_move(before, Direction.LEFT, [[4, 8, 0, 0], [4, 16, 0, 0]])
        self.assertEqual(before.sum(), grid.values.sum())
        self.assertEqual(np.count_nonzero(grid.annotations == Annotation.MERGED), 1)

    def test_packed_board_is_unchanged(self):
        grid, changed = self.assert_move([[2, 4, 0, 0], [8, 2, 0, 0]], Direction.LEFT, [[2, 4, 0, 0], [8, 2, 0, 0]])
        self.assertFalse(changed)

    def test_annotations_reset_before_move(self):
        grid = Grid.from_values([[2, 4], [8, 16]])
        grid.annotations[0, 0] = Annotation.NEW
        grid.origins[1, 1] = (0, 1)

        changed = slide_and_merge(grid, Direction.LEFT)

        self.assertFalse(changed)
        self.assertTrue(np.all(grid.annotations == Annotation.NONE))
        self.assertTrue(all(cell.origin is None for _, cell in grid.cells()))

    def test_rejects_non_direction(self):
        grid = Grid.from_values([[2, 0]])
        with self.assertRaises(TypeError):
            slide_and_merge(grid, "left")


class TestApplyMove(TestCase):
    """Test a complete move: slide, merge and conditional spawn."""

    def test_end_to_end_with_spawn(self):
        grid = Grid.from_values([[0, 0, 2, 2]])
        rng = ScriptedSource(picks=[2], draws=[0.5])

        changed = apply_move(grid, Direction.LEFT, rng)

        # ##>: Empty cells after the merge are (0, 1), (0, 2), (0, 3); pick 2 targets (0, 3).
        self.assertTrue(changed)
        np.testing.assert_array_equal(grid.values, np.array([[4, 0, 0, 2]]))
        self.assertEqual(grid[0, 0].annotation, Annotation.MERGED)
        self.assertEqual(grid[0, 3].annotation, Annotation.NEW)
        self.assertTrue(rng.exhausted)

    def test_no_op_does_not_spawn(self):
        """An unchanged grid never consults the random source."""
        values = np.array([[2, 4, 8, 16], [4, 8, 16, 32]])
        grid = Grid.from_values(values)
        rng = ScriptedSource()

        changed = apply_move(grid, Direction.LEFT, rng)

        self.assertFalse(changed)
        np.testing.assert_array_equal(grid.values, values)

    def test_value_invariant_over_a_game(self):
        rng = GeneratorSource(seed=7)
        grid = new_game(rng)
        directions = cycle([Direction.LEFT, Direction.DOWN, Direction.RIGHT, Direction.UP])

        for _ in range(300):
            apply_move(grid, next(directions), rng)
            self.assertTrue(is_valid_board(grid.values))

    def test_spawned_tile_follows_config_probability(self):
        grid = Grid.from_values([[2, 0]])
        apply_move(grid, Direction.RIGHT, ScriptedSource(picks=[0], draws=[0.5]), two_probability=0.25)
        np.testing.assert_array_equal(grid.values, np.array([[4, 2]]))


class TestSpawnTile(TestCase):
    """Test the random spawn step."""

    def test_spawn_targets_an_empty_cell(self):
        grid = Grid.from_values([[2, 0], [0, 4]])

        # ##>: Empty cells in row-major order are (0, 1) then (1, 0).
        position = spawn_tile(grid, ScriptedSource(picks=[1], draws=[0.95]))

        self.assertEqual(position, (1, 0))
        np.testing.assert_array_equal(grid.values, np.array([[2, 0], [4, 4]]))
        self.assertEqual(grid[1, 0].annotation, Annotation.NEW)

    def test_probability_split(self):
        for draw, expected in ((0.0, 2), (0.89, 2), (0.9, 4), (0.99, 4)):
            grid = Grid(2, 2)
            spawn_tile(grid, ScriptedSource(picks=[0], draws=[draw]))
            self.assertEqual(grid[0, 0].value, expected)

    def test_default_probability(self):
        """Draws below the default probability spawn a 2, draws at or above it spawn a 4."""
        below, at = Grid(1, 1), Grid(1, 1)
        spawn_tile(below, ScriptedSource(picks=[0], draws=[TWO_PROBABILITY - 0.01]))
        spawn_tile(at, ScriptedSource(picks=[0], draws=[TWO_PROBABILITY]))

        self.assertEqual(below[0, 0].value, 2)
        self.assertEqual(at[0, 0].value, 4)

    def test_full_board_is_a_no_op(self):
        values = np.array([[2, 4], [8, 16]])
        grid = Grid.from_values(values)

        position = spawn_tile(grid, ScriptedSource())

        self.assertIsNone(position)
        np.testing.assert_array_equal(grid.values, values)
        self.assertTrue(np.all(grid.annotations == Annotation.NONE))

    def test_seed_reproducibility(self):
        first, second = Grid(4, 4), Grid(4, 4)
        position_first = spawn_tile(first, GeneratorSource(seed=42))
        position_second = spawn_tile(second, GeneratorSource(seed=42))

        self.assertEqual(position_first, position_second)
        np.testing.assert_array_equal(first.values, second.values)

    def test_exactly_one_cell_changes(self):
        rng = GeneratorSource(seed=3)
        grid = Grid.from_values([[2, 0, 4], [0, 0, 8], [16, 0, 0]])
        before = grid.values.copy()

        spawn_tile(grid, rng)

        changed = np.argwhere(grid.values != before)
        self.assertEqual(len(changed), 1)
        self.assertEqual(before[tuple(changed[0])], 0)
        self.assertIn(grid.values[tuple(changed[0])], (2, 4))


class TestNewGame(TestCase):
    """Test the creation of a fresh grid."""

    def test_two_starting_tiles(self):
        grid = new_game(GeneratorSource(seed=0))

        self.assertEqual(grid.shape, (4, 4))
        self.assertEqual(np.count_nonzero(grid.values), 2)
        self.assertTrue(np.all(np.isin(grid.values[grid.values != 0], [2, 4])))
        self.assertEqual(np.count_nonzero(grid.annotations == Annotation.NEW), 2)

    def test_second_spawn_sees_the_first(self):
        grid = new_game(ScriptedSource(picks=[0, 0], draws=[0.1, 0.95]))

        self.assertEqual(grid[0, 0].value, 2)
        self.assertEqual(grid[0, 1].value, 4)
        self.assertEqual(np.count_nonzero(grid.values), 2)

    def test_custom_size(self):
        grid = new_game(GeneratorSource(seed=1), config=GridConfig(rows=3, cols=5, start_tiles=1))
        self.assertEqual(grid.shape, (3, 5))
        self.assertEqual(np.count_nonzero(grid.values), 1)

    def test_invalid_dimensions_fail_fast(self):
        with self.assertRaises(ConfigurationError):
            new_game(GeneratorSource(), config=GridConfig(rows=0, cols=4))
        with self.assertRaises(ConfigurationError):
            Grid(4, -1)


if __name__ == "__main__":
    main()
