# -*- coding: utf-8 -*-
"""
Simulate games with a random policy and report the frequency of maximum tiles.
"""
import logging
from argparse import ArgumentParser
from collections import Counter
from typing import Dict, Optional

from numpy.random import default_rng
from tqdm import trange

from slidetiles.config import GridConfig
from slidetiles.core.gamemove import legal_directions
from slidetiles.envs import SlidingTileGame


def evaluate(length: int = 10, size: int = 4, seed: Optional[int] = None) -> Dict[int, int]:
    """
    Play games with a uniformly random legal direction at each move.

    Parameters
    ----------
    length : int, optional
        The number of games to play (default is 10).
    size : int, optional
        The size of the square grid (default is 4). A 1x1 grid starts with a single tile.
    seed : int, optional
        Seed of both the tile spawns and the policy.

    Returns
    -------
    Dict[int, int]
        Number of games ending with each maximum tile.
    """
    policy = default_rng(seed)
    game = SlidingTileGame(config=GridConfig(rows=size, cols=size, start_tiles=min(2, size * size)), seed=seed)
    score = []

    with trange(length) as period:
        for num in period:
            game.reset()
            done = game.is_finished

            # ##: Play a game.
            while not done:
                directions = legal_directions(game.grid)
                _, _, done = game.step(directions[policy.integers(len(directions))])

                # ##: Log.
                period.set_description(f"Simulation: {num + 1}")
                period.set_postfix(moves=game.moves, max=int(game.grid.values.max()))

            # ##: Save max cells.
            score.append(int(game.grid.values.max()))

    # ##: Final log.
    return dict(Counter(score))


def main(argv=None) -> None:
    parser = ArgumentParser(description="Simulate sliding-tile games with a random policy.")
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--size", type=int, default=4)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    if args.size < 1:
        parser.error(f"--size must be at least 1, got {args.size}")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    result = evaluate(length=args.games, size=args.size, seed=args.seed)
    for tile, count in sorted(result.items()):
        print(f"max tile {tile}: {count} game(s)")


if __name__ == "__main__":
    main()
