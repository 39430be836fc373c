"""
Random sources consulted when spawning tiles.

The engine never owns a generator: a source is passed to every call that may spawn a tile, so that
tests can substitute a fixed sequence and assert exact outcomes.
"""

from collections import deque
from typing import Iterable, Optional, Protocol

from numpy.random import PCG64DXSM, Generator


class RandomSource(Protocol):
    """
    Capability used by the engine to make its random draws.
    """

    def pick(self, count: int) -> int:
        """Return an index drawn uniformly from ``[0, count)``."""

    def uniform(self) -> float:
        """Return a float drawn uniformly from ``[0, 1)``."""


class GeneratorSource:
    """
    Random source backed by a numpy generator.

    Parameters
    ----------
    seed : int, optional
        Seed of the generator. The same seed always yields the same sequence of draws.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._generator = Generator(PCG64DXSM(seed))

    def pick(self, count: int) -> int:
        return int(self._generator.integers(count))

    def uniform(self) -> float:
        return float(self._generator.random())

    def __repr__(self) -> str:
        return f'GeneratorSource(seed={self.seed!r})'


class ScriptedSource:
    """
    Random source replaying fixed sequences of picks and draws.

    Parameters
    ----------
    picks : Iterable[int]
        Indices returned, in order, by ``pick``.
    draws : Iterable[float]
        Floats returned, in order, by ``uniform``.

    Notes
    -----
    A pick outside ``[0, count)`` is rejected with ``ValueError``, and consulting an exhausted
    sequence raises ``LookupError``. Both indicate a badly written script, not an engine fault.
    """

    def __init__(self, picks: Iterable[int] = (), draws: Iterable[float] = ()):
        self._picks = deque(picks)
        self._draws = deque(draws)

    @property
    def exhausted(self) -> bool:
        """True when every scripted pick and draw has been consumed."""
        return not self._picks and not self._draws

    def pick(self, count: int) -> int:
        if not self._picks:
            raise LookupError('No scripted pick left')
        index = self._picks.popleft()
        if not 0 <= index < count:
            raise ValueError(f'Scripted pick {index} is outside [0, {count})')
        return index

    def uniform(self) -> float:
        if not self._draws:
            raise LookupError('No scripted draw left')
        return self._draws.popleft()
