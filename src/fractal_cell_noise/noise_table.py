"""Positional hashing backed by a shuffled permutation table.

for 2d value noise we need to feed in two integer coordinates and a seed and
get back a deterministic value for that point. this module does it with a
fixed-size table holding a random permutation of [0, width * width). after
construction the table never changes, so every lookup is pure index
arithmetic and one table can be shared read-only between samplers.

the table is a width x width torus: positions are wrapped by width before
being linearized, which makes anything built on top of it tileable.
"""

from __future__ import annotations

import math
import time
from collections.abc import Sequence

import numpy as np

from fractal_cell_noise.errors import ConfigurationError, EmptyDrawError

DEFAULT_TABLE_WIDTH = 256

# large prime used to walk a cursor around the table without repeating
# within one period
CYCLE_STEP = 101159


def is_power_of_two(value: int) -> bool:
    """Check whether value is a positive integral power of two."""
    if not math.isfinite(value):
        return False
    return int(value) == value and value > 0 and (int(value) & (int(value) - 1)) == 0


def _validate_width(width: int) -> None:
    """Validate a table width.

    Args:
        width: edge length of the table torus

    Raises:
        ConfigurationError: if width is not a positive power of two
    """
    if isinstance(width, bool) or not is_power_of_two(width):
        msg = f"table width must be a positive power of two, got {width}"
        raise ConfigurationError(msg)


def _draw_card(cards: list[int], draw: float) -> int:
    """Remove and return a random element from cards.

    Args:
        cards: working sequence, consumed destructively
        draw: uniform random number in [0, 1) choosing the element

    Returns:
        the removed element

    Raises:
        EmptyDrawError: if cards is empty
    """
    if not cards:
        msg = "drew from an empty working sequence while shuffling the noise table"
        raise EmptyDrawError(msg)

    index = min(int(draw * len(cards)), len(cards) - 1)
    # swap with the tail so removal is O(1), order of the rest doesn't matter
    cards[index], cards[-1] = cards[-1], cards[index]
    return cards.pop()


class NoiseTable:
    """Shuffled permutation table with positional lookups.

    Attributes:
        width: edge length of the table torus (power of two)
        size: number of entries, width * width
        size_mask: size - 1, used as a bitmask modulo
        cycle_step: increment used by advance_cursor
    """

    cycle_step = CYCLE_STEP

    def __init__(
        self,
        width: int = DEFAULT_TABLE_WIDTH,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
        verbose: bool = False,
    ) -> None:
        """Build the table.

        Args:
            width: edge length of the table torus, must be a power of two
            seed: seed for the shuffle (non-reproducible if None)
            rng: numpy generator to shuffle with, takes precedence over seed
            verbose: print construction progress

        Raises:
            ConfigurationError: if width is not a power of two
        """
        self._set_dimensions(width, verbose)

        start_time = time.perf_counter()
        if rng is None:
            rng = np.random.default_rng(seed)
            source = f"seed={seed}"
        else:
            source = "rng=provided"
        self._table = self._shuffle(rng)

        if self.verbose:
            elapsed = time.perf_counter() - start_time
            print(f"built {self.width}x{self.width} noise table "
                  f"({self.size} entries, {source}) in {elapsed:.3f}s")

    def _set_dimensions(self, width: int, verbose: bool) -> None:
        """Validate width and set the size attributes derived from it."""
        _validate_width(width)

        self.width = int(width)
        self.size = self.width * self.width
        self.size_mask = self.size - 1
        self.verbose = verbose

    @classmethod
    def from_permutation(cls, values: Sequence[int], verbose: bool = False) -> NoiseTable:
        """Create a table from an explicit permutation instead of shuffling.

        useful for golden tests and for reusing a table saved by the caller.

        Args:
            values: permutation of [0, len(values)); len must be width * width
                for a power-of-two width
            verbose: print construction progress

        Returns:
            NoiseTable holding exactly these values

        Raises:
            ConfigurationError: if values is not a permutation of a valid size
        """
        values = [int(value) for value in values]
        width = int(round(len(values) ** 0.5))
        if width * width != len(values):
            msg = f"table length must be a square, got {len(values)}"
            raise ConfigurationError(msg)

        table = cls.__new__(cls)
        table._set_dimensions(width, verbose)

        if sorted(values) != list(range(table.size)):
            msg = f"values must be a permutation of 0..{table.size - 1}"
            raise ConfigurationError(msg)

        table._table = tuple(values)

        if verbose:
            print(f"loaded {width}x{width} noise table from explicit permutation")

        return table

    def _shuffle(self, rng: np.random.Generator) -> tuple[int, ...]:
        """Draw every entry of [0, size) once, in random order."""
        cards = list(range(self.size))
        draws = rng.random(self.size)

        table = []
        for draw in draws:
            table.append(_draw_card(cards, float(draw)))

        return tuple(table)

    @property
    def table(self) -> tuple[int, ...]:
        """The permutation, read-only."""
        return self._table

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"NoiseTable(width={self.width}, size={self.size})"

    def value_at_index(self, index: int) -> int:
        """Look up the table entry for an arbitrary integer index.

        the sequence repeats with period size; negative indices wrap.

        Args:
            index: any integer

        Returns:
            pseudo-random integer in [0, size)
        """
        return self._table[index & self.size_mask]

    def normalized_at_index(self, index: int) -> float:
        """Look up the table entry for index, scaled into [0, 1)."""
        return self._table[index & self.size_mask] / self.size

    def value_at_position_seed(self, x: int, y: int, seed: int) -> int:
        """Look up a deterministic value for an integer position and seed.

        x and y are wrapped by width first, so positions a multiple of width
        apart alias to the same value.

        Args:
            x: integer x position
            y: integer y position
            seed: integer seed (an offset into the table)

        Returns:
            pseudo-random integer in [0, size)
        """
        linear = (x % self.width) + (y % self.width) * self.width + seed
        return self.value_at_index(linear)

    def normalized_at_position_seed(self, x: int, y: int, seed: int) -> float:
        """Same as value_at_position_seed, scaled into [0, 1)."""
        return self.value_at_position_seed(x, y, seed) / self.size

    def advance_cursor(self, cursor: int) -> int:
        """Step a caller-owned cursor to the next seed.

        Args:
            cursor: current cursor value

        Returns:
            (cursor + cycle_step) mod size
        """
        return (cursor + self.cycle_step) % self.size
