"""Layered cellular value noise.

this is the heart of the cellular noise algorithm: a single x, y lookup.
the noise loops on itself over a rectangle x_size by y_size.

the space is divided into square cells. a fixed number of points are placed
deterministically in each cell (samples_per_cell controls this), and each
point gets a random height between bias - height_range and
bias + height_range. a soft 0-1 kernel is centered on every point. its
diameter equals the cell edge, outside of which it falls off cleanly to 0.

    +---------+
    |   x     |
    |         |
    |x     x  |
    |  x      |
    +---------+

at density 1 there is one cell for the whole field, at density 2 there are
2 x 2 cells, and so on. each octave doubles the density and scales the
amplitude by amplitude_ratio.

unlike worley noise there are no nearest-point distance comparisons: every
point within reach contributes height * kernel(distance) and the results are
summed, which keeps neighbor lookups O(1) and the field smooth.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from fractal_cell_noise.errors import ConfigurationError
from fractal_cell_noise.noise_table import DEFAULT_TABLE_WIDTH, NoiseTable, is_power_of_two


def falloff_kernel(distance_squared: float, softness: float) -> float:
    """Bounded falloff kernel, a -1 to 1 variant of the witch of agnesi.

    squaring it flattens the tails so the derivative is 0 at the rim and
    points dropping out of the neighborhood leave no seams.

    Args:
        distance_squared: squared distance in units of the kernel radius
        softness: shape of the falloff (the diameter never changes)

    Returns:
        kernel weight in [0, 1], 0 at and beyond distance_squared == 1
    """
    if distance_squared >= 1.0:
        return 0.0
    amp = softness * (1 - distance_squared) / (softness + distance_squared)
    return amp * amp


@dataclass(frozen=True)
class LayeredNoiseConfig:
    """Configuration for a layered noise field.

    Attributes:
        x_size: field extent along x, inputs are divided by this
        y_size: field extent along y
        density: cells per unit length at octave 0 (power of two)
        octave_count: number of layers to accumulate
        amplitude_ratio: amplitude multiplier per octave
        softness: kernel falloff shape
        samples_per_cell: points placed in every cell
        bias: center of the point heights
        height_range: half-spread of the point heights
        table_width: edge length of the backing noise table (power of two)
    """

    x_size: float
    y_size: float
    density: int = 2
    octave_count: int = 4
    amplitude_ratio: float = 0.4
    softness: float = 4.0
    samples_per_cell: int = 4
    bias: float = 0.0
    height_range: float = 1.0
    table_width: int = DEFAULT_TABLE_WIDTH

    def __post_init__(self) -> None:
        """Reject values the sampler can't handle."""
        for name in (
            "x_size",
            "y_size",
            "octave_count",
            "samples_per_cell",
            "softness",
            "amplitude_ratio",
            "bias",
            "height_range",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                msg = f"{name} must be finite, got {value}"
                raise ConfigurationError(msg)

        if self.x_size <= 0 or self.y_size <= 0:
            msg = f"field size must be positive, got {self.x_size}x{self.y_size}"
            raise ConfigurationError(msg)
        if isinstance(self.density, bool) or not is_power_of_two(self.density):
            msg = f"density must be a positive power of two, got {self.density}"
            raise ConfigurationError(msg)
        if int(self.octave_count) != self.octave_count or self.octave_count < 1:
            msg = f"octave_count must be a positive integer, got {self.octave_count}"
            raise ConfigurationError(msg)
        if int(self.samples_per_cell) != self.samples_per_cell or self.samples_per_cell < 1:
            msg = f"samples_per_cell must be a positive integer, got {self.samples_per_cell}"
            raise ConfigurationError(msg)
        if self.softness <= 0:
            msg = f"softness must be positive, got {self.softness}"
            raise ConfigurationError(msg)
        if self.amplitude_ratio < 0:
            msg = f"amplitude_ratio must be >= 0, got {self.amplitude_ratio}"
            raise ConfigurationError(msg)
        if self.height_range < 0:
            msg = f"height_range must be >= 0, got {self.height_range}"
            raise ConfigurationError(msg)


class LayeredNoiseField:
    """Tileable multi-octave cellular noise sampled one point at a time.

    the field holds no per-call state. successive octaves get their seeds by
    advancing a cursor through the noise table; callers that want different
    frames pass their own starting cursor.
    """

    def __init__(
        self,
        config: LayeredNoiseConfig,
        table: NoiseTable | None = None,
        seed: int | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the noise field.

        Args:
            config: field configuration
            table: prebuilt noise table to use instead of building one
            seed: seed for the table shuffle when building one
            verbose: print configuration and table construction progress

        Raises:
            ConfigurationError: if table does not match config.table_width
        """
        self.config = config
        self.verbose = verbose

        if table is None:
            table = NoiseTable(width=config.table_width, seed=seed, verbose=verbose)
        elif table.width != config.table_width:
            msg = (
                f"noise table width {table.width} does not match "
                f"configured table_width {config.table_width}"
            )
            raise ConfigurationError(msg)
        self.table = table

        self._density = int(config.density)
        self._octave_count = int(config.octave_count)
        self._samples = int(config.samples_per_cell)

        if self.verbose:
            print(f"layered noise field: size={config.x_size}x{config.y_size}, "
                  f"density={self._density}, octaves={self._octave_count}, "
                  f"amplitude_ratio={config.amplitude_ratio}, "
                  f"samples_per_cell={self._samples}")

    def octave_seeds(self, cursor: int = 0) -> list[int]:
        """Get the per-octave seeds used by sample.

        the seed for octave k is the cursor after k + 1 advances.

        Args:
            cursor: starting cursor

        Returns:
            one seed per octave, in octave order
        """
        seeds = []
        for _ in range(self._octave_count):
            cursor = self.table.advance_cursor(cursor)
            seeds.append(cursor)
        return seeds

    def octave_layers(self, x: float, y: float, cursor: int = 0) -> list[float]:
        """Get the amplitude-weighted contribution of each octave at a point.

        Args:
            x: x position
            y: y position
            cursor: starting cursor for the octave seeds

        Returns:
            amplitude_ratio ** k * cell_kernel_sum(...) for each octave k
        """
        layers = []
        for octave_index, seed in enumerate(self.octave_seeds(cursor)):
            layer = self.cell_kernel_sum(x, y, self._density * 2**octave_index, seed)
            layers.append(self.config.amplitude_ratio**octave_index * layer)
        return layers

    def sample(self, x: float, y: float, cursor: int = 0) -> float:
        """Sample the layered noise at a position.

        Args:
            x: x position (integer or float)
            y: y position (integer or float)
            cursor: starting cursor for the octave seeds

        Returns:
            half the accumulated octave total, roughly in [-1, 1]
        """
        cumulative_height = 0.0
        for layer in self.octave_layers(x, y, cursor):
            cumulative_height += layer
        return 0.5 * cumulative_height

    def cell_kernel_sum(self, x: float, y: float, density: int, seed: int) -> float:
        """Evaluate a single octave at a position.

        Args:
            x: x position
            y: y position
            density: cells per unit length for this octave (power of two)
            seed: table offset for this octave

        Returns:
            sum of height * kernel over every point within reach
        """
        config = self.config
        table = self.table
        size = table.size
        x = x / config.x_size
        y = y / config.y_size

        ix = math.floor(x * density)
        iy = math.floor(y * density)
        dm1 = density - 1

        # the kernel radius is half a cell edge, so overlap from neighboring
        # cells never exceeds half a cell. which quadrant of the cell we're in
        # tells us the 2x2 block that can reach us, instead of all 8 neighbors.
        left = ix - 1 + (math.floor(x * 2 * density) & 1)
        top = iy - 1 + (math.floor(y * 2 * density) & 1)

        total = 0.0
        for cy in (top, top + 1):
            for cx in (left, left + 1):
                ti = table.value_at_position_seed((cx + density) & dm1, (cy + density) & dm1, seed)

                for _ in range(self._samples):
                    px = cx / density + table.value_at_index(ti) / size / density
                    py = cy / density + table.value_at_index(ti + 1) / size / density
                    h = (
                        config.bias
                        - config.height_range
                        + 2 * config.height_range * table.value_at_index(ti + 2) / size
                    )
                    ti += 3

                    distance_squared = density * density * ((x - px) ** 2 + (y - py) ** 2) * 4
                    if distance_squared < 1.0:
                        total += h * falloff_kernel(distance_squared, config.softness)

        return total

    def sample_grid(self, width: int, height: int, cursor: int = 0) -> np.ndarray:
        """Sample the field over an integer raster.

        Args:
            width: number of columns (x from 0 to width - 1)
            height: number of rows (y from 0 to height - 1)
            cursor: starting cursor for the octave seeds

        Returns:
            float64 array of shape (height, width), values[y, x]
        """
        if width <= 0 or height <= 0:
            msg = f"grid dimensions must be positive, got {width}x{height}"
            raise ValueError(msg)

        values = np.empty((height, width), dtype=np.float64)
        for y in range(height):
            for x in range(width):
                values[y, x] = self.sample(x, y, cursor)

        if self.verbose:
            print(f"sampled {width}x{height} grid: "
                  f"min={values.min():.4f}, max={values.max():.4f}")

        return values


def to_greyscale(values: np.ndarray | float) -> np.ndarray:
    """Convert sampled values to 8-bit channel values.

    follows the convention of painting value * 255 directly, clipped to the
    channel range.

    Args:
        values: sampled noise value(s)

    Returns:
        uint8 array with the same shape as values
    """
    scaled = np.asarray(values, dtype=np.float64) * 255
    return np.clip(scaled, 0, 255).astype(np.uint8)
