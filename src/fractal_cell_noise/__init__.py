"""Tileable fractal cell noise for heightmaps and greyscale textures.

This package produces a deterministic, seamlessly tiling scalar field. A
shuffled permutation table provides positional hashing, and a layered
cellular noise sampler sums soft kernels centered on points scattered through
each cell, over several octaves of doubling density.

Quick Start:
    from fractal_cell_noise import create_noise_field

    # 256x256 field that tiles at its edges
    field = create_noise_field(256, 256, seed=42)
    value = field.sample(10, 20)

    # whole raster at once, then 8-bit channel values
    from fractal_cell_noise import to_greyscale

    heights = field.sample_grid(256, 256)
    pixels = to_greyscale(heights)

Advanced Usage:
    # for fine control, build the config and table yourself
    from fractal_cell_noise import LayeredNoiseConfig, LayeredNoiseField, NoiseTable

    table = NoiseTable(width=256, seed=7)
    config = LayeredNoiseConfig(
        x_size=512,
        y_size=512,
        density=4,
        octave_count=5,
        amplitude_ratio=0.5,
        bias=0.5,
        height_range=0.5,
    )
    field = LayeredNoiseField(config, table=table)

    # a different starting cursor gives an uncorrelated frame
    frame = field.sample_grid(512, 512, cursor=1234)

Features:
    - fully deterministic for a given table
    - tiles across the field edges
    - O(1) neighbor lookups per octave
    - completed tables are immutable and safe to share between threads
"""

from fractal_cell_noise.errors import ConfigurationError, EmptyDrawError
from fractal_cell_noise.layered_noise import (
    LayeredNoiseConfig,
    LayeredNoiseField,
    falloff_kernel,
    to_greyscale,
)
from fractal_cell_noise.noise_table import NoiseTable

__all__ = [
    "ConfigurationError",
    "EmptyDrawError",
    "LayeredNoiseConfig",
    "LayeredNoiseField",
    "NoiseTable",
    "create_noise_field",
    "falloff_kernel",
    "to_greyscale",
]


def create_noise_field(
    x_size: float,
    y_size: float,
    density: int = 2,
    octaves: int = 4,
    amplitude_ratio: float = 0.4,
    softness: float = 4.0,
    samples_per_cell: int = 4,
    bias: float = 0.0,
    height_range: float = 1.0,
    seed: int | None = None,
    verbose: bool = False,
) -> LayeredNoiseField:
    """Create a layered noise field with its own noise table.

    Args:
        x_size: field extent along x (the field tiles at this period)
        y_size: field extent along y
        density: cells per unit length at the first octave, power of two
            (default: 2)
        octaves: number of layers to accumulate (default: 4)
        amplitude_ratio: amplitude multiplier per octave (default: 0.4)
        softness: kernel falloff shape (default: 4.0)
        samples_per_cell: points placed in each cell (default: 4)
        bias: center of the point heights (default: 0.0)
        height_range: half-spread of the point heights (default: 1.0)
        seed: seed for the table shuffle, None for a fresh random table
        verbose: print progress while building

    Returns:
        configured LayeredNoiseField

    Raises:
        ConfigurationError: if any value is out of range or density is not a
            power of two

    Example:
        >>> from fractal_cell_noise import create_noise_field
        >>> field = create_noise_field(64, 64, seed=1)
        >>> field.sample(0, 0) == field.sample(64, 0)
        True
    """
    config = LayeredNoiseConfig(
        x_size=x_size,
        y_size=y_size,
        density=density,
        octave_count=octaves,
        amplitude_ratio=amplitude_ratio,
        softness=softness,
        samples_per_cell=samples_per_cell,
        bias=bias,
        height_range=height_range,
    )
    return LayeredNoiseField(config, seed=seed, verbose=verbose)
