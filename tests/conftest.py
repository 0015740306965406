"""shared fixtures for noise table and noise field tests."""

import pytest

from fractal_cell_noise.layered_noise import LayeredNoiseConfig, LayeredNoiseField
from fractal_cell_noise.noise_table import NoiseTable


@pytest.fixture()
def identity_table():
    """4x4 table holding 0..15 in order, so lookups can be worked by hand."""
    return NoiseTable.from_permutation(range(16))


@pytest.fixture()
def seeded_table():
    """64x64 shuffled table with a fixed seed."""
    return NoiseTable(width=64, seed=1234)


@pytest.fixture()
def scenario_config():
    """8x8 single-octave field with heights in [0, 1] on a 4x4 table."""
    return LayeredNoiseConfig(
        x_size=8,
        y_size=8,
        density=2,
        octave_count=1,
        amplitude_ratio=0.4,
        softness=4,
        samples_per_cell=4,
        bias=0.5,
        height_range=0.5,
        table_width=4,
    )


@pytest.fixture()
def scenario_field(scenario_config, identity_table):
    """scenario field backed by the hand-checkable identity table."""
    return LayeredNoiseField(scenario_config, table=identity_table)


@pytest.fixture()
def layered_config():
    """64x64 four-octave field matching the seeded table width."""
    return LayeredNoiseConfig(
        x_size=64,
        y_size=64,
        density=2,
        octave_count=4,
        amplitude_ratio=0.4,
        softness=4.0,
        samples_per_cell=4,
        bias=0.0,
        height_range=1.0,
        table_width=64,
    )


@pytest.fixture()
def layered_field(layered_config, seeded_table):
    """four-octave field over the seeded table."""
    return LayeredNoiseField(layered_config, table=seeded_table)
