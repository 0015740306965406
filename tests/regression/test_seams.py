"""Regression test: seams in the layered cell noise.

the per-octave scaling of distances by density was suspected of leaving
visible seams where neighboring cells meet. the field math is kept as-is;
these tests pin down the behavior that must not regress:

- the field is continuous across cell edges and the quadrant boundaries
  where the 2x2 neighborhood switches
- the field wraps cleanly across the tile edge, so tiled images don't show
  a seam where copies meet
"""

import numpy as np
import pytest

from fractal_cell_noise.layered_noise import LayeredNoiseConfig, LayeredNoiseField
from fractal_cell_noise.noise_table import NoiseTable

FIELD_SIZE = 64
EPSILON = 1e-7

# with softness 4, at most 16 points per octave and heights in [-1, 1], the
# slope of the field is far below this, so a 2e-7 step can't move it this much
MAX_STEP_CHANGE = 1e-3


@pytest.fixture(scope="module")
def seam_field():
    """five-octave field reaching density 32 on a 64 wide tile."""
    config = LayeredNoiseConfig(
        x_size=FIELD_SIZE,
        y_size=FIELD_SIZE,
        density=2,
        octave_count=5,
        amplitude_ratio=0.5,
        softness=4.0,
        samples_per_cell=4,
        bias=0.0,
        height_range=1.0,
        table_width=64,
    )
    return LayeredNoiseField(config, table=NoiseTable(width=64, seed=2024))


def _boundaries(density: int) -> list[float]:
    """x positions of every cell edge and quadrant boundary at a density."""
    step = FIELD_SIZE / (2 * density)
    return [i * step for i in range(1, 2 * density)]


class TestContinuity:
    """the field has no jumps inside a tile."""

    @pytest.mark.parametrize("density", [2, 4, 8, 16, 32])
    def test_continuous_across_x_boundaries(self, seam_field, density: int) -> None:
        """crossing any cell or quadrant boundary along x is smooth."""
        for y in (3.3, 29.7):
            for x in _boundaries(density):
                # when
                before = seam_field.sample(x - EPSILON, y)
                after = seam_field.sample(x + EPSILON, y)

                # then
                assert abs(after - before) < MAX_STEP_CHANGE, (
                    f"jump of {after - before:.6f} at x={x}, y={y}, density={density}"
                )

    @pytest.mark.parametrize("density", [2, 4, 8, 16, 32])
    def test_continuous_across_y_boundaries(self, seam_field, density: int) -> None:
        """crossing any cell or quadrant boundary along y is smooth."""
        for x in (11.1, 50.05):
            for y in _boundaries(density):
                before = seam_field.sample(x, y - EPSILON)
                after = seam_field.sample(x, y + EPSILON)
                assert abs(after - before) < MAX_STEP_CHANGE, (
                    f"jump of {after - before:.6f} at x={x}, y={y}, density={density}"
                )

    def test_single_octave_continuity(self, seam_field) -> None:
        """each octave on its own is continuous, not just their sum."""
        seed = seam_field.octave_seeds()[0]
        for density in (2, 8, 32):
            for x in _boundaries(density):
                before = seam_field.cell_kernel_sum(x - EPSILON, 17.0, density, seed)
                after = seam_field.cell_kernel_sum(x + EPSILON, 17.0, density, seed)
                assert abs(after - before) < MAX_STEP_CHANGE


class TestTileEdges:
    """copies of the tile meet without a seam."""

    def test_left_and_right_edges_meet(self, seam_field) -> None:
        """approaching x_size from below lands on the value at x = 0."""
        for y in np.linspace(0, FIELD_SIZE, 9):
            left = seam_field.sample(0.0, y)
            right = seam_field.sample(FIELD_SIZE - EPSILON, y)
            assert abs(right - left) < MAX_STEP_CHANGE

    def test_top_and_bottom_edges_meet(self, seam_field) -> None:
        """approaching y_size from below lands on the value at y = 0."""
        for x in np.linspace(0, FIELD_SIZE, 9):
            top = seam_field.sample(x, 0.0)
            bottom = seam_field.sample(x, FIELD_SIZE - EPSILON)
            assert abs(bottom - top) < MAX_STEP_CHANGE

    def test_tiled_grid_repeats(self, seam_field) -> None:
        """a 2x2 arrangement of tiles is the same tile repeated."""
        # given
        step = 8
        coords = range(0, 2 * FIELD_SIZE, step)

        # when
        grid = np.array([[seam_field.sample(x, y) for x in coords] for y in coords])

        # then
        half = FIELD_SIZE // step
        tile = grid[:half, :half]
        np.testing.assert_allclose(grid[:half, half:], tile, atol=1e-12)
        np.testing.assert_allclose(grid[half:, :half], tile, atol=1e-12)
        np.testing.assert_allclose(grid[half:, half:], tile, atol=1e-12)

    def test_field_is_not_flat(self, seam_field) -> None:
        """continuity checks mean nothing on a constant field."""
        values = {round(seam_field.sample(x * 1.7, x * 2.3), 9) for x in range(20)}
        assert len(values) > 1
