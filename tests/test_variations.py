"""Tests for seed variations."""

from generator.layout import Rect
from generator.rng import SketchRandom
from generator.state import SketchSettings, calculate_field
from generator.variations import generate_variations
from config import settings


class TestGenerateVariations:
    """Tests for generate_variations()."""

    def test_consecutive_seeds(self):
        params = SketchSettings(grid_count_x=3, grid_count_y=3)
        results = generate_variations(params, Rect.centered(60, 60), n=3, base_seed=10,
                                      rng=SketchRandom(), width=60, height=60)
        assert [state.seed for state, _ in results] == [10, 11, 12]
        assert all(img.size == (60, 60) for _, img in results)

    def test_matches_single_pass(self):
        params = SketchSettings(grid_count_x=3, grid_count_y=3)
        bounds = Rect.centered(60, 60)
        results = generate_variations(params, bounds, n=2, base_seed=5,
                                      rng=SketchRandom(), width=30, height=30)
        expected = calculate_field(params, bounds, seed=6, rng=SketchRandom())
        assert results[1][0].primitives == expected.primitives

    def test_default_count(self):
        params = SketchSettings(grid_count_x=1, grid_count_y=1)
        results = generate_variations(params, Rect.centered(10, 10), rng=SketchRandom(),
                                      width=10, height=10)
        assert len(results) == settings.NUM_VARIATIONS

    def test_seed_wraps_at_u64(self):
        params = SketchSettings(grid_count_x=1, grid_count_y=1)
        results = generate_variations(params, Rect.centered(10, 10), n=2, base_seed=2**64 - 1,
                                      rng=SketchRandom(), width=10, height=10)
        assert [state.seed for state, _ in results] == [2**64 - 1, 0]
