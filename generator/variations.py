"""
Seed variations of a single settings snapshot.

Generates N fields with identical settings but consecutive seeds, so the
settings UI can show how a configuration behaves across re-seeds.
"""

from __future__ import annotations

from typing import Optional

from PIL import Image

from generator.layout import Rect
from generator.rng import SketchRandom
from generator.state import FieldState, SketchSettings, calculate_field
from generator.renderer import render_field
from config import settings


def generate_variations(
    sketch: SketchSettings,
    bounds: Rect,
    n: Optional[int] = None,
    base_seed: int = 0,
    rng: Optional[SketchRandom] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> list[tuple[FieldState, Image.Image]]:
    """
    Generate N seed variations.

    Args:
        sketch: The settings to hold constant.
        bounds: Bounding rectangle of every pass.
        n: Number of variations (defaults to settings.NUM_VARIATIONS).
        base_seed: Starting seed; variations use base_seed + i.
        rng: Random service to run the passes on.
        width, height: Raster size of each image.

    Returns:
        List of (FieldState, PIL.Image) tuples.
    """
    if n is None:
        n = settings.NUM_VARIATIONS

    results: list[tuple[FieldState, Image.Image]] = []
    for i in range(n):
        # Wrap so a base seed near the top of the range stays a valid u64.
        state = calculate_field(sketch, bounds, seed=(base_seed + i) % 2**64, rng=rng)
        image = render_field(state, width=width, height=height)
        results.append((state, image))

    return results
