"""Shape Field generator — seeded settings → ordered drawable primitives."""

from generator.color import ColorInfo, pick_color
from generator.layout import Rect, grid_centers, shuffle_positions
from generator.rng import SketchRandom, default_random
from generator.state import (
    FieldState,
    Primitive,
    ShapeKind,
    SketchSettings,
    calculate_field,
)
from generator.renderer import render_field, build_svg
from generator.variations import generate_variations

__all__ = [
    "ColorInfo",
    "pick_color",
    "Rect",
    "grid_centers",
    "shuffle_positions",
    "SketchRandom",
    "default_random",
    "FieldState",
    "Primitive",
    "ShapeKind",
    "SketchSettings",
    "calculate_field",
    "render_field",
    "build_svg",
    "generate_variations",
]
