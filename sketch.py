"""
Sketch controller — the loop between the settings UI and the generator.

Holds the live settings, applies edits and re-seed triggers between passes,
and keeps the latest field and image for display.

Workflow:
1. UI edits a setting (set_variable / set_palette_slot / set_jitter)
2. A re-seed trigger may supply a fresh seed (reseed)
3. redraw() runs one pass on a settings snapshot and renders it
"""

from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Optional

from PIL import Image

from generator.color import ColorInfo, hex_to_rgb
from generator.layout import Rect
from generator.rng import SketchRandom, default_random
from generator.state import FieldState, ShapeKind, SketchSettings, calculate_field
from generator.renderer import render_field
from generator.variations import generate_variations
from config import settings

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "yes", "on"}


@dataclass
class SketchState:
    """Mutable state of the sketch between passes."""
    params: SketchSettings = field(default_factory=SketchSettings)
    latest_field: Optional[FieldState] = None
    latest_image: Optional[Image.Image] = None


class SketchController:
    """
    Connects the settings UI, the re-seed trigger and the generator.

    Can be used programmatically or driven by the Streamlit UI.
    """

    def __init__(
        self,
        params: Optional[SketchSettings] = None,
        rng: Optional[SketchRandom] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ):
        self.rng = rng or default_random
        self.width = width or settings.CANVAS_WIDTH
        self.height = height or settings.CANVAS_HEIGHT
        if params is None:
            params = SketchSettings(rng_seed=settings.DEFAULT_SEED)
        params.validate()
        self.state = SketchState(params=params)

    @property
    def bounds(self) -> Rect:
        return Rect.centered(self.width, self.height)

    def redraw(self) -> Image.Image:
        """Run one pass with the current settings and render it."""
        field_state = calculate_field(self.state.params, self.bounds, rng=self.rng)
        self.state.latest_field = field_state
        self.state.latest_image = render_field(field_state, self.width, self.height)
        return self.state.latest_image

    def reseed(self, seed: Optional[int] = None) -> int:
        """Switch to ``seed``, or to a fresh random 64-bit seed when omitted."""
        if seed is None:
            seed = random.getrandbits(64)
        if not 0 <= seed < 2**64:
            raise ValueError(f"Seed must be an unsigned 64-bit integer, got {seed}")
        self.state.params.rng_seed = seed
        logger.info("Reseeded sketch: %d", seed)
        return seed

    def set_variable(self, name: str, value: Any) -> str:
        """Set one scalar setting, coercing to its current type."""
        params_dict = self.state.params.to_dict()
        if name not in params_dict or isinstance(params_dict[name], dict):
            return json.dumps({"error": f"Unknown variable: {name}"})

        # Type coercion
        field_type = type(params_dict[name])
        try:
            if field_type == bool:
                value = value.strip().lower() in _TRUE_STRINGS if isinstance(value, str) else bool(value)
            elif field_type == int:
                value = int(value)
            elif field_type == float:
                value = float(value)
        except (TypeError, ValueError):
            return json.dumps({"error": f"Invalid value for {name}: {value!r}"})

        previous = getattr(self.state.params, name)
        setattr(self.state.params, name, value)
        try:
            self.state.params.validate()
        except ValueError as e:
            setattr(self.state.params, name, previous)
            return json.dumps({"error": str(e)})

        return json.dumps({
            "success": True,
            "variable": name,
            "new_value": value,
            "all_params": self.state.params.to_dict(),
        })

    def set_palette_slot(
        self,
        kind: ShapeKind,
        index: int,
        color: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> ColorInfo:
        """Change one slot of a palette; ``color`` is '#RRGGBB'."""
        palette = self.state.params.palette_for(kind)
        if not 0 <= index < len(palette.colors):
            raise IndexError(f"No palette slot {index}")
        if color is not None:
            palette.colors[index] = hex_to_rgb(color)
        if enabled is not None:
            palette.enabled[index] = enabled
        return palette

    def set_jitter(
        self,
        kind: ShapeKind,
        h: Optional[float] = None,
        s: Optional[float] = None,
        v: Optional[float] = None,
    ) -> ColorInfo:
        palette = self.state.params.palette_for(kind)
        previous = (palette.h_jitter, palette.s_jitter, palette.v_jitter)
        if h is not None:
            palette.h_jitter = h
        if s is not None:
            palette.s_jitter = s
        if v is not None:
            palette.v_jitter = v
        try:
            palette.validate()
        except ValueError:
            palette.h_jitter, palette.s_jitter, palette.v_jitter = previous
            raise
        return palette

    def variations(self, n: Optional[int] = None, width: int = 200, height: int = 200) -> list[tuple[FieldState, Image.Image]]:
        """Small renders of the current settings at the next ``n`` seeds."""
        return generate_variations(
            self.state.params,
            self.bounds,
            n=n,
            base_seed=self.state.params.rng_seed + 1,
            rng=self.rng,
            width=width,
            height=height,
        )
