"""
Field state calculator — the deterministic core of the sketch.

Turns a settings snapshot plus a seed into the ordered list of primitives a
renderer should draw. Nothing here draws; every random decision comes from
the injected ``SketchRandom`` in a fixed order:

    shuffle swaps → per cell: scale, kind, [ring count] → per ring: color
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from generator.color import RGB8, ColorInfo, hex_to_rgb, pick_color
from generator.layout import Point, Rect, grid_centers, shape_size_for, shuffle_positions
from generator.rng import SketchRandom, default_random

logger = logging.getLogger(__name__)


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"


@dataclass(frozen=True)
class Primitive:
    """One drawable shape or ring."""
    kind: ShapeKind
    center: Point
    size: float  # diameter or side length
    color: RGB8
    alpha: int


def _default_circle_palette() -> ColorInfo:
    return ColorInfo(
        colors=[hex_to_rgb(c) for c in ("#ff0000", "#ff8c00", "#ffd91a", "#ffffff")],
        enabled=[True, False, False, False],
    )


def _default_square_palette() -> ColorInfo:
    return ColorInfo(
        colors=[hex_to_rgb(c) for c in ("#0000ff", "#0099cc", "#4d0099", "#808080")],
        enabled=[True, False, False, False],
    )


@dataclass
class SketchSettings:
    """
    The knobs of one pass. The settings UI mutates these between passes;
    ``calculate_field`` works on a private copy.
    """
    grid_count_x: int = 20
    grid_count_y: int = 20
    base_size: float = 0.7
    max_scale: float = 1.0
    pct_circles: float = 0.5
    alpha: int = 255
    inset_count: int = 1
    fixed_inset_count: bool = True
    inversed_radii: bool = False
    rng_seed: int = 100
    circle_palette: ColorInfo = field(default_factory=_default_circle_palette)
    square_palette: ColorInfo = field(default_factory=_default_square_palette)

    def palette_for(self, kind: ShapeKind) -> ColorInfo:
        return self.circle_palette if kind is ShapeKind.CIRCLE else self.square_palette

    def validate(self) -> None:
        """Raise ValueError if any field is outside its contract."""
        if self.grid_count_x < 1 or self.grid_count_y < 1:
            raise ValueError("grid counts must be at least 1")
        if not (math.isfinite(self.base_size) and self.base_size > 0):
            raise ValueError("base_size must be positive")
        if not (math.isfinite(self.max_scale) and self.max_scale >= 1.0):
            raise ValueError("max_scale must be >= 1.0")
        if not 0.0 <= self.pct_circles <= 1.0:
            raise ValueError("pct_circles must be within [0, 1]")
        if not 0 <= self.alpha <= 255:
            raise ValueError("alpha must be within [0, 255]")
        if self.inset_count < 1:
            raise ValueError("inset_count must be at least 1")
        if not 0 <= self.rng_seed < 2**64:
            raise ValueError("rng_seed must be an unsigned 64-bit integer")
        self.circle_palette.validate()
        self.square_palette.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "grid_count_x": self.grid_count_x,
            "grid_count_y": self.grid_count_y,
            "base_size": self.base_size,
            "max_scale": self.max_scale,
            "pct_circles": self.pct_circles,
            "alpha": self.alpha,
            "inset_count": self.inset_count,
            "fixed_inset_count": self.fixed_inset_count,
            "inversed_radii": self.inversed_radii,
            "rng_seed": self.rng_seed,
            "circle_palette": self.circle_palette.to_dict(),
            "square_palette": self.square_palette.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SketchSettings:
        kwargs = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}
        for key in ("circle_palette", "square_palette"):
            if isinstance(kwargs.get(key), dict):
                kwargs[key] = ColorInfo.from_dict(kwargs[key])
        return cls(**kwargs)


@dataclass
class FieldState:
    """Complete output of one pass."""
    settings: SketchSettings
    seed: int
    bounds: Rect
    cell_count: int
    shape_size: float
    primitives: list[Primitive] = field(default_factory=list)


def select_shape(
    shape_size: float,
    settings: SketchSettings,
    rng: SketchRandom,
) -> tuple[ShapeKind, float]:
    """Draw the size multiplier, then the kind."""
    scale = rng.uniform_float() * (settings.max_scale - 1) + 1
    size = shape_size * scale
    if rng.uniform_float() < settings.pct_circles:
        return ShapeKind.CIRCLE, size
    return ShapeKind.SQUARE, size


def ring_count_for(settings: SketchSettings, rng: SketchRandom) -> int:
    if settings.fixed_inset_count:
        return settings.inset_count
    return rng.uniform_int(1, settings.inset_count + 1)


def expand_insets(
    kind: ShapeKind,
    center: Point,
    size: float,
    settings: SketchSettings,
    rng: SketchRandom,
) -> list[Primitive]:
    """
    Fan one shape out into concentric rings, re-picking the color per ring.

    Inversed rings are ``size / i``; otherwise each ring is ``size / count``
    smaller than the previous one.
    """
    ring_count = ring_count_for(settings, rng)
    assert ring_count >= 1, "ring count must be >= 1"
    palette = settings.palette_for(kind)
    delta = size / ring_count
    current_size = size

    rings = []
    for i in range(1, ring_count + 1):
        color = pick_color(palette, rng)
        if settings.inversed_radii:
            ring_size = current_size / i
        else:
            ring_size = current_size
            current_size -= delta
        rings.append(Primitive(
            kind=kind,
            center=center,
            size=ring_size,
            color=color,
            alpha=settings.alpha,
        ))
    return rings


def calculate_field(
    settings: SketchSettings,
    bounds: Rect,
    seed: Optional[int] = None,
    rng: Optional[SketchRandom] = None,
) -> FieldState:
    """
    Run one full pass.

    ``seed`` defaults to ``settings.rng_seed``; ``rng`` defaults to the
    process-wide service. The RNG lock is held for the whole pass.
    """
    assert settings.grid_count_x >= 1 and settings.grid_count_y >= 1, "grid counts must be >= 1"
    assert settings.inset_count >= 1, "inset_count must be >= 1"

    rng = rng or default_random
    snapshot = copy.deepcopy(settings)
    if seed is None:
        seed = snapshot.rng_seed

    shape_size = shape_size_for(
        bounds, snapshot.grid_count_x, snapshot.grid_count_y, snapshot.base_size
    )
    positions = grid_centers(bounds, snapshot.grid_count_x, snapshot.grid_count_y)

    primitives: list[Primitive] = []
    with rng.lock:
        rng.seed(seed)
        # ── Draw order ───────────────────────────────────────────────
        positions = shuffle_positions(positions, rng)

        # ── Per-cell shapes ──────────────────────────────────────────
        for center in positions:
            kind, size = select_shape(shape_size, snapshot, rng)
            primitives.extend(expand_insets(kind, center, size, snapshot, rng))

    logger.debug(
        "Field pass seed=%d: %d cells → %d primitives",
        seed, len(positions), len(primitives),
    )

    return FieldState(
        settings=snapshot,
        seed=seed,
        bounds=bounds,
        cell_count=len(positions),
        shape_size=shape_size,
        primitives=primitives,
    )
