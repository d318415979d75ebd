"""
Palette colors: RGB/HSV conversion and the jittered palette picker.

Colors travel as float RGB triples in [0, 1] until they are quantized to
8-bit channels for a primitive. Hue is expressed in degrees.
"""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass, field
from typing import Any

from generator.rng import SketchRandom

RGB = tuple[float, float, float]
RGB8 = tuple[int, int, int]

SLOT_COUNT = 4
BLACK: RGB8 = (0, 0, 0)

# 8-bit quantization scale; products that round past 255 saturate.
QUANT_SCALE = 255.9


def quantize(channel: float) -> int:
    """Float channel → 8-bit value (round half up, saturating)."""
    return max(0, min(255, math.floor(channel * QUANT_SCALE + 0.5)))


def to_rgb8(rgb: RGB) -> RGB8:
    return (quantize(rgb[0]), quantize(rgb[1]), quantize(rgb[2]))


def rgb_to_hsv(rgb: RGB) -> tuple[float, float, float]:
    """RGB in [0,1] → (hue degrees in [0,360), saturation, value)."""
    h, s, v = colorsys.rgb_to_hsv(*rgb)
    return h * 360.0, s, v


def hsv_to_rgb(hue: float, sat: float, val: float) -> RGB:
    """(hue degrees, saturation, value) → RGB in [0,1]. Any hue is accepted."""
    return colorsys.hsv_to_rgb((hue / 360.0) % 1.0, sat, val)


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert '#RRGGBB' to a float (R, G, B) triple."""
    h = hex_color.lstrip("#")
    return (int(h[0:2], 16) / 255, int(h[2:4], 16) / 255, int(h[4:6], 16) / 255)


def rgb_to_hex(rgb: RGB) -> str:
    r, g, b = (max(0, min(255, round(c * 255))) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


@dataclass
class ColorInfo:
    """A 4-slot palette with per-slot enable flags and HSV jitter amounts."""
    colors: list[RGB] = field(default_factory=lambda: [(1.0, 1.0, 1.0)] * SLOT_COUNT)
    enabled: list[bool] = field(default_factory=lambda: [True] + [False] * (SLOT_COUNT - 1))
    h_jitter: float = 0.0
    s_jitter: float = 0.0
    v_jitter: float = 0.0

    def enabled_colors(self) -> list[RGB]:
        return [c for c, on in zip(self.colors, self.enabled) if on]

    def has_jitter(self) -> bool:
        return self.h_jitter > 0 or self.s_jitter > 0 or self.v_jitter > 0

    def validate(self) -> None:
        if len(self.colors) != SLOT_COUNT or len(self.enabled) != SLOT_COUNT:
            raise ValueError(f"A palette needs exactly {SLOT_COUNT} slots")
        for name in ("h_jitter", "s_jitter", "v_jitter"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]")

    def to_dict(self) -> dict[str, Any]:
        return {
            "colors": [rgb_to_hex(c) for c in self.colors],
            "enabled": list(self.enabled),
            "h_jitter": self.h_jitter,
            "s_jitter": self.s_jitter,
            "v_jitter": self.v_jitter,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ColorInfo:
        kwargs = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}
        if "colors" in kwargs:
            kwargs["colors"] = [
                hex_to_rgb(c) if isinstance(c, str) else tuple(c) for c in kwargs["colors"]
            ]
        if "enabled" in kwargs:
            kwargs["enabled"] = [bool(e) for e in kwargs["enabled"]]
        return cls(**kwargs)


def pick_color(info: ColorInfo, rng: SketchRandom) -> RGB8:
    """
    Pick one enabled slot and jitter it in HSV space.

    Draw order: slot index, then hue, saturation, value. With no enabled
    slot the result is black and nothing is drawn; with no jitter only the
    slot index is drawn and the color skips the HSV round trip.
    """
    choices = info.enabled_colors()
    if not choices:
        return BLACK

    base = choices[rng.uniform_int(0, len(choices))]
    if not info.has_jitter():
        return to_rgb8(base)

    hue, sat, val = rgb_to_hsv(base)

    hue += (rng.uniform_float() - 0.5) * info.h_jitter * 360
    # Only overflow is folded back; a negative hue is left for hsv_to_rgb.
    if hue > 360:
        hue -= 360

    sat = _clamp01(sat + rng.uniform_float() * info.s_jitter - info.s_jitter / 2)
    val = _clamp01(val + rng.uniform_float() * info.v_jitter - info.v_jitter / 2)

    return to_rgb8(hsv_to_rgb(hue, sat, val))
