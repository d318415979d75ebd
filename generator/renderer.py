"""
Field renderer — primitives → in-memory PIL image or SVG markup.

Bounds are y-up; both outputs map them onto a y-down pixel canvas and draw
the primitives in list order so later ones overdraw earlier ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader
from PIL import Image, ImageDraw

from generator.color import hex_to_rgb, to_rgb8
from generator.state import FieldState, ShapeKind
from config import settings

# Jinja2 environment pointing at our templates directory
_TEMPLATE_DIR = Path(__file__).parent / "templates"
_jinja_env = Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)))


@dataclass
class PixelShape:
    """A primitive mapped into pixel space."""
    kind: str
    x: float
    y: float
    side: float
    fill: str
    rgba: tuple[int, int, int, int]

    @property
    def half(self) -> float:
        return self.side / 2

    @property
    def opacity(self) -> float:
        return self.rgba[3] / 255


def _to_pixels(state: FieldState, width: int, height: int) -> list[PixelShape]:
    bounds = state.bounds
    sx = width / bounds.width
    sy = height / bounds.height
    shapes = []
    for p in state.primitives:
        r, g, b = p.color
        shapes.append(PixelShape(
            kind=p.kind.value,
            x=(p.center[0] - bounds.left) * sx,
            y=(bounds.top - p.center[1]) * sy,
            side=p.size * min(sx, sy),
            fill=f"#{r:02x}{g:02x}{b:02x}",
            rgba=(r, g, b, p.alpha),
        ))
    return shapes


def render_field(
    state: FieldState,
    width: Optional[int] = None,
    height: Optional[int] = None,
    background: Optional[str] = None,
) -> Image.Image:
    """
    Rasterize a FieldState to an RGB image with per-shape alpha blending.

    Defaults come from the canvas settings.
    """
    width = width or settings.CANVAS_WIDTH
    height = height or settings.CANVAS_HEIGHT
    bg = to_rgb8(hex_to_rgb(background or settings.BACKGROUND_COLOR))

    img = Image.new("RGB", (width, height), bg)
    draw = ImageDraw.Draw(img, "RGBA")
    for shape in _to_pixels(state, width, height):
        box = [
            shape.x - shape.half,
            shape.y - shape.half,
            shape.x + shape.half,
            shape.y + shape.half,
        ]
        if shape.kind == ShapeKind.CIRCLE.value:
            draw.ellipse(box, fill=shape.rgba)
        else:
            draw.rectangle(box, fill=shape.rgba)
    return img


def build_svg(
    state: FieldState,
    width: Optional[int] = None,
    height: Optional[int] = None,
    background: Optional[str] = None,
) -> str:
    """Render the SVG template with the field's pixel-space shapes."""
    width = width or settings.CANVAS_WIDTH
    height = height or settings.CANVAS_HEIGHT
    template = _jinja_env.get_template("field.svg.j2")
    return template.render(
        canvas_width=width,
        canvas_height=height,
        background_color=background or settings.BACKGROUND_COLOR,
        shapes=_to_pixels(state, width, height),
    )
