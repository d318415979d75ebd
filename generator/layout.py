"""Grid geometry and draw-order shuffling for a field pass."""

from __future__ import annotations

from dataclasses import dataclass

from generator.rng import SketchRandom

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned bounds with the y axis pointing up."""
    left: float
    right: float
    bottom: float
    top: float

    @classmethod
    def centered(cls, width: float, height: float) -> Rect:
        """Window-style rect of the given size centered on the origin."""
        return cls(-width / 2, width / 2, -height / 2, height / 2)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom


def cell_dimensions(bounds: Rect, grid_count_x: int, grid_count_y: int) -> tuple[float, float]:
    assert grid_count_x >= 1 and grid_count_y >= 1, "grid counts must be >= 1"
    return bounds.width / grid_count_x, bounds.height / grid_count_y


def shape_size_for(bounds: Rect, grid_count_x: int, grid_count_y: int, base_size: float) -> float:
    """Nominal shape size shared by every cell: the smaller cell side × base_size."""
    cell_w, cell_h = cell_dimensions(bounds, grid_count_x, grid_count_y)
    return min(cell_w, cell_h) * base_size


def grid_centers(bounds: Rect, grid_count_x: int, grid_count_y: int) -> list[Point]:
    """
    Cell centers tiling ``bounds``, x outer and y inner.

    The first center sits half a cell in from the bottom-left corner.
    """
    cell_w, cell_h = cell_dimensions(bounds, grid_count_x, grid_count_y)
    positions: list[Point] = []
    for ix in range(grid_count_x):
        x = bounds.left + cell_w * (ix + 0.5)
        for iy in range(grid_count_y):
            positions.append((x, bounds.bottom + cell_h * (iy + 0.5)))
    return positions


def shuffle_positions(positions: list[Point], rng: SketchRandom) -> list[Point]:
    """
    Return a reordered copy of ``positions``.

    Swap targets come from ``[i, n - 1)``, so the last slot is never picked
    as a target; the draw sequence depends on that bound.
    """
    result = list(positions)
    n = len(result)
    for i in range(n - 1):
        swap_index = rng.uniform_int(i, n - 1)
        result[i], result[swap_index] = result[swap_index], result[i]
    return result
