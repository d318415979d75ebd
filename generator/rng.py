"""
Deterministic random source shared by every stage of a field pass.

Backed by numpy's counter-based Philox bit generator. Raw 64-bit words are
reduced to ranges here rather than through numpy's distribution methods, so
a given seed and call sequence yields the same values on every platform and
numpy release.
"""

from __future__ import annotations

import logging
import numbers
import threading
from typing import Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

RESOLUTION = 100_000
_U64 = 1 << 64
_FLOAT_SCALE = 1.0 / (1 << 53)

Number = Union[int, float]


class SketchRandom:
    """
    Reseedable random service.

    Every public draw takes ``lock``; a pass may hold the same (re-entrant)
    lock around its whole run so no other caller can interleave draws.
    """

    def __init__(self, seed: Optional[int] = None):
        self.lock = threading.RLock()
        self.draw_count = 0
        if seed is not None:
            seed = self._check_seed(seed)
        # No seed: key from OS entropy until the first reseed.
        self._bits = np.random.Philox() if seed is None else self._keyed(seed)

    @staticmethod
    def _check_seed(seed: int) -> int:
        if not 0 <= seed < _U64:
            raise ValueError(f"Seed must be an unsigned 64-bit integer, got {seed}")
        return int(seed)

    @staticmethod
    def _keyed(seed: int) -> np.random.Philox:
        # The seed is the cipher key itself, counter at zero.
        return np.random.Philox(key=seed)

    def seed(self, seed: int) -> None:
        """Restart the stream from ``seed``."""
        seed = self._check_seed(seed)
        with self.lock:
            self._bits = self._keyed(seed)
            self.draw_count = 0
        logger.debug("Reseeded RNG with %d", seed)

    def _next_raw(self) -> int:
        return int(self._bits.random_raw())

    def uniform_int(self, low: int, high: int) -> int:
        """Uniform integer in ``[low, high)``."""
        span = high - low
        if span <= 0:
            raise ValueError(f"Empty range [{low}, {high})")
        # Reject the tail of the 64-bit space so every residue is equally likely.
        zone = _U64 - (_U64 % span)
        with self.lock:
            self.draw_count += 1
            while True:
                raw = self._next_raw()
                if raw < zone:
                    return low + raw % span

    def uniform_float(self) -> float:
        """Uniform float in ``[0, 1)`` quantized to steps of 1/RESOLUTION."""
        return self.uniform_int(0, RESOLUTION) / RESOLUTION

    def uniform_in_range(self, low: Number, high: Number) -> Number:
        """Uniform value in ``[low, high)``; integer bounds give an integer."""
        if isinstance(low, numbers.Integral) and isinstance(high, numbers.Integral):
            return self.uniform_int(int(low), int(high))
        if not high > low:
            raise ValueError(f"Empty range [{low}, {high})")
        with self.lock:
            self.draw_count += 1
            unit = (self._next_raw() >> 11) * _FLOAT_SCALE
        value = low + unit * (high - low)
        # Rounding can land exactly on ``high`` for very wide ranges.
        return value if value < high else low


# Process-wide instance; pass functions accept an ``rng`` to override it.
default_random = SketchRandom()
