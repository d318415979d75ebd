"""Shared fixtures: stand-ins for the random service and a reference Philox stream."""

import threading

import pytest

from generator.rng import SketchRandom


class ScriptedRandom:
    """
    Replays queued values and records every call in order.

    Empty queues fall back to ``low`` for integers and 0.0 for floats.
    """

    def __init__(self, ints=None, floats=None):
        self.lock = threading.RLock()
        self.ints = list(ints or [])
        self.floats = list(floats or [])
        self.calls = []

    def seed(self, seed):
        self.calls.append(("seed", seed))

    def uniform_int(self, low, high):
        self.calls.append(("int", low, high))
        return self.ints.pop(0) if self.ints else low

    def uniform_float(self):
        self.calls.append(("float",))
        return self.floats.pop(0) if self.floats else 0.0


@pytest.fixture
def scripted():
    return ScriptedRandom


MASK = (1 << 64) - 1


def philox4x64_10(counter, key):
    """Reference Philox4x64-10 block (Random123 constants)."""
    c0, c1, c2, c3 = counter
    k0, k1 = key
    for r in range(10):
        if r:
            k0 = (k0 + 0x9E3779B97F4A7C15) & MASK
            k1 = (k1 + 0xBB67AE8584CAA73B) & MASK
        p0 = 0xD2E7470EE14C6C93 * c0
        p1 = 0xCA5A826395121157 * c2
        c0, c1, c2, c3 = (p1 >> 64) ^ c1 ^ k0, p1 & MASK, (p0 >> 64) ^ c3 ^ k1, p0 & MASK
    return [c0, c1, c2, c3]


def reference_words(seed, blocks):
    """Raw words for a seed used as the key; the counter is bumped before each block."""
    words = []
    for block in range(1, blocks + 1):
        words.extend(philox4x64_10((block, 0, 0, 0), (seed, 0)))
    return words


class FixedWords:
    """Bit generator stand-in that replays fixed raw words."""

    def __init__(self, words):
        self.words = list(words)

    def random_raw(self):
        return self.words.pop(0)


class ReplayRandom(SketchRandom):
    """The real service with its bit generator swapped for fixed words on reseed."""

    def __init__(self, words):
        super().__init__(seed=0)
        self.words = list(words)

    def seed(self, seed):
        with self.lock:
            self._bits = FixedWords(self.words)
            self.draw_count = 0


@pytest.fixture
def philox_words():
    return reference_words


@pytest.fixture
def replaying():
    return ReplayRandom
