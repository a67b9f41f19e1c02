"""
Deterministic RNG: seeded float stream shared by the matcher and the composer.

The generator reproduces the reference stream bit-for-bit so that recorded
seeds keep producing the same outfit and pose.
"""

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

MASK_32 = 0xFFFFFFFF
GOLDEN_STEP = 0x6D2B79F5
TWO_POW_32 = 4294967296


class EmptySelectionError(ValueError):
    """Raised when picking from an empty candidate sequence."""
    pass


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & MASK_32


class Mulberry32:
    """
    Counter-based 32-bit generator.

    The state word is overwritten by the mixing steps on every draw (the
    reference variant), so the state is not a plain counter after the first
    draw. All arithmetic is modulo 2^32.
    """

    def __init__(self, seed: int):
        self.state = int(seed) & MASK_32

    def random(self) -> float:
        """Next float in [0, 1)."""
        t = (self.state + GOLDEN_STEP) & MASK_32
        t = _imul(t ^ (t >> 15), t | 1)
        t = (t ^ ((t + _imul(t ^ (t >> 7), t | 61)) & MASK_32)) & MASK_32
        self.state = t
        return ((t ^ (t >> 14)) & MASK_32) / TWO_POW_32

    __call__ = random


def uniform_between(rng: Mulberry32, lo: float, hi: float) -> float:
    """lo + (hi - lo) * next draw."""
    return lo + (hi - lo) * rng.random()


def pick_one(rng: Mulberry32, seq: Sequence[T]) -> T:
    """Pick seq[floor(next * len)]."""
    if len(seq) == 0:
        raise EmptySelectionError("Cannot pick from an empty sequence")
    return seq[math.floor(rng.random() * len(seq))]
