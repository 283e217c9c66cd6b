"""
lcg.py — Deterministic pseudo-random sequence for seeding grids

Linear congruential generator with the MMIX constants (Knuth):

    state = state * A + C  (mod 2**64)

Each draw returns the upper 32 bits of the new state, which are of much
better quality than the low bits of a plain LCG.
"""

import time

from loguru import logger

RAND_A = 6364136223846793005
RAND_C = 1442695040888963407

MASK_64 = (1 << 64) - 1


class Lcg:
    """Unbounded stream of unsigned 32-bit values from a 64-bit seed."""

    def __init__(self, seed: int):
        self._state = int(seed) & MASK_64

    @classmethod
    def new(cls, seed: int) -> "Lcg":
        return cls(seed)

    @classmethod
    def from_timestamp(cls) -> "Lcg":
        """Seed from wall-clock seconds since the Unix epoch."""
        seed = int(time.time()) & MASK_64
        logger.debug(f"Seeding LCG from timestamp: {seed}")
        return cls(seed)

    @property
    def state(self) -> int:
        return self._state

    def next_u32(self) -> int:
        self._state = (self._state * RAND_A + RAND_C) & MASK_64
        return self._state >> 32

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.next_u32()

    def __repr__(self) -> str:
        return f"Lcg(state={self._state:#018x})"
