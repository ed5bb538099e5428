"""
Alea pseudo-random number generator.

Johannes Baagøe's Alea algorithm. It is small, fast, and produces the
same sequence for the same seed on every platform, which is what makes
a generated map reproducible from its seed alone.
"""

import time
from typing import Optional, Union

_TWO_POW_32 = 0x100000000
_TWO_POW_MINUS_32 = 2.3283064365386963e-10


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


def _make_mash():
    mash_n = 0xEFC8249D

    def mash(data) -> float:
        nonlocal mash_n
        for char in str(data):
            mash_n = mash_n + ord(char)
            h = 0.02519603282416938 * mash_n
            mash_n = _uint32(h)
            h -= mash_n
            h *= mash_n
            mash_n = _uint32(h)
            h -= mash_n
            mash_n += h * _TWO_POW_32
        return _uint32(mash_n) * _TWO_POW_MINUS_32

    return mash


class AleaPRNG:
    """
    Seedable random source used by the region generator.

    Anything with a ``random()`` method returning a float in [0, 1) can
    stand in for it, e.g. ``random.Random``.
    """

    def __init__(self, seed):
        """Initialize with a seed string or number."""
        self.seed = str(seed)
        self.call_count = 0

        mash = _make_mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(self.seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(self.seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(self.seed)
        if self.s2 < 0:
            self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * _TWO_POW_MINUS_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2


def new_seed() -> str:
    """Seed derived from the current time."""
    return str(int(time.time() * 1000))


def create_prng(seed: Optional[Union[str, int]] = None) -> AleaPRNG:
    """
    Create a fresh Alea PRNG.

    Map generation never shares a PRNG between runs; each run builds its
    own from a seed and passes it explicitly to the region generator.

    Args:
        seed: Seed string or number; a time-based seed is used when omitted

    Returns:
        AleaPRNG instance
    """
    if seed is None or seed == "":
        seed = new_seed()
    return AleaPRNG(seed)
