"""
XorShift128 RNG - the random source behind every stochastic fight decision.

Every call that rolls dice (damage rolls, crits, evasion, melodies, revives,
poison throws, ...) takes an explicit Random handle. Nothing in the simulator
reads global random state, so a trial is fully reproducible from its seed.

Draws used by the fight rules:
- random_int_range(start, end): inclusive integer roll, e.g. 1..100 for
  percentage checks
- random_float(): uniform double in [0, 1) for damage rolls and crit checks
- random_boolean(): coin flip (poison throw, paladin stance change)
"""

import secrets
from typing import Optional

__all__ = [
    "XorShift128",
    "Random",
    "seed_to_long",
]

_MASK64 = 0xFFFFFFFFFFFFFFFF


class XorShift128:
    """
    XorShift128+ PRNG.

    State is two 64-bit integers (seed0, seed1), derived from a single seed
    through the MurmurHash3 finalizer so that nearby seeds give unrelated
    streams.
    """

    def __init__(self, seed: int, seed1: Optional[int] = None):
        """
        Initialize with a 64-bit seed or explicit (seed0, seed1) state.

        Args:
            seed: Either the initial seed (if seed1 is None) or seed0 state
            seed1: If provided, use (seed, seed1) as direct state values
        """
        if seed1 is not None:
            self.seed0 = seed & _MASK64
            self.seed1 = seed1 & _MASK64
        else:
            # An all-zero state would only ever produce zeros
            if seed == 0:
                seed = -0x8000000000000000
            self.seed0 = self._murmur_hash3(seed)
            self.seed1 = self._murmur_hash3(self.seed0)

    @staticmethod
    def _murmur_hash3(x: int) -> int:
        """MurmurHash3 finalizer - used for seed initialization."""
        x = x & _MASK64
        x ^= x >> 33
        x = (x * 0xff51afd7ed558ccd) & _MASK64
        x ^= x >> 33
        x = (x * 0xc4ceb9fe1a85ec53) & _MASK64
        x ^= x >> 33
        return x

    def next_long(self) -> int:
        """Generate next unsigned 64-bit value."""
        s1 = self.seed0
        s0 = self.seed1
        self.seed0 = s0

        s1 ^= (s1 << 23) & _MASK64
        self.seed1 = (s1 ^ s0 ^ (s1 >> 17) ^ (s0 >> 26)) & _MASK64

        return (self.seed0 + self.seed1) & _MASK64

    def next_int(self, bound: int) -> int:
        """Random int in [0, bound), without modulo bias."""
        if bound <= 0:
            raise ValueError("bound must be positive")

        limit = (1 << 63) - ((1 << 63) % bound)
        while True:
            bits = self.next_long() >> 1
            if bits < limit:
                return bits % bound

    def next_double(self) -> float:
        """Random double in [0, 1) with 53 bits of precision."""
        return (self.next_long() >> 11) / (1 << 53)

    def next_boolean(self) -> bool:
        """Random boolean - checks least significant bit."""
        return (self.next_long() & 1) != 0

    def get_state(self, index: int) -> int:
        """Get state value (0 = seed0, 1 = seed1)."""
        if index == 0:
            return self.seed0
        return self.seed1


class Random:
    """
    Seedable random source handed to every fighter call.

    Tracks a call counter, which makes it easy to assert in tests how many
    rolls a mechanic consumed.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize RNG with a seed.

        Args:
            seed: 64-bit seed value; None draws a fresh seed from the OS
        """
        if seed is None:
            seed = secrets.randbits(64)
        self.seed = seed
        self._rng = XorShift128(seed)
        self.counter = 0

    def random_int_range(self, start: int, end: int) -> int:
        """Random int in [start, end] INCLUSIVE."""
        self.counter += 1
        return start + self._rng.next_int(end - start + 1)

    def random_float(self) -> float:
        """Random float in [0, 1)."""
        self.counter += 1
        return self._rng.next_double()

    def random_boolean(self, chance: Optional[float] = None) -> bool:
        """
        Random boolean.

        With no argument: fair coin flip.
        With a float argument: True with probability ``chance``.
        """
        self.counter += 1
        if chance is None:
            return self._rng.next_boolean()
        return self._rng.next_double() < chance

    def copy(self) -> 'Random':
        """Create a copy with the same state; both continue identically."""
        new = Random.__new__(Random)
        new.seed = self.seed
        new._rng = XorShift128(
            self._rng.get_state(0),
            self._rng.get_state(1)
        )
        new.counter = self.counter
        return new


def seed_to_long(seed_string: str) -> int:
    """
    Convert a seed string (e.g. "ABC123XYZ") to a long value.

    Pure numeric strings are taken as plain integers. Anything else is read
    in base 35 (0-9 + A-Z without O, where O is read as 0), so that short
    human-friendly seeds can be passed on the command line.
    """
    if seed_string.lstrip('-').isdigit():
        return int(seed_string)

    characters = "0123456789ABCDEFGHIJKLMNPQRSTUVWXYZ"
    seed_string = seed_string.upper().replace("O", "0")

    result = 0
    for char in seed_string:
        remainder = characters.find(char)
        if remainder == -1:
            continue
        result *= len(characters)
        result += remainder

    return result & _MASK64
