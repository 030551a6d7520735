# rng_engine/generators.py
"""
The common generator contract and the numeric pseudo-random generators:
a Linear Congruential Generator (the deliberately weak baseline), the
Mersenne Twister MT19937, and XorShift128+.

None of these are suitable for cryptographic use. See chacha_generator.py for
the stream-cipher generator.
"""
import math
import time
from abc import ABC, abstractmethod
from typing import List, Optional

from .bit_utils import MASK32, MASK64
from .entropy_pool import EntropyPool
from .exceptions import InvalidArgumentError

# Largest double strictly below 1.0
MAX_UNIT_FLOAT = 1.0 - 2.0 ** -53


def scale_to_unit(value: int, divisor: int) -> float:
    """value / divisor, clamped below 1.0 (divisors of 2^k - 1 can reach it exactly)."""
    result = value / divisor
    return result if result < 1.0 else MAX_UNIT_FLOAT


class RandomGenerator(ABC):
    """
    Capability shared by every generator variant.

    Subclasses implement next(); next_int() and next_bytes() are derived from it
    so all outputs of one instance come from the same state stream.
    Instances own their state exclusively and are not safe to share across
    threads without external locking.
    """
    name = "generator"

    @abstractmethod
    def next(self) -> float:
        """Advances the state by one step and returns a float in [0, 1)."""
        pass

    def next_int(self, max_exclusive: int) -> int:
        """Returns an integer in [0, max_exclusive) as floor(next() * max_exclusive)."""
        if not isinstance(max_exclusive, int):
            raise TypeError("max_exclusive must be an integer.")
        if max_exclusive <= 0:
            raise InvalidArgumentError("max_exclusive must be a positive integer.")
        return min(math.floor(self.next() * max_exclusive), max_exclusive - 1)

    def next_bytes(self, count: int) -> bytes:
        """Returns count bytes, one next_int(256) draw per byte."""
        if not isinstance(count, int):
            raise TypeError("Number of bytes must be an integer.")
        if count < 0:
            raise InvalidArgumentError("Number of bytes must be non-negative.")
        return bytes(self.next_int(256) for _ in range(count))

    def sample(self, count: int) -> List[float]:
        """Draws count successive next() values."""
        if not isinstance(count, int):
            raise TypeError("Sample size must be an integer.")
        if count < 0:
            raise InvalidArgumentError("Sample size must be non-negative.")
        return [self.next() for _ in range(count)]


class LCGGenerator(RandomGenerator):
    """
    Linear Congruential Generator with the Numerical Recipes constants.
    Fast but trivially predictable: one output reveals the whole state.
    """
    name = "lcg"
    MULTIPLIER = 1664525
    INCREMENT = 1013904223
    MODULUS = 0x100000000

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = int(time.time() * 1000)
        if not isinstance(seed, int):
            raise TypeError("Seed must be an integer if provided.")
        self._state = seed & MASK32

    def next_uint32(self) -> int:
        """Advances the recurrence and returns the new 32-bit state."""
        self._state = (self.MULTIPLIER * self._state + self.INCREMENT) & MASK32
        return self._state

    def next(self) -> float:
        return self.next_uint32() / self.MODULUS

    def get_state(self) -> int:
        """Current 32-bit state (for analysis)."""
        return self._state

    def set_state(self, state: int) -> None:
        """Overwrites the state (for reproducibility)."""
        if not isinstance(state, int):
            raise TypeError("State must be an integer.")
        self._state = state & MASK32


class MersenneTwisterGenerator(RandomGenerator):
    """
    MT19937. Good distribution and a 2^19937 - 1 period, but 624 consecutive
    outputs are enough to reconstruct the state.
    """
    name = "mt19937"
    N = 624
    M = 397
    MATRIX_A = 0x9908B0DF
    UPPER_MASK = 0x80000000
    LOWER_MASK = 0x7FFFFFFF
    INIT_MULTIPLIER = 1812433253

    def __init__(self, seed: Optional[int] = None, entropy_pool: Optional[EntropyPool] = None):
        """
        Args:
            seed: 32-bit seed (larger values are masked). If None, 4 bytes are drawn
                  from entropy_pool, or from a private EntropyPool.
            entropy_pool: Pool to draw a seed from when seed is None.
        """
        self._mt = [0] * self.N
        self._index = self.N + 1
        if seed is None:
            pool = entropy_pool if entropy_pool is not None else EntropyPool()
            seed = int.from_bytes(pool.get_bytes(4), 'little')
        self.seed(seed)

    def seed(self, value: int) -> None:
        """Re-initializes the state array from a 32-bit seed."""
        if not isinstance(value, int):
            raise TypeError("Seed must be an integer.")
        mt = self._mt
        mt[0] = value & MASK32
        for i in range(1, self.N):
            prev = mt[i - 1]
            mt[i] = (self.INIT_MULTIPLIER * (prev ^ (prev >> 30)) + i) & MASK32
        self._index = self.N

    def _twist(self) -> None:
        mt = self._mt
        n, m = self.N, self.M
        for i in range(n):
            y = (mt[i] & self.UPPER_MASK) | (mt[(i + 1) % n] & self.LOWER_MASK)
            value = mt[(i + m) % n] ^ (y >> 1)
            if y & 1:
                value ^= self.MATRIX_A
            mt[i] = value
        self._index = 0

    def next_uint32(self) -> int:
        """Returns the next tempered 32-bit word."""
        if self._index >= self.N:
            self._twist()
        y = self._mt[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & MASK32

    def next(self) -> float:
        return scale_to_unit(self.next_uint32(), MASK32)


class XorShift128PlusGenerator(RandomGenerator):
    """
    XorShift128+ over two 64-bit words. Very fast with good statistical
    quality; linear in GF(2) apart from the final addition.
    """
    name = "xorshift128plus"
    SEED_MULTIPLIER = 0x5851F42D4C957F2D
    # Substituted for s0 when a seed leaves both halves zero (a fixed point of the recurrence)
    ZERO_STATE_REPLACEMENT = 0x9E3779B97F4A7C15

    def __init__(self, seed: Optional[int] = None, entropy_pool: Optional[EntropyPool] = None):
        """
        Args:
            seed: Integer seed. s0 = seed mod 2^64, s1 = seed * SEED_MULTIPLIER mod 2^64.
                  If None, 8 bytes are drawn from entropy_pool or a private EntropyPool.
            entropy_pool: Pool to draw a seed from when seed is None.
        """
        if seed is None:
            pool = entropy_pool if entropy_pool is not None else EntropyPool()
            seed = int.from_bytes(pool.get_bytes(8), 'little')
        if not isinstance(seed, int):
            raise TypeError("Seed must be an integer if provided.")
        self._set_state(seed & MASK64, (seed * self.SEED_MULTIPLIER) & MASK64)

    @classmethod
    def from_state(cls, s0: int, s1: int) -> "XorShift128PlusGenerator":
        """Builds a generator from explicit state halves (repairing an all-zero state)."""
        if not isinstance(s0, int) or not isinstance(s1, int):
            raise TypeError("State halves must be integers.")
        generator = cls.__new__(cls)
        generator._set_state(s0 & MASK64, s1 & MASK64)
        return generator

    def _set_state(self, s0: int, s1: int) -> None:
        if s0 == 0 and s1 == 0:
            s0 = self.ZERO_STATE_REPLACEMENT
        self._s0 = s0
        self._s1 = s1

    @property
    def state(self):
        """(s0, s1) tuple, for inspection."""
        return self._s0, self._s1

    def next_uint64(self) -> int:
        """Advances the recurrence and returns the raw 64-bit output."""
        s1 = self._s0
        s0 = self._s1
        self._s0 = s0
        s1 ^= (s1 << 23) & MASK64
        self._s1 = s1 ^ s0 ^ (s1 >> 18) ^ (s0 >> 5)
        return (self._s1 + s0) & MASK64

    def next(self) -> float:
        return scale_to_unit(self.next_uint64(), MASK64)


if __name__ == '__main__':
    print("Demonstrating numeric generators:")
    for generator in (LCGGenerator(12345), MersenneTwisterGenerator(5489), XorShift128PlusGenerator(12345)):
        values = ", ".join(f"{v:.6f}" for v in generator.sample(4))
        print(f"{generator.name:>16}: {values} | bytes {generator.next_bytes(8).hex()}")
