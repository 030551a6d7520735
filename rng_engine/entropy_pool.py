"""
Module for the low-grade Entropy Pool.
The pool keeps a bounded FIFO of byte samples (timing jitter and a weak numeric
source) and mixes the whole pool into output bytes on demand. It only seeds the
non-secure generators, or the stream-cipher generator when no secure source is
available. Access is guarded by a lock so a pool may be shared between threads.
"""
import random
import threading
import time
from collections import deque
from typing import Callable, Optional

from .exceptions import InvalidArgumentError

DEFAULT_POOL_CAPACITY = 256
FRESH_SAMPLES_PER_EXTRACTION = 16  # (timing, numeric) pairs folded in per get_bytes call
MIX_MULTIPLIER = 31
MIX_INCREMENT = 17
TIMING_PRIME = 7919


def _perf_counter_ms() -> float:
    return time.perf_counter() * 1000.0


class EntropyPool:
    """
    Bounded mixing buffer for seeding material.
    State carries forward between extractions: the pool is never cleared, and each
    extraction mixes its entire live contents.
    """
    def __init__(self,
                 capacity: int = DEFAULT_POOL_CAPACITY,
                 timing_source: Optional[Callable[[], float]] = None,
                 numeric_source: Optional[Callable[[], int]] = None):
        """
        Initializes the entropy pool.

        Args:
            capacity: Maximum number of byte samples held; oldest are evicted first.
            timing_source: Callable returning a high-resolution time in milliseconds.
                           Defaults to time.perf_counter scaled to ms.
            numeric_source: Callable returning a byte value (0-255) from a weak source.
                            Defaults to the stdlib `random` module.
        """
        if not isinstance(capacity, int):
            raise TypeError("capacity must be an integer.")
        if capacity <= 0:
            raise InvalidArgumentError("capacity must be a positive integer.")

        self.capacity = capacity
        self._timing_source = timing_source or _perf_counter_ms
        self._numeric_source = numeric_source or (lambda: random.randrange(256))
        self._pool = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pool)

    def collect_timing(self) -> int:
        """Folds one timer reading into a byte."""
        t = self._timing_source()
        return int((t * 1000000) % 256) ^ int((t * TIMING_PRIME) % 256)

    def collect_numeric(self) -> int:
        """Draws one byte from the weak numeric source."""
        return int(self._numeric_source()) & 0xFF

    def add_entropy(self, byte: int) -> None:
        """Appends a sample (masked to 8 bits), evicting the oldest if the pool is full."""
        if not isinstance(byte, int):
            raise TypeError("Entropy sample must be an integer.")
        with self._lock:
            self._pool.append(byte & 0xFF)

    def snapshot(self) -> bytes:
        """Returns a copy of the current pool contents, oldest first."""
        with self._lock:
            return bytes(self._pool)

    def get_bytes(self, count: int) -> bytes:
        """
        Extracts mixed bytes from the pool.

        Fresh timing and numeric samples are folded in first; each output byte is
        then a position-weighted multiply-xor accumulation over the whole pool,
        xored with one more timing sample.

        Args:
            count: Number of bytes to return.

        Returns:
            A bytes object of length count. Returns b"" if count is 0.
        """
        if not isinstance(count, int):
            raise TypeError("Number of bytes must be an integer.")
        if count < 0:
            raise InvalidArgumentError("Number of bytes must be non-negative.")
        if count == 0:
            return b""

        for _ in range(FRESH_SAMPLES_PER_EXTRACTION):
            self.add_entropy(self.collect_timing())
            self.add_entropy(self.collect_numeric())

        result = bytearray(count)
        with self._lock:
            for i in range(count):
                mixed = 0
                for j, sample in enumerate(self._pool):
                    mixed ^= sample * (j + i + 1)
                    mixed = (mixed * MIX_MULTIPLIER + MIX_INCREMENT) & 0xFF
                result[i] = mixed ^ self.collect_timing()
        return bytes(result)


if __name__ == '__main__':
    print("\n--- EntropyPool Demonstration ---")
    pool = EntropyPool(capacity=64)
    for i in range(3):
        chunk = pool.get_bytes(16)
        print(f"Sample {i+1} (pool size {len(pool)}): {chunk.hex()}")
