"""
Module for seed-material sources.
Includes an abstract interface, secure sources backed by Python's `secrets`
module and `os.urandom`, a low-grade source backed by the EntropyPool, and a
mock source for testing.
"""
import os
import secrets
from abc import ABC, abstractmethod
from typing import Optional

from .entropy_pool import EntropyPool


def _check_num_bytes(num_bytes: int) -> None:
    if not isinstance(num_bytes, int):
        raise TypeError("Number of bytes must be an integer.")
    if num_bytes < 0:
        raise ValueError("Number of bytes must be non-negative.")


class EntropySourceInterface(ABC):
    """
    Abstract Base Class for seed-material sources.
    Defines the interface for acquiring random bytes.
    """
    @abstractmethod
    def get_random_bytes(self, num_bytes: int) -> bytes:
        """
        Generates and returns a specified number of random bytes.

        Args:
            num_bytes: The number of random bytes to generate.

        Returns:
            A bytes object containing the random data.

        Raises:
            ValueError: If num_bytes is negative.
            IOError: If there's an issue fetching bytes from the source.
        """
        pass


# --- Secure sources ---
class SecretsEntropySource(EntropySourceInterface):
    """Uses Python's `secrets` module (the OS CSPRNG)."""
    def get_random_bytes(self, num_bytes: int) -> bytes:
        _check_num_bytes(num_bytes)
        try:
            return secrets.token_bytes(num_bytes)
        except Exception as e:
            raise IOError(f"Error generating random bytes using 'secrets' module: {e}")


class OsUrandomEntropySource(EntropySourceInterface):
    """Uses `os.urandom` directly."""
    def get_random_bytes(self, num_bytes: int) -> bytes:
        _check_num_bytes(num_bytes)
        try:
            return os.urandom(num_bytes)
        except Exception as e:
            raise IOError(f"Error generating random bytes from os.urandom: {e}")


# --- Low-grade source ---
class PoolEntropySource(EntropySourceInterface):
    """
    Draws bytes from an EntropyPool. Not suitable for keys; this is the fallback
    used when no secure source is available.
    """
    def __init__(self, pool: Optional[EntropyPool] = None):
        self.pool = pool if pool is not None else EntropyPool()

    def get_random_bytes(self, num_bytes: int) -> bytes:
        _check_num_bytes(num_bytes)
        try:
            return self.pool.get_bytes(num_bytes)
        except Exception as e:
            print(f"ERROR [PoolEntropySource]: Could not extract bytes from entropy pool: {e}")
            raise IOError(f"Error extracting bytes from entropy pool: {e}")


# --- Mock source (for testing) ---
class MockEntropySource(EntropySourceInterface):
    """
    Returns predictable, non-random byte sequences based on a seed byte.
    Can also be told to fail, to exercise fallback paths.
    """
    def __init__(self, seed_byte: int = 0xAA, increment: bool = True, fail: bool = False):
        """
        Args:
            seed_byte: The starting byte value (0-255).
            increment: If True, subsequent bytes increment from seed_byte.
                       If False, all bytes will be seed_byte.
            fail: If True, every request raises IOError.
        """
        if not (0 <= seed_byte <= 255):
            raise ValueError("seed_byte must be between 0 and 255.")
        self.seed_byte = seed_byte
        self.increment = increment
        self.fail = fail

    def get_random_bytes(self, num_bytes: int) -> bytes:
        _check_num_bytes(num_bytes)
        if self.fail:
            raise IOError("MockEntropySource configured to fail.")
        if self.increment:
            return bytes([(self.seed_byte + i) % 256 for i in range(num_bytes)])
        return bytes([self.seed_byte] * num_bytes)
