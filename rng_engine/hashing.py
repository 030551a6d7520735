# rng_engine/hashing.py
"""
Fast non-cryptographic 32-bit hashes (FNV-1a and MurmurHash3 x86_32).
Useful for fingerprinting generator output; never for security.
"""
from .bit_utils import MASK32, BytesLike, rotl32

FNV32_OFFSET_BASIS = 0x811C9DC5
FNV32_PRIME = 0x01000193

_MURMUR_C1 = 0xCC9E2D51
_MURMUR_C2 = 0x1B873593


def fnv1a(data: BytesLike) -> int:
    """32-bit FNV-1a hash of data."""
    h = FNV32_OFFSET_BASIS
    for byte in bytes(data):
        h ^= byte
        h = (h * FNV32_PRIME) & MASK32
    return h


def _murmur_scramble(k: int) -> int:
    k = (k * _MURMUR_C1) & MASK32
    k = rotl32(k, 15)
    return (k * _MURMUR_C2) & MASK32


def murmur3(data: BytesLike, seed: int = 0) -> int:
    """
    32-bit MurmurHash3 (x86 variant) of data.

    Args:
        data: Bytes to hash.
        seed: 32-bit seed; larger values are masked.

    Returns:
        Unsigned 32-bit hash value.
    """
    if not isinstance(seed, int):
        raise TypeError("Seed must be an integer.")
    buf = bytes(data)
    length = len(buf)
    h1 = seed & MASK32
    n_blocks = length // 4

    for i in range(n_blocks):
        k1 = int.from_bytes(buf[i * 4:i * 4 + 4], 'little')
        h1 ^= _murmur_scramble(k1)
        h1 = rotl32(h1, 13)
        h1 = (h1 * 5 + 0xE6546B64) & MASK32

    tail = buf[n_blocks * 4:]
    k1 = 0
    if len(tail) >= 3:
        k1 ^= tail[2] << 16
    if len(tail) >= 2:
        k1 ^= tail[1] << 8
    if len(tail) >= 1:
        k1 ^= tail[0]
        h1 ^= _murmur_scramble(k1)

    # Finalization mix
    h1 ^= length & MASK32
    h1 ^= h1 >> 16
    h1 = (h1 * 0x85EBCA6B) & MASK32
    h1 ^= h1 >> 13
    h1 = (h1 * 0xC2B2AE35) & MASK32
    h1 ^= h1 >> 16
    return h1
