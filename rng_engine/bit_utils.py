# rng_engine/bit_utils.py
"""
Byte and word helpers shared by the generators and the statistical assessor:
hex conversion, constant-time comparison, 32-bit rotation and little-endian
word packing.
"""
import struct
from typing import List, Sequence, Union

from cryptography.hazmat.primitives import constant_time

from .exceptions import InvalidArgumentError

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

BytesLike = Union[bytes, bytearray, memoryview]


def to_hex(data: BytesLike) -> str:
    """Returns the lowercase hex encoding of data (two characters per byte)."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("Data must be bytes-like.")
    return bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Decodes a hex string produced by to_hex.

    Raises:
        TypeError: If hex_string is not a str.
        InvalidArgumentError: If the string has odd length or non-hex characters.
    """
    if not isinstance(hex_string, str):
        raise TypeError("Hex input must be a string.")
    if len(hex_string) % 2:
        raise InvalidArgumentError("Hex input must have an even number of characters.")
    try:
        return bytes.fromhex(hex_string)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid hex input: {e}") from e


def secure_compare(a: BytesLike, b: BytesLike) -> bool:
    """Compares two byte strings in time independent of where they differ."""
    return constant_time.bytes_eq(bytes(a), bytes(b))


def rotl32(value: int, shift: int) -> int:
    """Rotates a 32-bit word left by shift bits."""
    return ((value << shift) & MASK32) | (value >> (32 - shift))


def pack_words_le(words: Sequence[int]) -> bytes:
    """Serializes 32-bit words little-endian, masking each to 32 bits."""
    return struct.pack(f"<{len(words)}I", *(w & MASK32 for w in words))


def unpack_words_le(data: BytesLike) -> List[int]:
    """Parses little-endian 32-bit words. len(data) must be a multiple of 4."""
    if len(data) % 4:
        raise InvalidArgumentError("Word data length must be a multiple of 4 bytes.")
    return list(struct.unpack(f"<{len(data) // 4}I", bytes(data)))
