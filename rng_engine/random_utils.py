# rng_engine/random_utils.py
"""
Convenience helpers drawing from the best available source: the OS CSPRNG via
`secrets`, or a pool-keyed ChaCha20Generator if that source fails.
"""
from typing import MutableSequence, Optional, Sequence, TypeVar

from .bit_utils import MASK32
from .chacha_generator import ChaCha20Generator
from .entropy_sources import EntropySourceInterface, PoolEntropySource, SecretsEntropySource
from .exceptions import EmptyInputError, InvalidArgumentError
from .generators import scale_to_unit

T = TypeVar("T")


def random_bytes(count: int, source: Optional[EntropySourceInterface] = None) -> bytes:
    """
    Returns count random bytes.

    Args:
        count: Number of bytes.
        source: Preferred source; defaults to SecretsEntropySource.
    """
    if not isinstance(count, int):
        raise TypeError("Number of bytes must be an integer.")
    if count < 0:
        raise InvalidArgumentError("Number of bytes must be non-negative.")
    source = source if source is not None else SecretsEntropySource()
    try:
        return source.get_random_bytes(count)
    except IOError as e:
        print(f"Warning [random_bytes]: Preferred source failed ({e}). Falling back to ChaCha20Generator.")
        return ChaCha20Generator(entropy_source=PoolEntropySource()).next_bytes(count)


def random_int(max_exclusive: int, source: Optional[EntropySourceInterface] = None) -> int:
    """Random integer in [0, max_exclusive) from a 32-bit draw (modulo reduction, slight bias)."""
    if not isinstance(max_exclusive, int):
        raise TypeError("max_exclusive must be an integer.")
    if max_exclusive <= 0:
        raise InvalidArgumentError("max_exclusive must be a positive integer.")
    return int.from_bytes(random_bytes(4, source), 'little') % max_exclusive


def random_float(source: Optional[EntropySourceInterface] = None) -> float:
    """Random float in [0, 1) from a 32-bit draw."""
    return scale_to_unit(int.from_bytes(random_bytes(4, source), 'little'), MASK32)


def shuffle(items: MutableSequence[T], source: Optional[EntropySourceInterface] = None) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place. Returns items for chaining."""
    for i in range(len(items) - 1, 0, -1):
        j = random_int(i + 1, source)
        items[i], items[j] = items[j], items[i]
    return items


def pick(items: Sequence[T], source: Optional[EntropySourceInterface] = None) -> T:
    """Returns one element of items chosen uniformly."""
    if len(items) == 0:
        raise EmptyInputError("Cannot pick from an empty sequence.")
    return items[random_int(len(items), source)]

