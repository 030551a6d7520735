# rng_engine/registry.py
"""Selection of a generator variant by name. The set of variants is closed."""
from enum import Enum
from typing import Optional, Union

from .bit_utils import BytesLike
from .chacha_generator import ChaCha20Generator
from .exceptions import InvalidArgumentError
from .generators import (
    LCGGenerator,
    MersenneTwisterGenerator,
    RandomGenerator,
    XorShift128PlusGenerator,
)


class GeneratorKind(str, Enum):
    LCG = "lcg"
    MT19937 = "mt19937"
    CHACHA20 = "chacha20"
    XORSHIFT128PLUS = "xorshift128plus"


_GENERATOR_CLASSES = {
    GeneratorKind.LCG: LCGGenerator,
    GeneratorKind.MT19937: MersenneTwisterGenerator,
    GeneratorKind.CHACHA20: ChaCha20Generator,
    GeneratorKind.XORSHIFT128PLUS: XorShift128PlusGenerator,
}


def create_generator(kind: Union[GeneratorKind, str],
                     seed: Optional[Union[int, BytesLike]] = None) -> RandomGenerator:
    """
    Builds a generator of the given kind.

    Args:
        kind: A GeneratorKind or its string value (e.g. "mt19937").
        seed: Integer seed for the numeric generators, 32-byte key for chacha20,
              or None to seed from an entropy source.

    Raises:
        InvalidArgumentError: If kind is not a known variant.
    """
    try:
        kind = GeneratorKind(kind)
    except ValueError:
        known = ", ".join(k.value for k in GeneratorKind)
        raise InvalidArgumentError(f"Unknown generator kind '{kind}'. Expected one of: {known}.") from None
    return _GENERATOR_CLASSES[kind](seed)
