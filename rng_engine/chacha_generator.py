# rng_engine/chacha_generator.py
"""
Provides the stream-cipher generator: a ChaCha20 keystream (20 rounds, 32-bit
block counter carrying into the first nonce word) exposed through the common
generator contract. This is the only generator here intended to be
unpredictable from its output.
"""
from typing import List, Optional, Sequence, Tuple

from .bit_utils import MASK32, BytesLike, pack_words_le, rotl32, unpack_words_le
from .entropy_pool import EntropyPool
from .entropy_sources import EntropySourceInterface, SecretsEntropySource
from .exceptions import InvalidArgumentError, SeedError
from .generators import RandomGenerator, scale_to_unit

# "expand 32-byte k" as four little-endian words
CHACHA_CONSTANTS = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)
KEY_SIZE_BYTES = 32
NONCE_SIZE_BYTES = 12
BLOCK_SIZE_BYTES = 64
DOUBLE_ROUNDS = 10

COUNTER_WORD = 12
COLUMN_ROUNDS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
DIAGONAL_ROUNDS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))


def quarter_round(x: List[int], a: int, b: int, c: int, d: int) -> None:
    """ChaCha add-rotate-xor quarter-round, applied in place to x."""
    x[a] = (x[a] + x[b]) & MASK32
    x[d] = rotl32(x[d] ^ x[a], 16)
    x[c] = (x[c] + x[d]) & MASK32
    x[b] = rotl32(x[b] ^ x[c], 12)
    x[a] = (x[a] + x[b]) & MASK32
    x[d] = rotl32(x[d] ^ x[a], 8)
    x[c] = (x[c] + x[d]) & MASK32
    x[b] = rotl32(x[b] ^ x[c], 7)


def chacha_block(state: Sequence[int]) -> bytes:
    """
    Runs the 20-round block function over a 16-word state.

    Returns:
        The 64-byte keystream block: (rounds(state) + state) serialized little-endian.
    """
    if len(state) != 16:
        raise InvalidArgumentError("ChaCha state must have exactly 16 words.")
    working = list(state)
    for _ in range(DOUBLE_ROUNDS):
        for a, b, c, d in COLUMN_ROUNDS:
            quarter_round(working, a, b, c, d)
        for a, b, c, d in DIAGONAL_ROUNDS:
            quarter_round(working, a, b, c, d)
    return pack_words_le([(w + s) & MASK32 for w, s in zip(working, state)])


def _draw_key_material(entropy_source: Optional[EntropySourceInterface]) -> Tuple[bytes, bytes]:
    """Key and nonce from a secure source, falling back to the low-grade pool."""
    source = entropy_source if entropy_source is not None else SecretsEntropySource()
    needed = KEY_SIZE_BYTES + NONCE_SIZE_BYTES
    try:
        material = source.get_random_bytes(needed)
        if len(material) != needed:
            raise IOError(f"Source returned {len(material)} bytes, expected {needed}.")
    except IOError as e:
        print(f"Warning [ChaCha20Generator]: Secure entropy source failed ({e}). "
              f"Falling back to EntropyPool for key material.")
        material = EntropyPool().get_bytes(needed)
    return material[:KEY_SIZE_BYTES], material[KEY_SIZE_BYTES:]


class ChaCha20Generator(RandomGenerator):
    """
    ChaCha20 keystream generator.

    Words 0-3 hold the constants, 4-11 the key, 12 the block counter (starting at 0)
    and 13-15 the nonce. For a given key and nonce the output equals the RFC 7539
    keystream starting at block counter 0.
    """
    name = "chacha20"

    def __init__(self,
                 key: Optional[BytesLike] = None,
                 nonce: Optional[BytesLike] = None,
                 entropy_source: Optional[EntropySourceInterface] = None):
        """
        Args:
            key: 32-byte key. If None, key and nonce are drawn from entropy_source
                 (default: SecretsEntropySource), or from an EntropyPool if that fails.
            nonce: 12-byte nonce. Defaults to all zeros when a key is given, so the
                   output is fully determined by the key.
            entropy_source: Source used when no key is given.
        """
        if key is not None:
            if not isinstance(key, (bytes, bytearray)):
                raise TypeError("Key must be bytes if provided.")
            if len(key) != KEY_SIZE_BYTES:
                raise SeedError(f"Key must be a {KEY_SIZE_BYTES}-byte string if provided.")
            key = bytes(key)
            if nonce is None:
                nonce = bytes(NONCE_SIZE_BYTES)
        else:
            key, drawn_nonce = _draw_key_material(entropy_source)
            if nonce is None:
                nonce = drawn_nonce

        if not isinstance(nonce, (bytes, bytearray)):
            raise TypeError("Nonce must be bytes if provided.")
        if len(nonce) != NONCE_SIZE_BYTES:
            raise SeedError(f"Nonce must be a {NONCE_SIZE_BYTES}-byte string if provided.")

        self.key = key
        self.nonce = bytes(nonce)
        self._state = list(CHACHA_CONSTANTS) + unpack_words_le(self.key) + [0] + unpack_words_le(self.nonce)
        self._buffer = bytes(BLOCK_SIZE_BYTES)
        self._position = BLOCK_SIZE_BYTES

    @property
    def block_counter(self) -> int:
        """Counter of the next block to be generated (word 12)."""
        return self._state[COUNTER_WORD]

    def _refill(self) -> None:
        self._buffer = chacha_block(self._state)
        state = self._state
        state[COUNTER_WORD] = (state[COUNTER_WORD] + 1) & MASK32
        if state[COUNTER_WORD] == 0:
            state[COUNTER_WORD + 1] = (state[COUNTER_WORD + 1] + 1) & MASK32
        self._position = 0

    def next_byte(self) -> int:
        """Consumes one keystream byte."""
        if self._position >= BLOCK_SIZE_BYTES:
            self._refill()
        byte = self._buffer[self._position]
        self._position += 1
        return byte

    def next_bytes(self, count: int) -> bytes:
        """Returns the next count keystream bytes."""
        if not isinstance(count, int):
            raise TypeError("Number of bytes must be an integer.")
        if count < 0:
            raise InvalidArgumentError("Number of bytes must be non-negative.")

        output = bytearray()
        while len(output) < count:
            if self._position >= BLOCK_SIZE_BYTES:
                self._refill()
            take = min(count - len(output), BLOCK_SIZE_BYTES - self._position)
            output.extend(self._buffer[self._position:self._position + take])
            self._position += take
        return bytes(output)

    def next_uint32(self) -> int:
        """Four keystream bytes as a little-endian word."""
        return int.from_bytes(self.next_bytes(4), 'little')

    def next(self) -> float:
        return scale_to_unit(self.next_uint32(), MASK32)


if __name__ == '__main__':
    print("\n--- ChaCha20Generator Demonstration ---")
    seeded = ChaCha20Generator(key=bytes(range(32)))
    print(f"Seeded keystream (32B): {seeded.next_bytes(32).hex()}")
    reseeded = ChaCha20Generator(key=bytes(range(32)))
    print(f"Re-seeded keystream   : {reseeded.next_bytes(32).hex()} (should match)")
    print(f"Unseeded floats       : {[round(v, 6) for v in ChaCha20Generator().sample(4)]}")
