import unittest

from rng_engine.chacha_generator import ChaCha20Generator
from rng_engine.exceptions import InvalidArgumentError
from rng_engine.generators import (
    LCGGenerator,
    MersenneTwisterGenerator,
    RandomGenerator,
    XorShift128PlusGenerator,
)
from rng_engine.registry import GeneratorKind, create_generator


class TestCreateGenerator(unittest.TestCase):
    def test_each_kind_builds_its_class(self):
        expected = {
            GeneratorKind.LCG: LCGGenerator,
            GeneratorKind.MT19937: MersenneTwisterGenerator,
            GeneratorKind.CHACHA20: ChaCha20Generator,
            GeneratorKind.XORSHIFT128PLUS: XorShift128PlusGenerator,
        }
        for kind, cls in expected.items():
            generator = create_generator(kind)
            self.assertIsInstance(generator, cls)
            self.assertIsInstance(generator, RandomGenerator)
            self.assertEqual(generator.name, kind.value)

    def test_string_names_accepted(self):
        self.assertIsInstance(create_generator("mt19937", 1), MersenneTwisterGenerator)
        self.assertIsInstance(create_generator("xorshift128plus", 1), XorShift128PlusGenerator)

    def test_seed_is_passed_through(self):
        self.assertEqual(create_generator("lcg", 12345).sample(4), LCGGenerator(12345).sample(4))
        self.assertEqual(create_generator(GeneratorKind.MT19937, 9).sample(4),
                         MersenneTwisterGenerator(9).sample(4))
        key = bytes(range(32))
        self.assertEqual(create_generator("chacha20", key).next_bytes(32),
                         ChaCha20Generator(key=key).next_bytes(32))

    def test_chacha_rejects_integer_seed(self):
        with self.assertRaises(TypeError):
            create_generator("chacha20", 42)

    def test_unknown_kind(self):
        with self.assertRaisesRegex(InvalidArgumentError, "Unknown generator kind 'pcg64'"):
            create_generator("pcg64")
        with self.assertRaises(ValueError):
            create_generator("")


if __name__ == '__main__':
    unittest.main()
