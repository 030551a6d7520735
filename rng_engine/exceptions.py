# rng_engine/exceptions.py
"""
Error taxonomy shared by the generators, the entropy pool and the statistical
assessor. Every concrete error also subclasses ValueError so callers written against plain
ValueError checks keep working.
"""


class RandomnessError(Exception):
    """Base class for all errors raised by rng_engine and rng_assessment."""
    pass


class InvalidArgumentError(RandomnessError, ValueError):
    """A numeric argument is out of range (e.g. non-positive bound, negative count)."""
    pass


class EmptyInputError(RandomnessError, ValueError):
    """A statistic was requested over zero-length data."""
    pass


class DegenerateInputError(RandomnessError, ValueError):
    """The data makes a test undefined (e.g. zero variance in the runs test)."""
    pass


class SeedError(RandomnessError, ValueError):
    """A seed, key or nonce has the wrong shape for the generator."""
    pass
