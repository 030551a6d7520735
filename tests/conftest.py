# tests/conftest.py
import os
import pytest
from typing import List

# --- Configuration for statistical tests ---
# Use environment variables for flexibility or fall back to defaults
UNIFORMITY_TRIALS = int(os.environ.get("RNG_TEST_TRIALS", "20"))
SAMPLES_PER_TRIAL = int(os.environ.get("RNG_TEST_SAMPLES", "10000"))
# Fraction of independent chi-square trials that must pass. With a 5% false-failure
# rate per trial this leaves room for ordinary sampling noise.
MIN_PASS_FRACTION = float(os.environ.get("RNG_TEST_MIN_PASS_FRACTION", "0.8"))


@pytest.fixture(scope="session")
def uniformity_trials() -> int:
    return UNIFORMITY_TRIALS


@pytest.fixture(scope="session")
def samples_per_trial() -> int:
    return SAMPLES_PER_TRIAL


@pytest.fixture(scope="session")
def min_pass_fraction() -> float:
    return MIN_PASS_FRACTION


@pytest.fixture(scope="module")
def fixed_chacha_key() -> bytes:
    return bytes(range(32))


@pytest.fixture(scope="module")
def monotonic_sequence() -> List[float]:
    return [i / 100 for i in range(100)]
