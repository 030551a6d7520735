# rng_assessment/statistics.py
"""
Pure statistical functions for judging how close a sample is to uniform
randomness: descriptive statistics, Shannon entropy, a chi-square uniformity
test, the Wald-Wolfowitz runs test, serial correlation, a Monte Carlo pi
estimate and a bit-balance test.

No function keeps state or mutates its input.
"""
import math
from collections import Counter
from typing import Sequence, Union

from scipy import stats as sp_stats

from rng_engine.exceptions import DegenerateInputError, EmptyInputError, InvalidArgumentError
from .models import BitFrequencyResult, ChiSquareResult, MonteCarloPiResult, RunsTestResult

ByteData = Union[bytes, bytearray, memoryview, Sequence[int]]

SIGNIFICANCE_LEVEL = 0.05
RUNS_Z_CRITICAL = 1.96  # two-sided, 95%
DEFAULT_CHI_SQUARE_BUCKETS = 10

# Abramowitz & Stegun 7.1.26 coefficients for erf
_AS_P = 0.3275911
_AS_A1 = 0.254829592
_AS_A2 = -0.284496736
_AS_A3 = 1.421413741
_AS_A4 = -1.453152027
_AS_A5 = 1.061405429


def _require_data(data, what: str = "data") -> int:
    n = len(data)
    if n == 0:
        raise EmptyInputError(f"Cannot compute statistics over empty {what}.")
    return n


# --- Descriptive statistics ---
def mean(data: Sequence[float]) -> float:
    n = _require_data(data)
    return math.fsum(data) / n


def variance(data: Sequence[float]) -> float:
    """Population variance (divides by N)."""
    n = _require_data(data)
    m = math.fsum(data) / n
    return math.fsum((x - m) ** 2 for x in data) / n


def std_dev(data: Sequence[float]) -> float:
    return math.sqrt(variance(data))


def median(data: Sequence[float]) -> float:
    """Median of a sorted copy; the mean of the two middle values for even N."""
    n = _require_data(data)
    ordered = sorted(data)
    mid = n // 2
    if n % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def floats_to_bytes(data: Sequence[float]) -> bytes:
    """Maps floats in [0, 1) to bytes as floor(x * 256) mod 256."""
    return bytes(math.floor(x * 256) % 256 for x in data)


# --- Entropy ---
def shannon_entropy(data: ByteData) -> float:
    """
    Shannon entropy of a byte sequence in bits per byte (0.0 to 8.0).

    Raises:
        EmptyInputError: If data is empty.
        InvalidArgumentError: If a value is outside 0-255.
    """
    n = _require_data(data, "byte data")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        if any(not 0 <= value <= 255 for value in data):
            raise InvalidArgumentError("Byte values must be in the range 0-255.")
    h = 0.0
    for count in Counter(bytes(data)).values():
        p = count / n
        h -= p * math.log2(p)
    return h


# --- Chi-square ---
def normal_cdf(x: float) -> float:
    """Standard normal CDF via the Abramowitz-Stegun erf approximation (|error| < 1.5e-7)."""
    sign = -1.0 if x < 0 else 1.0
    x = abs(x) / math.sqrt(2.0)
    t = 1.0 / (1.0 + _AS_P * x)
    y = 1.0 - (((((_AS_A5 * t + _AS_A4) * t) + _AS_A3) * t + _AS_A2) * t + _AS_A1) * t * math.exp(-x * x)
    return 0.5 * (1.0 + sign * y)


def chi_square_p_value(statistic: float, degrees_of_freedom: int) -> float:
    """Upper-tail p-value via the Wilson-Hilferty cube-root normal approximation."""
    if degrees_of_freedom <= 0:
        return 1.0
    df = degrees_of_freedom
    z = (statistic / df) ** (1.0 / 3.0) - (1.0 - 2.0 / (9.0 * df))
    standardized = z / math.sqrt(2.0 / (9.0 * df))
    return 1.0 - normal_cdf(standardized)


def chi_square_uniformity(data: Sequence[float], buckets: int = DEFAULT_CHI_SQUARE_BUCKETS) -> ChiSquareResult:
    """
    Chi-square goodness-of-fit against a uniform distribution.

    The range [min, max] of the data is split into `buckets` equal-width bins
    (a range of 1 is substituted when all values are equal). The test passes iff
    the approximate p-value exceeds 0.05. The exact p-value is reported alongside
    but does not affect the outcome.

    Args:
        data: Sample values.
        buckets: Number of bins (>= 1).

    Returns:
        A ChiSquareResult.
    """
    if not isinstance(buckets, int):
        raise TypeError("buckets must be an integer.")
    if buckets < 1:
        raise InvalidArgumentError("buckets must be a positive integer.")
    n = _require_data(data)

    low = min(data)
    high = max(data)
    span = (high - low) or 1
    counts = [0] * buckets
    for value in data:
        index = min(math.floor((value - low) / span * buckets), buckets - 1)
        counts[index] += 1

    expected = n / buckets
    statistic = math.fsum((observed - expected) ** 2 / expected for observed in counts)
    df = buckets - 1
    if df > 0:
        exact_p_value = float(sp_stats.chi2.sf(statistic, df))
        critical_value = float(sp_stats.chi2.ppf(1.0 - SIGNIFICANCE_LEVEL, df))
    else:
        exact_p_value = 1.0
        critical_value = 0.0
    p_value = chi_square_p_value(statistic, df)

    return ChiSquareResult(
        statistic=statistic,
        p_value=p_value,
        exact_p_value=exact_p_value,
        degrees_of_freedom=df,
        critical_value=critical_value,
        buckets=tuple(counts),
        expected=expected,
        is_random=p_value > SIGNIFICANCE_LEVEL,
    )


# --- Runs test ---
def runs_test(data: Sequence[float]) -> RunsTestResult:
    """
    Wald-Wolfowitz runs test around the median.

    Values >= median count as "above". The sequence is read in the order given.

    Raises:
        EmptyInputError: If data is empty.
        DegenerateInputError: If the run-count variance is zero (e.g. every value
                              lands on the same side of the median).
    """
    n = _require_data(data)
    m = median(data)
    signs = [1 if x >= m else 0 for x in data]

    runs = 1
    for previous, current in zip(signs, signs[1:]):
        if current != previous:
            runs += 1

    n1 = sum(signs)
    n2 = n - n1
    if n < 2:
        raise DegenerateInputError("Runs test needs at least two values.")
    expected_runs = (2 * n1 * n2) / n + 1
    run_variance = (2 * n1 * n2 * (2 * n1 * n2 - n)) / (n * n * (n - 1))
    if run_variance <= 0:
        raise DegenerateInputError(
            f"Runs test is undefined: zero variance ({n1} values above, {n2} below the median)."
        )
    z_score = (runs - expected_runs) / math.sqrt(run_variance)

    return RunsTestResult(
        runs=runs,
        expected_runs=expected_runs,
        variance=run_variance,
        z_score=z_score,
        n_above=n1,
        n_below=n2,
        is_random=abs(z_score) < RUNS_Z_CRITICAL,
    )


# --- Supplementary tests ---
def serial_correlation(data: Sequence[float]) -> float:
    """
    Lag-1 serial correlation coefficient. Returns 0.0 for fewer than two values.

    Raises:
        DegenerateInputError: If all values are equal.
    """
    if len(data) < 2:
        return 0.0
    m = mean(data)
    numerator = math.fsum((data[i] - m) * (data[i + 1] - m) for i in range(len(data) - 1))
    denominator = math.fsum((x - m) ** 2 for x in data)
    if denominator == 0:
        raise DegenerateInputError("Serial correlation is undefined for constant data.")
    return numerator / denominator


def monte_carlo_pi(data: Sequence[float]) -> MonteCarloPiResult:
    """Estimates pi from consecutive pairs mapped to [-1, 1]^2; an odd trailing value is ignored."""
    pairs = len(data) // 2
    if pairs == 0:
        raise EmptyInputError("Monte Carlo estimate needs at least one (x, y) pair.")
    in_circle = 0
    for i in range(pairs):
        x = data[2 * i] * 2 - 1
        y = data[2 * i + 1] * 2 - 1
        if x * x + y * y <= 1:
            in_circle += 1
    estimate = in_circle / pairs * 4
    return MonteCarloPiResult(
        estimate=estimate,
        error=abs(estimate - math.pi),
        points_in_circle=in_circle,
        total_points=pairs,
    )


def bit_frequency_test(data: ByteData) -> BitFrequencyResult:
    """Counts one and zero bits; balanced iff the ratio is within 3/sqrt(bits) of 0.5."""
    _require_data(data, "byte data")
    raw = bytes(data)
    ones = sum(bin(byte).count("1") for byte in raw)
    total_bits = len(raw) * 8
    ratio = ones / total_bits
    return BitFrequencyResult(
        ones=ones,
        zeros=total_bits - ones,
        ratio=ratio,
        is_balanced=abs(ratio - 0.5) < 3 / math.sqrt(total_bits),
    )
