# rng_assessment/quality.py
"""
Composite randomness scoring built on the functions in statistics.py.

assess() produces a 0-100 score from three sub-tests; full_report() runs the
five-test battery and returns every intermediate result as a record.
"""
from typing import Optional, Sequence

from rng_engine.exceptions import DegenerateInputError
from .models import AssessmentResult, FullReport, RunsTestResult
from . import statistics as st

# Score weights. Each passing sub-test adds its weight; moderate entropy adds half.
CHI_SQUARE_WEIGHT = 33
RUNS_WEIGHT = 33
ENTROPY_WEIGHT = 34
MODERATE_ENTROPY_WEIGHT = 17

HIGH_ENTROPY_THRESHOLD = 7.5
MODERATE_ENTROPY_THRESHOLD = 6.5

QUALITY_BANDS = ((90, "excellent"), (70, "good"), (50, "fair"))

SERIAL_CORRELATION_LIMIT = 0.05
MONTE_CARLO_MIN_SAMPLES = 100


def entropy_level(entropy: float) -> str:
    if entropy > HIGH_ENTROPY_THRESHOLD:
        return "high"
    if entropy > MODERATE_ENTROPY_THRESHOLD:
        return "moderate"
    return "low"


def quality_label(score: int) -> str:
    for minimum, label in QUALITY_BANDS:
        if score >= minimum:
            return label
    return "poor"


def _runs_or_none(data: Sequence[float]) -> Optional[RunsTestResult]:
    try:
        return st.runs_test(data)
    except DegenerateInputError:
        return None


def assess(data: Sequence[float]) -> AssessmentResult:
    """
    Scores a sample of floats in [0, 1).

    Chi-square and entropy depend only on the multiset of values, so reordering
    the input cannot change them. The runs test reads the input in the order
    given; a degenerate runs test counts as a failure.

    Raises:
        EmptyInputError: If data is empty.
    """
    chi = st.chi_square_uniformity(data)
    runs = _runs_or_none(data)
    entropy = st.shannon_entropy(st.floats_to_bytes(data))
    level = entropy_level(entropy)

    score = 0
    if chi.is_random:
        score += CHI_SQUARE_WEIGHT
    if runs is not None and runs.is_random:
        score += RUNS_WEIGHT
    if level == "high":
        score += ENTROPY_WEIGHT
    elif level == "moderate":
        score += MODERATE_ENTROPY_WEIGHT

    return AssessmentResult(
        score=score,
        quality=quality_label(score),
        chi_square=chi,
        runs=runs,
        entropy=entropy,
        entropy_level=level,
    )


def full_report(data: Sequence[float]) -> FullReport:
    """
    Runs the five-test battery: chi-square uniformity, runs, lag-1 serial
    correlation, byte entropy and bit balance. The Monte Carlo pi estimate is
    included for samples of at least 100 values but is not counted.

    Verdict: "high" with 4+ passes, "acceptable" with 3, otherwise "poor".
    """
    byte_data = st.floats_to_bytes(data)
    chi = st.chi_square_uniformity(data)
    runs = _runs_or_none(data)
    try:
        correlation = st.serial_correlation(data)
    except DegenerateInputError:
        correlation = None
    entropy = st.shannon_entropy(byte_data)
    bit_frequency = st.bit_frequency_test(byte_data)
    pi = st.monte_carlo_pi(data) if len(data) >= MONTE_CARLO_MIN_SAMPLES else None

    outcomes = [
        chi.is_random,
        runs is not None and runs.is_random,
        correlation is not None and abs(correlation) < SERIAL_CORRELATION_LIMIT,
        entropy > HIGH_ENTROPY_THRESHOLD,
        bit_frequency.is_balanced,
    ]
    passed = sum(outcomes)
    if passed >= 4:
        verdict = "high"
    elif passed >= 3:
        verdict = "acceptable"
    else:
        verdict = "poor"

    return FullReport(
        sample_size=len(data),
        mean=st.mean(data),
        std_dev=st.std_dev(data),
        minimum=min(data),
        maximum=max(data),
        chi_square=chi,
        runs=runs,
        serial_correlation=correlation,
        entropy=entropy,
        bit_frequency=bit_frequency,
        monte_carlo_pi=pi,
        tests_passed=passed,
        verdict=verdict,
    )


if __name__ == '__main__':
    from rng_engine.registry import GeneratorKind, create_generator

    print("\n--- Randomness Assessment Demonstration ---")
    for kind in GeneratorKind:
        samples = create_generator(kind, seed=None).sample(10000)
        result = assess(samples)
        report = full_report(samples)
        print(f"{kind.value:>16}: score {result.score:3d} ({result.quality}), "
              f"entropy {result.entropy:.4f} bits/byte, battery {report.tests_passed}/5 ({report.verdict})")
