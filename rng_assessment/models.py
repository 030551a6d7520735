# rng_assessment/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Tuple

# --- Common Base Model ---
class BaseResult(BaseModel):
    """Base model for assessment results. Results are immutable once produced."""
    model_config = ConfigDict(frozen=True)

# --- Individual Test Results ---
class ChiSquareResult(BaseResult):
    """Chi-square goodness-of-fit of the data against a uniform distribution over [min, max]."""
    statistic: float = Field(..., description="Sum of (observed - expected)^2 / expected over all buckets.")
    p_value: float = Field(
        ...,
        description="Approximate p-value (Wilson-Hilferty transform, polynomial normal CDF). Decides is_random."
    )
    exact_p_value: float = Field(
        ...,
        description="Survival function of the exact chi-square distribution, reported for comparison only."
    )
    degrees_of_freedom: int = Field(..., description="Number of buckets minus one.")
    critical_value: float = Field(..., description="Chi-square critical value at 95% confidence for these degrees of freedom.")
    buckets: Tuple[int, ...] = Field(..., description="Observed count per equal-width bucket.")
    expected: float = Field(..., description="Expected count per bucket (N / buckets).")
    is_random: bool = Field(..., description="True iff p_value > 0.05.")

class RunsTestResult(BaseResult):
    """Wald-Wolfowitz runs test above/below the median."""
    runs: int = Field(..., description="Observed number of runs.")
    expected_runs: float = Field(..., description="2*n1*n2/n + 1.")
    variance: float = Field(..., description="Variance of the run count under independence.")
    z_score: float = Field(..., description="(runs - expected_runs) / sqrt(variance).")
    n_above: int = Field(..., description="Values >= median.")
    n_below: int = Field(..., description="Values < median.")
    is_random: bool = Field(..., description="True iff |z_score| < 1.96.")

class BitFrequencyResult(BaseResult):
    """Balance of one and zero bits across a byte sequence."""
    ones: int
    zeros: int
    ratio: float = Field(..., description="ones / (ones + zeros).")
    is_balanced: bool = Field(..., description="True iff |ratio - 0.5| is within 3 standard errors.")

class MonteCarloPiResult(BaseResult):
    """Estimate of pi from consecutive (x, y) pairs mapped onto [-1, 1]^2."""
    estimate: float
    error: float = Field(..., description="|estimate - pi|.")
    points_in_circle: int
    total_points: int

# --- Composite Results ---
class AssessmentResult(BaseResult):
    """Composite 0-100 quality score for a sample of floats in [0, 1)."""
    score: int = Field(..., ge=0, le=100)
    quality: str = Field(..., description="One of excellent, good, fair, poor.")
    chi_square: ChiSquareResult
    runs: Optional[RunsTestResult] = Field(
        None, description="None when the runs test is undefined for the data (counted as a failure)."
    )
    entropy: float = Field(..., description="Shannon entropy in bits/byte of floor(x * 256) mod 256.")
    entropy_level: str = Field(..., description="One of high (> 7.5), moderate (> 6.5), low.")

class FullReport(BaseResult):
    """Structured form of the five-test randomness battery."""
    sample_size: int
    mean: float
    std_dev: float
    minimum: float
    maximum: float
    chi_square: ChiSquareResult
    runs: Optional[RunsTestResult] = None
    serial_correlation: Optional[float] = Field(None, description="None when undefined (constant data).")
    entropy: float
    bit_frequency: BitFrequencyResult
    monte_carlo_pi: Optional[MonteCarloPiResult] = Field(None, description="Present when sample_size >= 100.")
    tests_passed: int = Field(..., ge=0, le=5)
    verdict: str = Field(..., description="One of high, acceptable, poor.")
