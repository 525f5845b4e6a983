"""
Exam result statistics.

This module summarizes the submissions of a single exam for the teacher's
results view.

Descriptive Statistics
======================
Every submission is first normalized to a percentage score
(``score / total_questions * 100``) so that exams with different question
counts are comparable. Mean, median, mode, min, max and the population
standard deviation are computed over those percentages.

Hypothesis Test
===============
A one-sample t-test compares the class average against 50%, the expected
score of a student guessing between two options:

    t = (mean - 50) / (std_dev / sqrt(n))

The p-value is the Numerical Recipes ``erfcc`` rational approximation of the
complementary error function evaluated at ``|t|``. It is a large-sample
normal approximation and ignores the degrees of freedom. Reported p-values
depend on the exact constants and nesting order below, so do not replace it
with ``scipy.stats.t`` without a migration plan for historical reports.

Usage:
    from app.core.exam_stats import compute_exam_stats

    stats = compute_exam_stats(results, total_questions=len(exam.questions))
    if stats.p_value < SIGNIFICANCE_LEVEL:
        ...
"""

import logging
import math
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Protocol, Sequence

logger = logging.getLogger(__name__)

# Null hypothesis: the class average equals random guessing
NULL_HYPOTHESIS_MEAN = 50.0

# p-values below this are reported as statistically significant
SIGNIFICANCE_LEVEL = 0.05

# Score distribution bins shown on the results page (width 20 points)
DISTRIBUTION_BIN_LABELS = ("0-20%", "21-40%", "41-60%", "61-80%", "81-100%")
_BIN_WIDTH = 20


class InvalidQuestionCountError(ValueError):
    """Raised when an exam's question count cannot normalize scores."""

    def __init__(self, total_questions: int):
        self.total_questions = total_questions
        super().__init__(
            f"Invalid question count: {total_questions} (must be positive)"
        )


class Submission(Protocol):
    """Anything with a raw score, e.g. an ExamResult row."""

    score: int


@dataclass(frozen=True)
class ExamStats:
    """Aggregate statistics over percentage scores of one exam."""

    count: int
    mean: float
    median: float
    mode: float
    min: float
    max: float
    std_dev: float
    t_value: float
    p_value: float

    @classmethod
    def empty(cls) -> "ExamStats":
        """Statistics for an exam with no submissions: every field is zero."""
        return cls(
            count=0,
            mean=0.0,
            median=0.0,
            mode=0.0,
            min=0.0,
            max=0.0,
            std_dev=0.0,
            t_value=0.0,
            p_value=0.0,
        )

    @property
    def is_significant(self) -> bool:
        """Whether the class average differs significantly from guessing."""
        return self.count > 0 and self.p_value < SIGNIFICANCE_LEVEL

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def approx_p_value(t_value: float, degrees_of_freedom: int) -> float:
    """
    Approximate the tail probability of a t statistic.

    Evaluates the fixed-coefficient approximation of erfc(|t|) (fractional
    error below 1.2e-7). The degrees of freedom are accepted for interface
    compatibility but not used: this is the large-sample normal
    approximation regardless of sample size.

    Args:
        t_value: The t statistic
        degrees_of_freedom: Sample size minus one (unused)

    Returns:
        Approximate p-value. At t = 0 the coefficients evaluate to
        1.00000003 rather than exactly 1.

    Example:
        >>> round(approx_p_value(0.0, 10), 6)
        1.0
        >>> approx_p_value(5.657, 1) < 0.01
        True
    """
    x = abs(t_value)
    t_val = 1.0 / (1.0 + 0.5 * x)
    return t_val * math.exp(
        -x * x
        - 1.26551223
        + t_val
        * (
            1.00002368
            + t_val
            * (
                0.37409196
                + t_val
                * (
                    0.09678418
                    + t_val
                    * (
                        -0.18628806
                        + t_val
                        * (
                            0.27886807
                            + t_val
                            * (
                                -1.13520398
                                + t_val
                                * (
                                    1.48851587
                                    + t_val * (-0.82215223 + t_val * 0.17087277)
                                )
                            )
                        )
                    )
                )
            )
        )
    )


def to_percentages(
    submissions: Sequence[Submission], total_questions: int
) -> List[float]:
    """
    Normalize raw scores to 0-100 percentages.

    Raises:
        InvalidQuestionCountError: If total_questions is zero or negative
    """
    if total_questions <= 0:
        raise InvalidQuestionCountError(total_questions)
    return [(s.score / total_questions) * 100 for s in submissions]


def _median(sorted_scores: List[float]) -> float:
    count = len(sorted_scores)
    mid = count // 2
    if count % 2 != 0:
        return sorted_scores[mid]
    return (sorted_scores[mid - 1] + sorted_scores[mid]) / 2


def _mode(sorted_scores: List[float]) -> float:
    # Ties go to the first value in ascending order, i.e. the smallest
    frequencies = Counter(sorted_scores)
    mode = sorted_scores[0]
    max_freq = 0
    for score in sorted_scores:
        if frequencies[score] > max_freq:
            max_freq = frequencies[score]
            mode = score
    return mode


def compute_exam_stats(
    submissions: Sequence[Submission], total_questions: int
) -> ExamStats:
    """
    Compute descriptive statistics and a one-sample t-test for an exam.

    Args:
        submissions: Submissions of one exam; only ``score`` is read
        total_questions: Number of questions in the exam (must be positive)

    Returns:
        ExamStats over percentage scores. All fields are zero when there
        are no submissions.

    Raises:
        InvalidQuestionCountError: If total_questions is zero or negative
            and there is at least one submission to normalize
    """
    if len(submissions) == 0:
        return ExamStats.empty()

    scores = to_percentages(submissions, total_questions)
    count = len(scores)
    sorted_scores = sorted(scores)

    if sorted_scores[0] == sorted_scores[-1]:
        # Identical scores have exactly zero spread
        mean, std_dev = sorted_scores[0], 0.0
    else:
        # fsum is exactly rounded, so the result does not depend on input order
        mean = math.fsum(scores) / count
        # Population standard deviation (divide by n, not n - 1)
        variance = math.fsum((s - mean) ** 2 for s in scores) / count
        std_dev = math.sqrt(variance)

    std_err = std_dev / math.sqrt(count)
    # Identical scores: report t = 0 instead of dividing by zero
    t_value = 0.0 if std_err == 0 else (mean - NULL_HYPOTHESIS_MEAN) / std_err
    p_value = approx_p_value(t_value, count - 1)

    logger.debug(
        f"Computed exam stats: n={count}, mean={mean:.2f}, sd={std_dev:.2f}, "
        f"t={t_value:.3f}, p={p_value:.4f}"
    )

    return ExamStats(
        count=count,
        mean=mean,
        median=_median(sorted_scores),
        mode=_mode(sorted_scores),
        min=min(scores),
        max=max(scores),
        std_dev=std_dev,
        t_value=t_value,
        p_value=p_value,
    )


def score_distribution(percentages: Sequence[float]) -> List[Dict[str, Any]]:
    """
    Bucket percentage scores into the five results-page bins.

    A score of exactly 20, 40, 60 or 80 falls into the higher bin; 100
    falls into the last bin.

    Returns:
        One ``{"name": label, "count": n}`` entry per bin, in ascending order
    """
    bins = [0] * len(DISTRIBUTION_BIN_LABELS)
    last = len(bins) - 1
    for pct in percentages:
        bins[min(math.floor(pct / _BIN_WIDTH), last)] += 1
    return [
        {"name": label, "count": bins[i]}
        for i, label in enumerate(DISTRIBUTION_BIN_LABELS)
    ]
