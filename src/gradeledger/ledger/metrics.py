"""
Performance Metrics Engine

Deterministic scoring from a student's grade history, attendance and study
hours. Every function is pure and works in integer arithmetic; divisions
truncate.

Prediction formula:
    predicted = (average * 50 + attendance * 30 + normalized_hours * 20) // 100

where normalized_hours maps 0-40+ weekly hours onto 0-100.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from gradeledger.core.categories import Category
from gradeledger.core.errors import NoGradesAvailable

AVERAGE_WEIGHT = 50
ATTENDANCE_WEIGHT = 30
STUDY_HOURS_WEIGHT = 20

STUDY_HOURS_CEILING = 40  # weekly hours that earn the full study score
MAX_SCORE = 100
MAX_IMPROVEMENT_RATE = 100

# (minimum score, category, confidence), evaluated top to bottom
CATEGORY_THRESHOLDS: tuple[tuple[int, Category, int], ...] = (
    (85, Category.EXCELLENT, 90),
    (75, Category.GOOD, 85),
    (60, Category.AVERAGE, 80),
)
FALLBACK_CATEGORY: tuple[Category, int] = (Category.NEEDS_IMPROVEMENT, 75)


@dataclass(frozen=True)
class AggregateMetrics:
    """Metrics refreshed on every grade addition."""

    average_grade: int
    improvement_rate: int


@dataclass(frozen=True)
class Prediction:
    """Result of a full prediction run."""

    predicted_score: int
    average_grade: int
    improvement_rate: int
    category: Category
    confidence_score: int


def average_grade(grades: Sequence[int]) -> int:
    """Truncated mean of the grades, 0 for an empty history."""
    if not grades:
        return 0
    return sum(grades) // len(grades)


def improvement_rate(grades: Sequence[int]) -> int:
    """Percentage growth from the first half of the history to the second.

    The first half is ``grades[:n // 2]``; the second half takes the rest, so
    it is never shorter. Declines, flat histories and a zero baseline all
    report 0. The rate is capped at 100.

    Examples:
        >>> improvement_rate([50, 60, 70, 80])
        36
        >>> improvement_rate([80, 60])
        0
    """
    if len(grades) < 2:
        return 0

    middle = len(grades) // 2
    first_mean = average_grade(grades[:middle])
    second_mean = average_grade(grades[middle:])

    if first_mean == 0 or second_mean <= first_mean:
        return 0

    rate = (second_mean - first_mean) * 100 // first_mean
    return min(MAX_IMPROVEMENT_RATE, rate)


def recompute_aggregate(grades: Sequence[int]) -> AggregateMetrics | None:
    """Aggregate metrics after a grade change.

    Returns:
        None when there are no grades (existing metrics stay untouched)
    """
    if not grades:
        return None
    return AggregateMetrics(
        average_grade=average_grade(grades),
        improvement_rate=improvement_rate(grades),
    )


def normalized_study_hours(study_hours: int) -> int:
    """Scale weekly study hours to 0-100, saturating at 40 hours."""
    return min(MAX_SCORE, study_hours * 100 // STUDY_HOURS_CEILING)


def predicted_score(average: int, attendance: int, normalized_hours: int) -> int:
    """Weighted score, capped at 100."""
    weighted = (
        average * AVERAGE_WEIGHT
        + attendance * ATTENDANCE_WEIGHT
        + normalized_hours * STUDY_HOURS_WEIGHT
    )
    return min(MAX_SCORE, weighted // 100)


def categorize(score: int) -> tuple[Category, int]:
    """Map a predicted score to (category, confidence score)."""
    for minimum, category, confidence in CATEGORY_THRESHOLDS:
        if score >= minimum:
            return category, confidence
    return FALLBACK_CATEGORY


def predict(grades: Sequence[int], attendance: int, study_hours: int) -> Prediction:
    """Full prediction from a student's current inputs.

    Args:
        grades: Grade history
        attendance: Attendance percentage (0-100)
        study_hours: Weekly study hours (0-168)

    Returns:
        Prediction with score, aggregates, category and confidence

    Raises:
        NoGradesAvailable: If the grade history is empty
    """
    if not grades:
        raise NoGradesAvailable()

    average = average_grade(grades)
    score = predicted_score(average, attendance, normalized_study_hours(study_hours))
    category, confidence = categorize(score)

    return Prediction(
        predicted_score=score,
        average_grade=average,
        improvement_rate=improvement_rate(grades),
        category=category,
        confidence_score=confidence,
    )
