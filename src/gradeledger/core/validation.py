"""
Input validation functions for GradeLedger.

All validation functions follow the pattern:
1. Accept raw caller input
2. Validate against ledger rules
3. Return the value or raise the matching ledger error

Nothing here touches state, so every check can run before a mutation.
"""

from __future__ import annotations

from collections.abc import Sequence

from gradeledger.core.errors import (
    InvalidBatchSize,
    InvalidGrade,
    InvalidId,
    InvalidLimit,
    InvalidName,
    InvalidPercentage,
    InvalidStudyHours,
    OffsetOutOfBounds,
)

MAX_STUDENT_ID = 2**63 - 1  # largest value a 64-bit INTEGER column holds
MAX_NAME_LENGTH = 100
MAX_GRADE = 100
MAX_PERCENTAGE = 100
MAX_STUDY_HOURS = 168  # hours in a week
MAX_GRADE_BATCH = 50
MAX_PAGE_SIZE = 100


def _is_int(value: object) -> bool:
    # bool is an int subclass but never a valid count or score
    return isinstance(value, int) and not isinstance(value, bool)


# ============================================================================
# Student fields
# ============================================================================


def validate_student_id(student_id: object) -> int:
    """
    Validate a student identifier.

    Args:
        student_id: Raw identifier

    Returns:
        The identifier

    Raises:
        InvalidId: If the identifier is not an integer in 1..MAX_STUDENT_ID
    """
    if not _is_int(student_id) or not 0 < student_id <= MAX_STUDENT_ID:  # type: ignore[operator]
        raise InvalidId(f"Student ID must be a positive integer, got {student_id!r}")
    return student_id  # type: ignore[return-value]


def validate_student_name(name: str | None) -> str:
    """
    Validate a student name.

    The name is stored exactly as given.

    Raises:
        InvalidName: If the name is empty or longer than 100 characters
    """
    if name is None or not isinstance(name, str) or name == "":
        raise InvalidName("Student name cannot be empty")

    if len(name) > MAX_NAME_LENGTH:
        raise InvalidName(f"Student name cannot exceed {MAX_NAME_LENGTH} characters")

    return name


def validate_attendance(percentage: object) -> int:
    """Validate an attendance percentage (0-100)."""
    if not _is_int(percentage) or not 0 <= percentage <= MAX_PERCENTAGE:  # type: ignore[operator]
        raise InvalidPercentage(
            f"Attendance percentage must be between 0 and {MAX_PERCENTAGE}, got {percentage!r}"
        )
    return percentage  # type: ignore[return-value]


def validate_study_hours(hours: object) -> int:
    """Validate weekly study hours (0-168)."""
    if not _is_int(hours) or not 0 <= hours <= MAX_STUDY_HOURS:  # type: ignore[operator]
        raise InvalidStudyHours(
            f"Study hours must be between 0 and {MAX_STUDY_HOURS}, got {hours!r}"
        )
    return hours  # type: ignore[return-value]


# ============================================================================
# Grades
# ============================================================================


def validate_grade(grade: object) -> int:
    """Validate a single grade (0-100)."""
    if not _is_int(grade) or not 0 <= grade <= MAX_GRADE:  # type: ignore[operator]
        raise InvalidGrade(f"Grade must be between 0 and {MAX_GRADE}, got {grade!r}")
    return grade  # type: ignore[return-value]


def validate_grade_batch(grades: Sequence[object] | None) -> list[int]:
    """
    Validate a batch of grades.

    The size is checked before any entry, and every entry is checked before
    the caller mutates anything.

    Args:
        grades: Raw grade batch

    Returns:
        The grades as a new list, in input order

    Raises:
        InvalidBatchSize: If the batch is empty or has more than 50 entries
        InvalidGrade: If any entry is out of range
    """
    if grades is None or not 1 <= len(grades) <= MAX_GRADE_BATCH:
        size = 0 if grades is None else len(grades)
        raise InvalidBatchSize(
            f"Grade batch must contain 1-{MAX_GRADE_BATCH} entries, got {size}"
        )

    return [validate_grade(grade) for grade in grades]


# ============================================================================
# Pagination
# ============================================================================


def validate_page(offset: int, limit: int, total: int) -> tuple[int, int]:
    """
    Validate a pagination window over the registration enumeration.

    Limit is checked first, so an empty enumeration with a bad limit
    reports InvalidLimit.

    Returns:
        (start, end) slice bounds, end clipped to total

    Raises:
        InvalidLimit: If limit is outside 1-100
        OffsetOutOfBounds: If offset is negative or not below total
    """
    if not _is_int(limit) or not 1 <= limit <= MAX_PAGE_SIZE:
        raise InvalidLimit(f"Limit must be between 1 and {MAX_PAGE_SIZE}, got {limit!r}")

    if not _is_int(offset) or offset < 0 or offset >= total:
        raise OffsetOutOfBounds(f"Offset {offset!r} is out of bounds for {total} students")

    return offset, min(offset + limit, total)
