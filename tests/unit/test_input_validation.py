"""
Unit tests for input validation functions.
"""

import pytest

from gradeledger.core.errors import (
    InvalidBatchSize,
    InvalidGrade,
    InvalidId,
    InvalidLimit,
    InvalidName,
    InvalidPercentage,
    InvalidStudyHours,
    OffsetOutOfBounds,
    ValidationError,
)
from gradeledger.core.validation import (
    validate_attendance,
    validate_grade,
    validate_grade_batch,
    validate_page,
    validate_student_id,
    validate_student_name,
    validate_study_hours,
)

# ============================================================================
# Student fields
# ============================================================================


class TestStudentIdValidation:
    """Tests for student identifier validation."""

    def test_accepts_positive_id(self):
        assert validate_student_id(7) == 7

    def test_accepts_largest_storable_id(self):
        assert validate_student_id(2**63 - 1) == 2**63 - 1

    @pytest.mark.parametrize("student_id", [0, -1, -100, 2**63, 2**70])
    def test_rejects_non_positive(self, student_id):
        with pytest.raises(InvalidId):
            validate_student_id(student_id)

    @pytest.mark.parametrize("student_id", ["7", 7.0, None, True])
    def test_rejects_non_integers(self, student_id):
        with pytest.raises(InvalidId):
            validate_student_id(student_id)


class TestStudentNameValidation:
    """Tests for student name validation."""

    def test_accepts_name_unchanged(self):
        assert validate_student_name("Ama Owusu") == "Ama Owusu"

    def test_accepts_single_character(self):
        assert validate_student_name("A") == "A"

    def test_accepts_100_characters(self):
        assert validate_student_name("A" * 100) == "A" * 100

    def test_rejects_101_characters(self):
        with pytest.raises(InvalidName, match="cannot exceed 100"):
            validate_student_name("A" * 101)

    def test_accepts_whitespace_name_unchanged(self):
        assert validate_student_name("   ") == "   "

    @pytest.mark.parametrize("name", ["", None])
    def test_rejects_empty(self, name):
        with pytest.raises(InvalidName, match="cannot be empty"):
            validate_student_name(name)


class TestRangeValidation:
    """Attendance, study hours and grades."""

    @pytest.mark.parametrize("value", [0, 55, 100])
    def test_attendance_in_range(self, value):
        assert validate_attendance(value) == value

    @pytest.mark.parametrize("value", [-1, 101])
    def test_attendance_out_of_range(self, value):
        with pytest.raises(InvalidPercentage):
            validate_attendance(value)

    @pytest.mark.parametrize("value", [0, 40, 168])
    def test_study_hours_in_range(self, value):
        assert validate_study_hours(value) == value

    @pytest.mark.parametrize("value", [-1, 169])
    def test_study_hours_out_of_range(self, value):
        with pytest.raises(InvalidStudyHours):
            validate_study_hours(value)

    @pytest.mark.parametrize("value", [0, 100])
    def test_grade_bounds(self, value):
        assert validate_grade(value) == value

    @pytest.mark.parametrize("value", [-1, 101, 50.5])
    def test_grade_out_of_range(self, value):
        with pytest.raises(InvalidGrade):
            validate_grade(value)


# ============================================================================
# Grade batches
# ============================================================================


class TestGradeBatchValidation:
    """Tests for bulk grade validation."""

    def test_returns_copy_in_order(self):
        grades = [90, 10, 55]
        validated = validate_grade_batch(grades)

        assert validated == [90, 10, 55]
        assert validated is not grades

    def test_accepts_50_entries(self):
        assert len(validate_grade_batch([70] * 50)) == 50

    @pytest.mark.parametrize("grades", [[], [70] * 51, None])
    def test_rejects_bad_sizes(self, grades):
        with pytest.raises(InvalidBatchSize):
            validate_grade_batch(grades)

    def test_rejects_any_bad_grade(self):
        with pytest.raises(InvalidGrade):
            validate_grade_batch([70, 80, 101, 90])

    def test_size_checked_before_entries(self):
        with pytest.raises(InvalidBatchSize):
            validate_grade_batch([101] * 51)


# ============================================================================
# Pagination
# ============================================================================


class TestPageValidation:
    """Tests for pagination windows."""

    def test_window_within_bounds(self):
        assert validate_page(0, 2, 4) == (0, 2)

    def test_window_clipped_to_total(self):
        assert validate_page(3, 5, 4) == (3, 4)

    def test_offset_at_total_rejected(self):
        with pytest.raises(OffsetOutOfBounds):
            validate_page(4, 1, 4)

    def test_negative_offset_rejected(self):
        with pytest.raises(OffsetOutOfBounds):
            validate_page(-1, 1, 4)

    def test_empty_enumeration_always_out_of_bounds(self):
        with pytest.raises(OffsetOutOfBounds):
            validate_page(0, 10, 0)

    @pytest.mark.parametrize("limit", [0, 101, -5])
    def test_limit_out_of_range(self, limit):
        with pytest.raises(InvalidLimit):
            validate_page(0, limit, 10)

    def test_limit_checked_before_offset(self):
        with pytest.raises(InvalidLimit):
            validate_page(99, 0, 0)

    def test_all_are_validation_errors(self):
        with pytest.raises(ValidationError):
            validate_page(0, 0, 0)
