#!/usr/bin/env python3
"""
GRADE CALCULATOR - Subject averages, overall average and letter grades
Computes every derived value on a result card exactly once per snapshot

CALCULATION TYPES:
✅ Subject Average: round((term + exam) / 2)
✅ Overall Average: round(mean of subject averages)
✅ Letter Grade: A (>=85), B (70-84), S (50-69), NI (<50)

ROUNDING:
Half-up (toward +infinity), so 69.5 -> 70 and 49.5 -> 50. Python's
built-in round() rounds half to even and would turn 69.5 into 70 but
84.5 into 84, moving grade boundaries.

Dependencies: models.py for type definitions
"""

import math
import logging
from typing import List, Optional, Sequence, Union

from result_card.core.models import (
    Grade,
    GradeResult,
    GradingScale,
    StudentRecord,
    SubjectResult,
)
from result_card.errors import InvalidInputError

logger = logging.getLogger(__name__)

Number = Union[int, float]

DEFAULT_SCALE = GradingScale()


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves toward +infinity"""
    return int(math.floor(value + 0.5))


def letter_grade(score: int, scale: GradingScale = DEFAULT_SCALE) -> Grade:
    """Map a 0-100 score onto a letter grade"""
    if score >= scale.a_threshold:
        return Grade.A
    elif score >= scale.b_threshold:
        return Grade.B
    elif score >= scale.s_threshold:
        return Grade.S
    else:
        return Grade.NI


def subject_average(term_marks: int, exam_marks: int) -> int:
    """Rounded mean of term and exam marks"""
    return round_half_up((term_marks + exam_marks) / 2)


def overall_average(subject_averages: Sequence[int]) -> int:
    """Rounded mean of subject averages; empty input is an error"""
    if not subject_averages:
        raise InvalidInputError("Cannot compute an overall average of zero subjects")
    return round_half_up(sum(subject_averages) / len(subject_averages))


class GradeCalculator:
    """Calculate per-subject and overall results from a student record"""

    def __init__(self, grading_scale: Optional[GradingScale] = None):
        """
        Initialize calculator with a grading scale

        Args:
            grading_scale: Thresholds to apply (defaults to A=85, B=70, S=50)
        """
        self.grading_scale = grading_scale or DEFAULT_SCALE
        self.calculation_log: List[str] = []

    def calculate(self, record: StudentRecord) -> GradeResult:
        """
        Calculate all derived grades for a record

        Args:
            record: Submitted student record

        Returns:
            GradeResult with subject rows in the record's fixed subject order
        """
        self.calculation_log = []
        self.calculation_log.append(f"📊 Calculating grades for {record.name} (Roll No {record.roll_no})")

        subject_results = []
        for subject, marks in record.subjects.items():
            average = subject_average(marks.term_marks, marks.exam_marks)
            grade = letter_grade(average, self.grading_scale)
            subject_results.append(
                SubjectResult(
                    subject=subject,
                    term_marks=marks.term_marks,
                    exam_marks=marks.exam_marks,
                    average=average,
                    grade=grade,
                )
            )
            self.calculation_log.append(
                f"   {subject}: term={marks.term_marks} exam={marks.exam_marks} "
                f"avg={average} grade={grade.value}"
            )

        overall = overall_average([result.average for result in subject_results])
        overall_grade = letter_grade(overall, self.grading_scale)

        self.calculation_log.append(f"✅ Calculation complete:")
        self.calculation_log.append(f"   Overall Average: {overall}")
        self.calculation_log.append(f"   Overall Grade: {overall_grade.value}")
        logger.debug("Grades for %s: overall %s (%s)", record.name, overall, overall_grade.value)

        return GradeResult(
            subjects=subject_results,
            overall_average=overall,
            overall_grade=overall_grade,
        )

    def get_calculation_log(self) -> List[str]:
        """Get the log of the most recent calculation"""
        return list(self.calculation_log)
