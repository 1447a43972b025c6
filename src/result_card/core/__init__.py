from result_card.core.models import (
    Grade,
    GradeResult,
    GradingScale,
    PROGRESS_CATEGORIES,
    SUBJECTS,
    StudentRecord,
    SubjectMarks,
    SubjectResult,
)

__all__ = [
    "Grade",
    "GradeResult",
    "GradingScale",
    "PROGRESS_CATEGORIES",
    "SUBJECTS",
    "StudentRecord",
    "SubjectMarks",
    "SubjectResult",
]
