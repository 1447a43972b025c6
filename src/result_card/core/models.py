#!/usr/bin/env python3
"""
DATA MODELS - Pydantic schemas for result card data validation
Type-safe data structures for a single student's marks and derived grades

COMPREHENSIVE DATA VALIDATION:
✅ Student Record: Identity, subject marks, general progress, comments
✅ Subject Marks: Term and exam marks bounded to 0-100
✅ Grading Scale: Letter grade thresholds and descriptions
✅ Grade Result: Per-subject and overall averages with letter grades

VALIDATION RULES:
- Marks must be integers in 0-100
- Subject set is exactly the fixed eight subjects, in fixed order
- General progress keys are exactly the six fixed categories
- Grade labels must be one of A, B, S, NI (or unset for progress)
- Class teacher and head of school must be non-empty

Dependencies: Pydantic for validation
"""

from typing import Dict, List, Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Grade(str, Enum):
    """Valid letter grades"""
    A = "A"
    B = "B"
    S = "S"
    NI = "NI"


SUBJECTS: List[str] = [
    "English",
    "Urdu",
    "Mathematics",
    "General Science",
    "Social Studies",
    "Islamiyat",
    "Tadrees-e-Quran (Naazrah Quran)",
    "Computer Studies",
]

# Category key -> display label, in report order
PROGRESS_CATEGORIES: Dict[str, str] = {
    "art": "Art",
    "attendance": "Attendance",
    "conduct": "Conduct",
    "effort": "Effort",
    "pe_games": "PE/Games",
    "punctuality": "Punctuality",
}


class GradingScale(BaseModel):
    """Letter grade thresholds; anything below the S threshold is NI"""

    a_threshold: int = Field(85, ge=0, le=100, description="Minimum score for A")
    b_threshold: int = Field(70, ge=0, le=100, description="Minimum score for B")
    s_threshold: int = Field(50, ge=0, le=100, description="Minimum score for S")

    descriptions: Dict[str, str] = Field(
        default_factory=lambda: {
            "A": "Excellent",
            "B": "Good",
            "S": "Satisfactory",
            "NI": "Needs Improvement",
        },
        description="Display description for each grade label",
    )

    @model_validator(mode="after")
    def check_threshold_order(self):
        if not self.a_threshold > self.b_threshold > self.s_threshold:
            raise ValueError("Thresholds must satisfy A > B > S")
        return self

    def describe(self, grade: str) -> str:
        """Get the display description for a grade label"""
        return self.descriptions.get(Grade(grade).value, "")

    model_config = ConfigDict(frozen=True)


class SubjectMarks(BaseModel):
    """Term and exam marks for one subject"""

    term_marks: int = Field(0, ge=0, le=100, description="Term marks out of 100")
    exam_marks: int = Field(0, ge=0, le=100, description="Exam marks out of 100")

    model_config = ConfigDict(frozen=True)


class StudentRecord(BaseModel):
    """Immutable snapshot of one student's submitted form"""

    name: str = Field(..., description="Student name")
    class_name: str = Field(..., description="Class")
    section: str = Field(..., description="Section")
    roll_no: str = Field(..., description="Roll number")
    age: str = Field(..., description="Age as entered")
    campus_name: str = Field(..., description="Campus name")
    academic_year: str = Field("2024", description="Academic year")

    subjects: Dict[str, SubjectMarks] = Field(..., description="Marks per fixed subject")
    general_progress: Dict[str, Optional[Grade]] = Field(
        default_factory=lambda: {key: None for key in PROGRESS_CATEGORIES},
        description="Rating per general progress category (None = not rated)",
    )

    clubs_comments: str = Field("", description="Clubs, societies and co-curricular comments")
    values_comments: str = Field("", description="Values education comments")
    class_teacher_comments: str = Field("", description="Class teacher's comments")
    school_head_comments: str = Field("", description="School head's comments")

    class_teacher: str = Field(..., min_length=1, description="Class teacher name")
    head_of_school: str = Field(..., min_length=1, description="Head of school name")

    @field_validator("subjects")
    @classmethod
    def validate_subject_set(cls, v):
        """Subject set must be exactly the fixed list; re-keyed into fixed order"""
        if set(v) != set(SUBJECTS):
            unknown = sorted(set(v) - set(SUBJECTS))
            missing = [s for s in SUBJECTS if s not in v]
            raise ValueError(f"Subject set mismatch (unknown={unknown}, missing={missing})")
        return {subject: v[subject] for subject in SUBJECTS}

    @field_validator("general_progress")
    @classmethod
    def validate_progress_categories(cls, v):
        """Progress keys must be exactly the six fixed categories"""
        if set(v) != set(PROGRESS_CATEGORIES):
            raise ValueError(
                f"General progress categories must be {list(PROGRESS_CATEGORIES)}, got {list(v)}"
            )
        return {key: v[key] for key in PROGRESS_CATEGORIES}

    @field_validator("class_teacher", "head_of_school")
    @classmethod
    def validate_authority_names(cls, v):
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v

    model_config = ConfigDict(frozen=True, use_enum_values=True)


class SubjectResult(BaseModel):
    """Derived average and grade for one subject"""

    subject: str
    term_marks: int = Field(..., ge=0, le=100)
    exam_marks: int = Field(..., ge=0, le=100)
    average: int = Field(..., ge=0, le=100)
    grade: Grade

    model_config = ConfigDict(frozen=True, use_enum_values=True)


class GradeResult(BaseModel):
    """Grades derived from a StudentRecord; never written back onto it"""

    subjects: List[SubjectResult] = Field(..., description="Per-subject results in fixed order")
    overall_average: int = Field(..., ge=0, le=100, description="Rounded mean of subject averages")
    overall_grade: Grade = Field(..., description="Letter grade of the overall average")

    def get_subject(self, subject: str) -> SubjectResult:
        for result in self.subjects:
            if result.subject == subject:
                return result
        raise KeyError(subject)

    model_config = ConfigDict(frozen=True, use_enum_values=True)


# Export all models
__all__ = [
    'Grade',
    'SUBJECTS',
    'PROGRESS_CATEGORIES',
    'GradingScale',
    'SubjectMarks',
    'StudentRecord',
    'SubjectResult',
    'GradeResult',
]
