#!/usr/bin/env python3
"""
INTAKE FORM - Form state, edit transitions and submission
Collects one student's identity, marks, ratings and comments

FORM LIFECYCLE:
1. initial_form_state(): zeroed marks, empty text, academic year "2024"
2. set_text / set_marks / set_progress: pure transitions returning a new state
3. submit(): checks required fields and freezes the state into a StudentRecord
4. Going back to the form starts again from initial_form_state()

INPUT COERCION:
Marks are parsed like a browser number input read with parseInt: the
leading integer is taken ("85.7" -> 85) and anything non-numeric or
outside 0-100 becomes 0 instead of being rejected.

DATA SOURCES:
✅ JSON object (snake_case or camelCase keys)
✅ CSV file, one row per student, loaded with pandas
"""

import re
import json
import math
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from result_card.core.models import (
    Grade,
    PROGRESS_CATEGORIES,
    SUBJECTS,
    StudentRecord,
    SubjectMarks,
)
from result_card.errors import FormValidationError, InvalidInputError

logger = logging.getLogger(__name__)

TEXT_FIELDS = (
    "name",
    "class_name",
    "section",
    "roll_no",
    "age",
    "campus_name",
    "academic_year",
    "clubs_comments",
    "values_comments",
    "class_teacher_comments",
    "school_head_comments",
    "class_teacher",
    "head_of_school",
)

REQUIRED_FIELDS = (
    "name",
    "class_name",
    "section",
    "roll_no",
    "age",
    "campus_name",
    "class_teacher",
    "head_of_school",
)

MARK_KINDS = ("term_marks", "exam_marks")

# camelCase keys accepted from JSON payloads
FIELD_ALIASES = {
    "className": "class_name",
    "rollNo": "roll_no",
    "campusName": "campus_name",
    "academicYear": "academic_year",
    "clubsComments": "clubs_comments",
    "valuesComments": "values_comments",
    "classTeacherComments": "class_teacher_comments",
    "schoolHeadComments": "school_head_comments",
    "classTeacher": "class_teacher",
    "headOfSchool": "head_of_school",
    "generalProgress": "general_progress",
    "termMarks": "term_marks",
    "examMarks": "exam_marks",
    "peGames": "pe_games",
}

# CSV header -> form field
CSV_COLUMNS = {
    "Name": "name",
    "Class": "class_name",
    "Section": "section",
    "Roll No": "roll_no",
    "Age": "age",
    "Campus Name": "campus_name",
    "Academic Year": "academic_year",
    "Clubs Comments": "clubs_comments",
    "Values Comments": "values_comments",
    "Class Teacher Comments": "class_teacher_comments",
    "School Head Comments": "school_head_comments",
    "Class Teacher": "class_teacher",
    "Head of School": "head_of_school",
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class FormState(BaseModel):
    """Editable (but immutable per step) state of the intake form"""

    name: str = ""
    class_name: str = ""
    section: str = ""
    roll_no: str = ""
    age: str = ""
    campus_name: str = ""
    academic_year: str = "2024"

    subjects: Dict[str, SubjectMarks] = Field(
        default_factory=lambda: {subject: SubjectMarks() for subject in SUBJECTS}
    )
    general_progress: Dict[str, Optional[str]] = Field(
        default_factory=lambda: {key: None for key in PROGRESS_CATEGORIES}
    )

    clubs_comments: str = ""
    values_comments: str = ""
    class_teacher_comments: str = ""
    school_head_comments: str = ""

    class_teacher: str = ""
    head_of_school: str = ""

    model_config = ConfigDict(frozen=True)


def initial_form_state() -> FormState:
    """Fresh form: zeroed marks, empty text"""
    return FormState()


def parse_marks(raw: Any) -> int:
    """Coerce raw input into a mark in 0-100; unusable input becomes 0"""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return 0
        value = int(raw)
    else:
        match = _LEADING_INT.match(str(raw))
        if not match:
            return 0
        value = int(match.group(1))
    if value < 0 or value > 100:
        return 0
    return value


def set_text(state: FormState, field: str, value: Any) -> FormState:
    """Set one free-text field"""
    if field not in TEXT_FIELDS:
        raise InvalidInputError(f"Unknown form field: {field}")
    text = "" if value is None else str(value)
    return state.model_copy(update={field: text})


def set_marks(state: FormState, subject: str, kind: str, raw: Any) -> FormState:
    """
    Set term or exam marks for a subject

    Args:
        state: Current form state
        subject: One of the fixed subject names
        kind: "term_marks" or "exam_marks"
        raw: Raw input, coerced with parse_marks

    Returns:
        New form state
    """
    if subject not in state.subjects:
        raise InvalidInputError(f"Unknown subject: {subject}")
    if kind not in MARK_KINDS:
        raise InvalidInputError(f"Unknown marks kind: {kind}")
    marks = state.subjects[subject].model_copy(update={kind: parse_marks(raw)})
    return state.model_copy(update={"subjects": {**state.subjects, subject: marks}})


def set_progress(state: FormState, category: str, label: Optional[str]) -> FormState:
    """Set a general progress rating; blank clears it"""
    if category not in PROGRESS_CATEGORIES:
        raise InvalidInputError(f"Unknown general progress category: {category}")
    if isinstance(label, Grade):
        label = label.value
    if label is None or str(label).strip() == "":
        value = None
    else:
        try:
            value = Grade(str(label).strip().upper()).value
        except ValueError:
            raise InvalidInputError(f"Invalid grade label for {category}: {label!r}")
    return state.model_copy(
        update={"general_progress": {**state.general_progress, category: value}}
    )


def missing_required_fields(state: FormState) -> list:
    return [field for field in REQUIRED_FIELDS if not getattr(state, field).strip()]


def submit(state: FormState) -> StudentRecord:
    """Freeze the form into an immutable StudentRecord"""
    missing = missing_required_fields(state)
    if missing:
        raise FormValidationError(missing)
    record = StudentRecord(**state.model_dump())
    logger.info(f"📝 Form submitted for {record.name} (Roll No {record.roll_no})")
    return record


def _normalize_key(key: str) -> str:
    return FIELD_ALIASES.get(key, key)


def _require_mapping(value: Any, key: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidInputError(f"{key} must be an object")
    return value


def apply_form_data(state: FormState, data: Mapping[str, Any]) -> FormState:
    """
    Feed a mapping of field values through the form transitions

    Unknown keys are logged and skipped so one stray column does not
    block the whole record.
    """
    for raw_key, value in data.items():
        key = _normalize_key(raw_key)
        if key == "subjects":
            for subject, marks in _require_mapping(value, key).items():
                for raw_kind, raw_value in _require_mapping(marks, f"subjects.{subject}").items():
                    state = set_marks(state, subject, _normalize_key(raw_kind), raw_value)
        elif key == "general_progress":
            for raw_category, label in _require_mapping(value, key).items():
                state = set_progress(state, _normalize_key(raw_category), label)
        elif key in TEXT_FIELDS:
            state = set_text(state, key, value)
        else:
            logger.warning(f"⚠️ Ignoring unknown form field: {raw_key}")
    return state


def load_form_json(path: Union[str, Path]) -> FormState:
    """Load a form from a JSON object file"""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise InvalidInputError(f"{path} must contain a JSON object")
    logger.info(f"📥 Loaded form data from {path}")
    return apply_form_data(initial_form_state(), data)


def _row_to_form_data(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate a CSV row into the nested form-data shape"""
    data: Dict[str, Any] = {}
    for column, field in CSV_COLUMNS.items():
        if column in row:
            data[field] = row[column]

    subjects: Dict[str, Dict[str, Any]] = {}
    for subject in SUBJECTS:
        marks = {}
        if f"{subject} Term" in row:
            marks["term_marks"] = row[f"{subject} Term"]
        if f"{subject} Exam" in row:
            marks["exam_marks"] = row[f"{subject} Exam"]
        if marks:
            subjects[subject] = marks
    data["subjects"] = subjects

    progress = {}
    for key, label in PROGRESS_CATEGORIES.items():
        if label in row:
            progress[key] = row[label]
    data["general_progress"] = progress
    return data


def load_form_csv(path: Union[str, Path], roll_no: Optional[str] = None) -> FormState:
    """
    Load one student's form from a CSV file

    Args:
        path: CSV with one row per student
        roll_no: Roll number to select; may be omitted when the file has one row

    Returns:
        Form state populated from the selected row
    """
    path = Path(path)
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(column).strip() for column in df.columns]

    if len(df) == 0:
        raise InvalidInputError(f"{path} contains no student rows")

    if roll_no is not None:
        if "Roll No" not in df.columns:
            raise InvalidInputError(f"{path} has no 'Roll No' column")
        selected = df[df["Roll No"].str.strip() == str(roll_no).strip()]
        if len(selected) == 0:
            raise InvalidInputError(f"Roll No {roll_no} not found in {path}")
    elif len(df) == 1:
        selected = df
    else:
        raise InvalidInputError(
            f"{path} has {len(df)} rows; pass a roll number to pick one student"
        )

    row = selected.iloc[0].to_dict()
    logger.info(f"📥 Loaded form row for {row.get('Name', '?')} from {path}")
    return apply_form_data(initial_form_state(), _row_to_form_data(row))
