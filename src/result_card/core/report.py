#!/usr/bin/env python3
"""
REPORT ASSEMBLY - Result card view-model
Single structured representation consumed by the HTML renderer and by both
export encoders

REPORT SECTIONS:
✅ Header: school name, logo text, campus, academic year/term, title
✅ Identity block: name, roll no, class/section, age
✅ Academic performance: one row per subject in fixed order
✅ Summary: overall %, overall grade, position in class
✅ Class statistics: highest/lowest/average (no data source, shown as N/A)
✅ General progress: six rated categories plus legend
✅ Comments and signatures with issue date

Every value is formatted to its display string here, once. Renderers and
encoders copy these strings verbatim and never recompute grades.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from result_card.config import DEFAULT_SETTINGS, ReportSettings
from result_card.core.calculators.grades import GradeCalculator
from result_card.core.models import (
    Grade,
    GradeResult,
    PROGRESS_CATEGORIES,
    StudentRecord,
)

SUBJECT_COLUMNS = ("Subject", "Term %", "Examination %", "Average %", "Grade")


class _ViewModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ReportHeader(_ViewModel):
    school_name: str
    logo_lines: List[str]
    campus_line: str
    year_line: str
    title: str


class LabeledValue(_ViewModel):
    label: str
    value: str


class SubjectRow(_ViewModel):
    subject: str
    term: str
    exam: str
    average: str
    grade: str

    def cells(self) -> List[str]:
        return [self.subject, self.term, self.exam, self.average, self.grade]


class CommentBlock(_ViewModel):
    title: str
    text: str
    boxed: bool


class SignatureBlock(_ViewModel):
    title: str
    name: str


class Report(_ViewModel):
    """Fully formatted result card"""

    student_name: str
    header: ReportHeader
    identity: List[LabeledValue]
    subject_columns: List[str]
    subject_rows: List[SubjectRow]
    overall_average: str
    overall_grade: str
    summary: List[LabeledValue]
    class_statistics: List[LabeledValue]
    progress_heading: str
    general_progress: List[LabeledValue]
    legend: List[LabeledValue]
    comments: List[CommentBlock]
    signatures: List[SignatureBlock]
    issue_date: str

    def file_stem(self) -> str:
        """Base filename shared by every export of this report"""
        safe_name = self.student_name.replace("/", "_").replace("\\", "_").strip()
        return f"{safe_name or 'Student'}_Result_Card"


def build_report(
    record: StudentRecord,
    result: GradeResult,
    settings: Optional[ReportSettings] = None,
    issue_date: Optional[date] = None,
) -> Report:
    """
    Assemble the report view-model

    Args:
        record: Submitted student record
        result: Grades computed once for this record
        settings: Branding and formatting options
        issue_date: Date printed in the signature block (defaults to today)

    Returns:
        Frozen Report; identical inputs give an equal Report
    """
    settings = settings or DEFAULT_SETTINGS
    issue_date = issue_date or date.today()
    not_available = settings.not_available_label

    header = ReportHeader(
        school_name=settings.school_name,
        logo_lines=list(settings.logo_lines),
        campus_line=f"Campus Name: {record.campus_name}",
        year_line=f"Academic Year: {record.academic_year}, {settings.term_label}",
        title=f"Class {record.class_name} Result Card",
    )

    identity = [
        LabeledValue(label="Name", value=record.name),
        LabeledValue(label="Roll No", value=record.roll_no),
        LabeledValue(label="Class/Section", value=f"{record.class_name}/{record.section}"),
        LabeledValue(label="Age", value=record.age),
    ]

    subject_rows = [
        SubjectRow(
            subject=subject_result.subject,
            term=str(subject_result.term_marks),
            exam=str(subject_result.exam_marks),
            average=str(subject_result.average),
            grade=Grade(subject_result.grade).value,
        )
        for subject_result in result.subjects
    ]

    overall_average = str(result.overall_average)
    overall_grade = Grade(result.overall_grade).value
    summary = [
        LabeledValue(label="Overall %", value=overall_average),
        LabeledValue(label="Overall Grade", value=overall_grade),
        LabeledValue(label="Position in Class", value=not_available),
    ]

    # Needs a multi-student data source, which a single-record session lacks
    class_statistics = [
        LabeledValue(label="Class Highest %", value=not_available),
        LabeledValue(label="Class Lowest %", value=not_available),
        LabeledValue(label="Class Average %", value=not_available),
    ]

    general_progress = [
        LabeledValue(label=label, value=record.general_progress.get(key) or "")
        for key, label in PROGRESS_CATEGORIES.items()
    ]

    legend = [
        LabeledValue(label=grade.value, value=settings.grading_scale.describe(grade.value))
        for grade in Grade
    ]

    comments = [
        CommentBlock(
            title="Clubs, Societies & Other Co-Curricular Activities – Overall Comments",
            text=record.clubs_comments,
            boxed=True,
        ),
        CommentBlock(
            title="Values Education – Overall Comments",
            text=record.values_comments,
            boxed=True,
        ),
        CommentBlock(
            title="Class Teacher's Comments",
            text=record.class_teacher_comments,
            boxed=False,
        ),
        CommentBlock(
            title="School Head's Comments",
            text=record.school_head_comments,
            boxed=False,
        ),
    ]

    formatted_date = issue_date.strftime(settings.date_format)
    signatures = [
        SignatureBlock(title="Class Teacher", name=record.class_teacher),
        SignatureBlock(title="Campus Stamp", name=""),
        SignatureBlock(title="Head of School", name=record.head_of_school),
        SignatureBlock(title="Date", name=formatted_date),
    ]

    return Report(
        student_name=record.name,
        header=header,
        identity=identity,
        subject_columns=list(SUBJECT_COLUMNS),
        subject_rows=subject_rows,
        overall_average=overall_average,
        overall_grade=overall_grade,
        summary=summary,
        class_statistics=class_statistics,
        progress_heading="General Progress",
        general_progress=general_progress,
        legend=legend,
        comments=comments,
        signatures=signatures,
        issue_date=formatted_date,
    )


def generate_report(
    record: StudentRecord,
    settings: Optional[ReportSettings] = None,
    issue_date: Optional[date] = None,
) -> Report:
    """Grade a record once and assemble its report"""
    settings = settings or DEFAULT_SETTINGS
    result = GradeCalculator(settings.grading_scale).calculate(record)
    return build_report(record, result, settings, issue_date)
