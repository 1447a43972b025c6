"""Result card builder: grade one student's marks and export the result card."""

from result_card.config import ReportSettings
from result_card.core.form import (
    FormState,
    initial_form_state,
    load_form_csv,
    load_form_json,
    set_marks,
    set_progress,
    set_text,
    submit,
)
from result_card.core.models import Grade, StudentRecord, SubjectMarks
from result_card.core.report import Report, build_report, generate_report
from result_card.generator import ExportOutcome, Notification, ResultCardGenerator

__version__ = "1.0.0"

__all__ = [
    "ReportSettings",
    "FormState",
    "initial_form_state",
    "load_form_csv",
    "load_form_json",
    "set_marks",
    "set_progress",
    "set_text",
    "submit",
    "Grade",
    "StudentRecord",
    "SubjectMarks",
    "Report",
    "build_report",
    "generate_report",
    "ExportOutcome",
    "Notification",
    "ResultCardGenerator",
]
