#!/usr/bin/env python3
"""
RESULT CARD GENERATOR - Main orchestration engine
Grade a submitted record once and hand the same report to every output

GENERATION PROCESS:
1. Receive a StudentRecord snapshot from the intake form
2. Calculate grades (once) and assemble the Report view-model
3. Render HTML for screen and print
4. Export PDF (rasterized) or DOCX (structured) from the same Report
5. Report success or failure as a user-facing notification

EXPORT BOUNDARY:
Export failures never propagate out of export_*(). They are logged and
returned as an ExportOutcome carrying a destructive notification so the
user can retry. Only one export runs at a time per generator.

Dependencies: Jinja2 (renderer), WeasyPrint/PyMuPDF/Pillow (PDF), python-docx (DOCX)
"""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from result_card.config import DEFAULT_SETTINGS, ReportSettings
from result_card.core.calculators.grades import GradeCalculator
from result_card.core.models import GradeResult, StudentRecord
from result_card.core.report import Report, build_report
from result_card.errors import (
    EncodingFailureError,
    ExportInProgressError,
    MissingRenderTargetError,
    ResultCardError,
)
from result_card.exporters.docx_exporter import DocxExporter
from result_card.exporters.pdf_exporter import PdfExporter
from result_card.renderer import ReportRenderer

logger = logging.getLogger(__name__)

MISSING_TARGET_MESSAGE = "Result card not found. Please generate the result first."
IN_PROGRESS_MESSAGE = "Another export is still running. Please wait for it to finish."


@dataclass(frozen=True)
class Notification:
    """User-visible message raised by an action"""

    title: str
    description: str
    variant: str = "default"  # "default" or "destructive"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


@dataclass(frozen=True)
class ExportOutcome:
    export_format: str
    success: bool
    notification: Notification
    path: Optional[Path] = None
    error: Optional[ResultCardError] = None


class ResultCardGenerator:
    """Generate result cards for one student session"""

    def __init__(
        self,
        settings: Optional[ReportSettings] = None,
        renderer: Optional[ReportRenderer] = None,
        pdf_exporter: Optional[PdfExporter] = None,
        docx_exporter: Optional[DocxExporter] = None,
    ):
        """
        Initialize result card generator

        Args:
            settings: Branding, layout and output configuration
            renderer: HTML renderer (defaults to the packaged template)
            pdf_exporter: PDF exporter (defaults to WeasyPrint rasterization)
            docx_exporter: DOCX exporter
        """
        self.settings = settings or DEFAULT_SETTINGS
        self.output_dir = Path(self.settings.output_dir)

        self.calculator = GradeCalculator(self.settings.grading_scale)
        self.renderer = renderer or ReportRenderer(self.settings)
        self.pdf_exporter = pdf_exporter or PdfExporter(self.settings)
        self.docx_exporter = docx_exporter or DocxExporter()

        self.record: Optional[StudentRecord] = None
        self.grades: Optional[GradeResult] = None
        self.report: Optional[Report] = None
        self._export_in_flight = False

        logger.info(f"Result card generator initialized")
        logger.info(f"Output: {self.output_dir}")

    def generate(self, record: StudentRecord, issue_date: Optional[date] = None) -> Report:
        """
        Grade a submitted record and build its report

        Args:
            record: Frozen record from the intake form
            issue_date: Date for the signature block (defaults to today)

        Returns:
            The Report every later render and export reads from
        """
        logger.info(f"📄 Generating result card for {record.name} (Roll No {record.roll_no})")

        grades = self.calculator.calculate(record)
        for entry in self.calculator.get_calculation_log():
            logger.debug(entry)

        report = build_report(record, grades, self.settings, issue_date)

        self.record = record
        self.grades = grades
        self.report = report

        logger.info(
            f"✅ Overall {grades.overall_average}% ({grades.overall_grade}) for {record.name}"
        )
        return report

    def clear(self):
        """Discard the current record and report (back to the form)"""
        self.record = None
        self.grades = None
        self.report = None

    def require_report(self) -> Report:
        if self.report is None:
            raise MissingRenderTargetError(MISSING_TARGET_MESSAGE)
        return self.report

    def render_html(self, interactive: bool = True) -> str:
        """Render the current report for screen or print"""
        return self.renderer.render(self.require_report(), interactive=interactive)

    def output_path(self, extension: str, output_dir: Optional[Path] = None) -> Path:
        directory = Path(output_dir) if output_dir is not None else self.output_dir
        return directory / f"{self.require_report().file_stem()}.{extension}"

    def export_pdf(self, output_dir: Optional[Path] = None) -> ExportOutcome:
        """Export the current report as {name}_Result_Card.pdf"""

        def write(report: Report) -> Path:
            html = self.renderer.render(report, interactive=False)
            return self.pdf_exporter.export(html, self.output_path("pdf", output_dir))

        return self._run_export("pdf", write)

    def export_docx(self, output_dir: Optional[Path] = None) -> ExportOutcome:
        """Export the current report as {name}_Result_Card.docx"""

        def write(report: Report) -> Path:
            return self.docx_exporter.export(report, self.output_path("docx", output_dir))

        return self._run_export("docx", write)

    def export_html(self, output_dir: Optional[Path] = None) -> ExportOutcome:
        """Save the on-screen view as {name}_Result_Card.html for printing"""

        def write(report: Report) -> Path:
            path = self.output_path("html", output_dir)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.renderer.render(report, interactive=True))
            logger.info(f"HTML saved: {path}")
            return path

        return self._run_export("html", write)

    def _run_export(self, export_format: str, write: Callable[[Report], Path]) -> ExportOutcome:
        """Run one export, converting every failure into a notification"""
        label = export_format.upper()

        if self._export_in_flight:
            error = ExportInProgressError(IN_PROGRESS_MESSAGE)
            logger.warning(f"⚠️ {label} export refused: {error}")
            return self._failure(export_format, error, IN_PROGRESS_MESSAGE)

        self._export_in_flight = True
        try:
            report = self.require_report()
            path = write(report)
        except MissingRenderTargetError as e:
            logger.error(f"❌ {label} export requested before a result card exists")
            return self._failure(export_format, e, MISSING_TARGET_MESSAGE)
        except Exception as e:
            error = EncodingFailureError(export_format, e)
            logger.error(f"❌ {error}")
            return self._failure(
                export_format, error, f"Failed to generate {label}. Please try again."
            )
        finally:
            self._export_in_flight = False

        return ExportOutcome(
            export_format=export_format,
            success=True,
            path=path,
            notification=Notification(
                title="Success",
                description=f"{label} downloaded successfully!",
            ),
        )

    def _failure(self, export_format: str, error: ResultCardError, message: str) -> ExportOutcome:
        return ExportOutcome(
            export_format=export_format,
            success=False,
            error=error,
            notification=Notification(title="Error", description=message, variant="destructive"),
        )
