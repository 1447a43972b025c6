#!/usr/bin/env python3
"""
DOCX EXPORTER - Structured Word result card
Serializes the Report view-model into paragraphs and tables with python-docx

DOCUMENT LAYOUT:
✅ Centered header (school name 16pt bold, campus/year/title 12pt)
✅ Identity paragraphs
✅ Academic performance table (header row + one row per subject)
✅ Overall summary and class statistics paragraphs
✅ General progress table and legend
✅ Comment sections and signature lines

Values are copied from the Report as-is; nothing is regraded here.
"""

import io
import logging
from pathlib import Path
from typing import List

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

from result_card.core.report import LabeledValue, Report

logger = logging.getLogger(__name__)

TITLE_SIZE = Pt(16)
HEADING_SIZE = Pt(14)
BODY_SIZE = Pt(12)
TABLE_STYLE = "Table Grid"


class DocxExporter:
    """Build a Word document from a Report"""

    def build(self, report: Report):
        """
        Build the document in memory

        Args:
            report: Assembled report view-model

        Returns:
            python-docx Document
        """
        doc = Document()

        self._add_text(doc, report.header.school_name, TITLE_SIZE, bold=True, center=True)
        for line in (report.header.campus_line, report.header.year_line, report.header.title):
            self._add_text(doc, line, BODY_SIZE, center=True)
        doc.add_paragraph()

        for field in report.identity:
            self._add_text(doc, f"{field.label}: {field.value}", BODY_SIZE)
        doc.add_paragraph()

        self._add_text(doc, "Academic Performance", HEADING_SIZE, bold=True, center=True)
        self._add_table(
            doc,
            header=report.subject_columns,
            rows=[row.cells() for row in report.subject_rows],
        )
        doc.add_paragraph()

        self._add_labeled_values(doc, report.summary, bold=True)
        self._add_labeled_values(doc, report.class_statistics)
        doc.add_paragraph()

        self._add_text(doc, report.progress_heading, HEADING_SIZE, bold=True, center=True)
        self._add_progress_table(doc, report.general_progress)
        legend = "   ".join(f"{item.label} = {item.value}" for item in report.legend)
        self._add_text(doc, legend, BODY_SIZE, bold=True, center=True)
        doc.add_paragraph()

        for block in report.comments:
            self._add_text(doc, block.title, BODY_SIZE, bold=True)
            self._add_text(doc, block.text, BODY_SIZE)
        doc.add_paragraph()

        for signature in report.signatures:
            text = f"{signature.title}: {signature.name}" if signature.name else f"{signature.title}: ____________"
            self._add_text(doc, text, BODY_SIZE)

        return doc

    def to_bytes(self, report: Report) -> bytes:
        buffer = io.BytesIO()
        self.build(report).save(buffer)
        return buffer.getvalue()

    def export(self, report: Report, output_path: Path) -> Path:
        """Write the document to output_path"""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.build(report).save(str(output_path))
        logger.info(f"DOCX generated: {output_path}")
        return output_path

    def _add_text(self, doc, text: str, size, bold: bool = False, center: bool = False):
        paragraph = doc.add_paragraph()
        run = paragraph.add_run(text)
        run.bold = bold
        run.font.size = size
        if center:
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        return paragraph

    def _add_labeled_values(self, doc, items: List[LabeledValue], bold: bool = False):
        for item in items:
            self._add_text(doc, f"{item.label}: {item.value}", BODY_SIZE, bold=bold)

    def _add_table(self, doc, header: List[str], rows: List[List[str]]):
        table = doc.add_table(rows=1, cols=len(header))
        table.style = TABLE_STYLE
        for cell, text in zip(table.rows[0].cells, header):
            cell.text = ""
            run = cell.paragraphs[0].add_run(text)
            run.bold = True
        for values in rows:
            cells = table.add_row().cells
            for cell, text in zip(cells, values):
                cell.text = text
        return table

    def _add_progress_table(self, doc, cells: List[LabeledValue], per_row: int = 3):
        """Label row followed by value row, per_row categories at a time"""
        table = doc.add_table(rows=0, cols=per_row)
        table.style = TABLE_STYLE
        for start in range(0, len(cells), per_row):
            chunk = cells[start:start + per_row]
            label_cells = table.add_row().cells
            value_cells = table.add_row().cells
            for index, item in enumerate(chunk):
                label_cells[index].text = ""
                label_run = label_cells[index].paragraphs[0].add_run(item.label)
                label_run.bold = True
                value_cells[index].text = item.value
        return table
