"""
On-screen renderer: Report view-model -> HTML via Jinja2.

The same HTML is shown in the browser, printed, and rasterized for the PDF
export. Interactive controls are hidden by the print stylesheet and left
out entirely when rendering for the rasterizer.
"""

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from result_card.config import DEFAULT_SETTINGS, ReportSettings
from result_card.core.report import Report

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "result_card.html"


class ReportRenderer:
    """Render result card HTML from a Report"""

    def __init__(self, settings: Optional[ReportSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.templates_dir = Path(self.settings.templates_dir)

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )

        logger.debug(f"Templates: {self.templates_dir}")

    def render(self, report: Report, interactive: bool = True) -> str:
        """
        Render the report to an HTML string

        Args:
            report: Assembled report view-model
            interactive: Include the print/back toolbar

        Returns:
            Complete HTML document
        """
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(report=report, interactive=interactive)
