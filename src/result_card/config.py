"""
Report settings.

School branding, page geometry and output locations live here as code
defaults; callers override them by constructing ReportSettings with
keyword arguments.
"""

from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from result_card.core.models import GradingScale

PACKAGE_DIR = Path(__file__).parent


class ReportSettings(BaseModel):
    """Branding, layout and output configuration for result cards"""

    school_name: str = Field("The Smart School", description="School name in the header")
    logo_lines: List[str] = Field(
        default_factory=lambda: [
            "The",
            "Smart",
            "School",
            "Tomorrow is our Destiny",
            "A Project of The City School",
        ],
        description="Text lines inside the header logo box",
    )
    term_label: str = Field("Term I", description="Term shown after the academic year")

    # Page geometry in millimetres; tiles are slightly shorter than the
    # A4 page so the bottom edge of each page stays blank
    page_width_mm: float = Field(210.0, gt=0)
    page_height_mm: float = Field(297.0, gt=0)
    tile_height_mm: float = Field(295.0, gt=0)
    raster_scale: float = Field(2.0, gt=0, description="Snapshot pixels per CSS pixel")

    templates_dir: Path = Field(default_factory=lambda: PACKAGE_DIR / "templates")
    output_dir: Path = Field(default_factory=lambda: Path.cwd() / "output")

    grading_scale: GradingScale = Field(default_factory=GradingScale)

    not_available_label: str = Field("N/A", description="Shown where no data source exists")
    date_format: str = Field("%B %d, %Y", description="strftime format for the signature date")

    model_config = ConfigDict(frozen=True)


DEFAULT_SETTINGS = ReportSettings()
