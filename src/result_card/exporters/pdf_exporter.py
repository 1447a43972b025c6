#!/usr/bin/env python3
"""
PDF EXPORTER - Rasterized result card PDF
Turns the rendered result card into a pixel snapshot and tiles it onto
portrait A4 pages

GENERATION PROCESS:
1. Render Report to HTML (no interactive controls)
2. Rasterize HTML to one tall snapshot (WeasyPrint -> PyMuPDF pixmaps)
3. Tile the snapshot at fixed page-height increments
4. Write the tiles as a multi-page PDF with Pillow

PAGINATION:
The snapshot is scaled to the page width. Each page shows the next
tile_height_mm slice; the last page is padded with white. Every pixel row
of the snapshot lands on exactly one page.

Dependencies: Pillow (tiling, PDF writer), WeasyPrint + PyMuPDF (rasterizer)
"""

import io
import math
import logging
from pathlib import Path
from typing import Callable, List, Optional

from PIL import Image, ImageChops

from result_card.config import DEFAULT_SETTINGS, ReportSettings

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
CSS_PX_PER_PT = 96 / 72

# Rasterizer contract: (html, base_url) -> RGB snapshot of the rendered view
Rasterizer = Callable[[str, str], Image.Image]


class WeasyPrintRasterizer:
    """Rasterize HTML by laying it out with WeasyPrint and drawing pages with PyMuPDF"""

    # Tall single-column page so the card lays out as one continuous view
    SNAPSHOT_PAGE_CSS = "@page { size: 210mm 1200mm; margin: 0; } body { background: #fff; padding: 0; }"

    def __init__(self, scale: float = 2.0):
        self.scale = scale

    def __call__(self, html: str, base_url: str) -> Image.Image:
        from weasyprint import CSS, HTML
        import fitz

        pdf_bytes = HTML(string=html, base_url=base_url).write_pdf(
            stylesheets=[CSS(string=self.SNAPSHOT_PAGE_CSS)]
        )

        zoom = self.scale * CSS_PX_PER_PT
        frames = []
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            for page in doc:
                pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
                frames.append(Image.frombytes("RGB", (pix.width, pix.height), pix.samples))

        if not frames:
            raise ValueError("Rasterizer produced no pages")

        snapshot = stack_vertically(frames)
        return trim_bottom_whitespace(snapshot)


def stack_vertically(frames: List[Image.Image]) -> Image.Image:
    """Join frames top to bottom into one image"""
    width = max(frame.width for frame in frames)
    height = sum(frame.height for frame in frames)
    canvas = Image.new("RGB", (width, height), "white")
    top = 0
    for frame in frames:
        canvas.paste(frame, (0, top))
        top += frame.height
    return canvas


def trim_bottom_whitespace(snapshot: Image.Image) -> Image.Image:
    """Cut blank rows below the last drawn content; width is kept"""
    background = Image.new("RGB", snapshot.size, "white")
    bbox = ImageChops.difference(snapshot.convert("RGB"), background).getbbox()
    if bbox is None:
        return snapshot
    return snapshot.crop((0, 0, snapshot.width, bbox[3]))


def paginate_snapshot(
    snapshot: Image.Image,
    page_width_mm: float = 210.0,
    page_height_mm: float = 297.0,
    tile_height_mm: float = 295.0,
) -> List[Image.Image]:
    """
    Split a snapshot into page images

    Args:
        snapshot: Rendered view; its width maps onto the page width
        page_width_mm: Page width
        page_height_mm: Page height
        tile_height_mm: Snapshot height placed on each page (<= page height)

    Returns:
        One RGB image per page, each page_height_mm tall at snapshot resolution
    """
    if tile_height_mm > page_height_mm:
        raise ValueError("Tile height cannot exceed page height")

    snapshot = snapshot.convert("RGB")
    px_per_mm = snapshot.width / page_width_mm
    page_height_px = max(1, round(page_height_mm * px_per_mm))
    tile_height_px = max(1, min(page_height_px, round(tile_height_mm * px_per_mm)))
    page_count = max(1, math.ceil(snapshot.height / tile_height_px))

    pages = []
    for index in range(page_count):
        top = index * tile_height_px
        bottom = min(top + tile_height_px, snapshot.height)
        page = Image.new("RGB", (snapshot.width, page_height_px), "white")
        if bottom > top:
            page.paste(snapshot.crop((0, top, snapshot.width, bottom)), (0, 0))
        pages.append(page)

    logger.debug(
        f"Paginated {snapshot.width}x{snapshot.height} snapshot into {page_count} page(s)"
    )
    return pages


def write_pages_pdf(pages: List[Image.Image], output, page_width_mm: float = 210.0):
    """Write page images as a PDF whose pages are page_width_mm wide"""
    if not pages:
        raise ValueError("No pages to write")
    resolution = pages[0].width / (page_width_mm / MM_PER_INCH)
    pages[0].save(
        output,
        format="PDF",
        save_all=True,
        append_images=pages[1:],
        resolution=resolution,
    )


class PdfExporter:
    """Export rendered result card HTML to a paginated, rasterized PDF"""

    def __init__(
        self,
        settings: Optional[ReportSettings] = None,
        rasterizer: Optional[Rasterizer] = None,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self.rasterizer = rasterizer or WeasyPrintRasterizer(self.settings.raster_scale)

    def render_pages(self, html: str) -> List[Image.Image]:
        snapshot = self.rasterizer(html, str(self.settings.templates_dir))
        return paginate_snapshot(
            snapshot,
            page_width_mm=self.settings.page_width_mm,
            page_height_mm=self.settings.page_height_mm,
            tile_height_mm=self.settings.tile_height_mm,
        )

    def to_bytes(self, html: str) -> bytes:
        buffer = io.BytesIO()
        write_pages_pdf(self.render_pages(html), buffer, self.settings.page_width_mm)
        return buffer.getvalue()

    def export(self, html: str, output_path: Path) -> Path:
        """
        Generate the PDF file

        Args:
            html: Non-interactive result card HTML
            output_path: Destination .pdf path

        Returns:
            Path to the written PDF
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        pages = self.render_pages(html)
        write_pages_pdf(pages, output_path, self.settings.page_width_mm)

        logger.info(f"PDF generated ({len(pages)} page(s)): {output_path}")
        return output_path
