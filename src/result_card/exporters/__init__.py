from result_card.exporters.docx_exporter import DocxExporter
from result_card.exporters.pdf_exporter import (
    PdfExporter,
    WeasyPrintRasterizer,
    paginate_snapshot,
    write_pages_pdf,
)

__all__ = [
    "DocxExporter",
    "PdfExporter",
    "WeasyPrintRasterizer",
    "paginate_snapshot",
    "write_pages_pdf",
]
