"""Error hierarchy for result card generation."""

from typing import List, Optional


class ResultCardError(Exception):
    """Base class for result card errors."""


class InvalidInputError(ResultCardError):
    """Raised when a pure function receives input it cannot grade or place."""


class FormValidationError(ResultCardError):
    """Raised when the intake form is submitted with required fields left blank."""

    def __init__(self, missing_fields: List[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            f"Missing required fields: {', '.join(self.missing_fields)}"
        )


class MissingRenderTargetError(ResultCardError):
    """Raised when an export is requested before a report has been generated."""


class EncodingFailureError(ResultCardError):
    """Raised when the PDF, DOCX or HTML encoder fails."""

    def __init__(self, export_format: str, cause: Optional[BaseException] = None):
        self.export_format = export_format
        self.cause = cause
        message = f"{export_format.upper()} generation failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ExportInProgressError(ResultCardError):
    """Raised when an export is requested while another one is still running."""
