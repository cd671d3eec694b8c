"""Conversion error taxonomy.

Every error carries a machine-readable ``code``, an HTTP ``status_code`` and a
user-facing message. The message is always a sanitized string; the original
exception is chained via ``raise ... from`` and only ever logged.
"""

from __future__ import annotations

MARKDOWN_REQUIRED_MESSAGE = "Markdown content is required."
INVALID_ORIENTATION_MESSAGE = "Orientation must be 'portrait' or 'landscape'."
INVALID_BODY_MESSAGE = "Invalid request body."
SIZE_LIMIT_MESSAGE = "Request body is too large."
DOCX_FAILED_MESSAGE = "Failed to create Word document."
PDF_FAILED_MESSAGE = "Failed to generate PDF document."
ENGINE_FAILED_MESSAGE = (
    "PDF generation timed out or the rendering engine failed. "
    "The document might be too complex or large for current resources."
)
ENGINE_OOM_MESSAGE = "PDF generation failed due to insufficient memory resources."
UNEXPECTED_MESSAGE = "An unexpected server error occurred."


class ConversionError(RuntimeError):
    status_code: int = 500

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ValidationError(ConversionError):
    status_code = 400


class PayloadTooLargeError(ConversionError):
    status_code = 413

    def __init__(self) -> None:
        super().__init__("SIZE_LIMIT", SIZE_LIMIT_MESSAGE)


class ExportError(ConversionError):
    status_code = 500


class EngineResourceError(ExportError):
    """The PDF rendering engine timed out, was unreachable or ran out of memory."""


def markdown_required() -> ValidationError:
    return ValidationError("MARKDOWN_REQUIRED", MARKDOWN_REQUIRED_MESSAGE)


def classify_engine_failure(exc: BaseException) -> ExportError:
    """Map a rendering-engine exception onto the user-facing taxonomy."""

    text = str(exc)
    lowered = text.lower()
    if "timeout" in lowered or "ERR_CONNECTION_REFUSED" in text:
        return EngineResourceError("ENGINE_FAILED", ENGINE_FAILED_MESSAGE)
    if "memory" in lowered:
        return EngineResourceError("ENGINE_OOM", ENGINE_OOM_MESSAGE)
    return ExportError("PDF_FAILED", PDF_FAILED_MESSAGE)


__all__ = [
    "ConversionError",
    "EngineResourceError",
    "ExportError",
    "PayloadTooLargeError",
    "ValidationError",
    "classify_engine_failure",
    "markdown_required",
]
