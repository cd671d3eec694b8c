from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config.toml")
ENV_PREFIX = "MARKDRAFT_"
DEFAULT_PORT = 3000
DEFAULT_MAX_BODY_MB = 10

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MIME_TYPE = "application/pdf"
DOCX_FILENAME = "MarkDraft_converted.docx"
PDF_FILENAME_TEMPLATE = "MarkDraft_{orientation}.pdf"

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_MAX_BODY_MB",
    "DEFAULT_PORT",
    "DOCX_FILENAME",
    "DOCX_MIME_TYPE",
    "ENV_PREFIX",
    "PDF_FILENAME_TEMPLATE",
    "PDF_MIME_TYPE",
]
