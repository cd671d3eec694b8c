from __future__ import annotations

from .base import Exporter
from .docx import DocxExporter
from .pdf import PdfExporter, PdfJob, PdfState, launch_engine

__all__ = [
    "DocxExporter",
    "Exporter",
    "PdfExporter",
    "PdfJob",
    "PdfState",
    "launch_engine",
]
