"""Markdown to Word and PDF export toolkit."""

from .config import AppConfig, load_config
from .core import ConversionService
from .errors import ConversionError, EngineResourceError, ExportError, ValidationError
from .models import ConversionRequest, ExportResult, Orientation, OutputFormat

__all__ = [
    "AppConfig",
    "ConversionError",
    "ConversionRequest",
    "ConversionService",
    "EngineResourceError",
    "ExportError",
    "ExportResult",
    "Orientation",
    "OutputFormat",
    "ValidationError",
    "load_config",
]
