"""Domain models for markdown export requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..constraint import DOCX_MIME_TYPE, PDF_MIME_TYPE
from .errors import INVALID_ORIENTATION_MESSAGE, ValidationError, markdown_required


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @classmethod
    def parse(cls, value: object | None) -> "Orientation":
        """Resolve a client-supplied orientation, defaulting to portrait when falsy."""

        if not value:
            return cls.PORTRAIT
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValidationError("INVALID_ORIENTATION", INVALID_ORIENTATION_MESSAGE) from exc


class OutputFormat(str, Enum):
    DOCX = "docx"
    PDF = "pdf"

    @property
    def profile(self) -> str:
        return f"{self.value}-profile"

    @property
    def mime_type(self) -> str:
        return DOCX_MIME_TYPE if self is OutputFormat.DOCX else PDF_MIME_TYPE


@dataclass(frozen=True, slots=True)
class ConversionRequest:
    """Validated input for a single conversion."""

    markdown: str
    orientation: Orientation = Orientation.PORTRAIT

    @classmethod
    def build(cls, markdown: object | None, orientation: object | None = None) -> "ConversionRequest":
        if not isinstance(markdown, str) or not markdown.strip():
            raise markdown_required()
        return cls(markdown=markdown, orientation=Orientation.parse(orientation))


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    html_fragment: str


@dataclass(frozen=True, slots=True)
class StyledDocument:
    complete_html: str
    profile: str


@dataclass(frozen=True, slots=True)
class ExportResult:
    """A finished document, handed straight to the HTTP response."""

    content: bytes
    filename: str
    mime_type: str

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


__all__ = [
    "ConversionRequest",
    "ExportResult",
    "Orientation",
    "OutputFormat",
    "RenderedDocument",
    "StyledDocument",
]
