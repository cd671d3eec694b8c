from __future__ import annotations

from typing import Protocol

from ..models import ConversionRequest, ExportResult, OutputFormat, StyledDocument


class Exporter(Protocol):
    output_format: OutputFormat

    async def export(
        self, document: StyledDocument, request: ConversionRequest
    ) -> ExportResult:  # pragma: no cover - interface
        ...


__all__ = ["Exporter"]
