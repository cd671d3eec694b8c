from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from .composer import TemplateComposer
from .config import AppConfig
from .errors import ConversionError
from .exporters import DocxExporter, Exporter, PdfExporter
from .logging import ConversionLogEntry, ConversionLogger, StageTimings
from .models import ConversionRequest, ExportResult, OutputFormat, StyledDocument
from .renderer import MarkdownRenderer
from .utils import elapsed_ms, generate_run_id, run_sync

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _PreparedDocument:
    document: StyledDocument
    render_ms: float
    compose_ms: float


class ConversionService:
    """Drives a conversion request through render, compose and export.

    All collaborators are injected so that independent instances can run side by
    side; nothing is shared between requests apart from the read-only template
    profiles and the stateless renderer.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        renderer: MarkdownRenderer | None = None,
        composer: TemplateComposer | None = None,
        docx_exporter: Exporter | None = None,
        pdf_exporter: Exporter | None = None,
        run_logger: ConversionLogger | None = None,
    ) -> None:
        self._config = config or AppConfig()
        self._renderer = renderer or MarkdownRenderer()
        self._composer = composer or TemplateComposer()
        self._exporters: dict[OutputFormat, Exporter] = {
            OutputFormat.DOCX: docx_exporter or DocxExporter(self._config.docx),
            OutputFormat.PDF: pdf_exporter or PdfExporter(self._config.pdf),
        }
        self._run_logger = run_logger or ConversionLogger(self._config.runtime.log_file)

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def renderer(self) -> MarkdownRenderer:
        return self._renderer

    @property
    def composer(self) -> TemplateComposer:
        return self._composer

    def prepare(self, request: ConversionRequest, output_format: OutputFormat) -> StyledDocument:
        return self._prepare(request, output_format).document

    def _prepare(self, request: ConversionRequest, output_format: OutputFormat) -> _PreparedDocument:
        render_start = time.perf_counter()
        rendered = self._renderer.render(request.markdown)
        render_ms = elapsed_ms(render_start)
        compose_start = time.perf_counter()
        document = self._composer.compose(output_format.profile, rendered)
        return _PreparedDocument(document=document, render_ms=render_ms, compose_ms=elapsed_ms(compose_start))

    async def convert(self, output_format: OutputFormat, request: ConversionRequest) -> ExportResult:
        run_id = generate_run_id(output_format.value)
        timings = StageTimings()
        try:
            prepared = await run_sync(self._prepare, request, output_format)
            timings.render_ms = prepared.render_ms
            timings.compose_ms = prepared.compose_ms
            export_start = time.perf_counter()
            result = await self._exporters[output_format].export(prepared.document, request)
            timings.export_ms = elapsed_ms(export_start)
        except ConversionError as exc:
            await self._log(run_id, output_format, request, timings, status="failure", error_code=exc.code)
            raise
        except Exception:
            logger.exception("Unexpected failure converting Markdown to %s", output_format.value)
            await self._log(run_id, output_format, request, timings, status="failure", error_code="UNEXPECTED")
            raise
        await self._log(run_id, output_format, request, timings, status="success", size_bytes=len(result.content))
        logger.info(
            "Converted %s characters of Markdown to %s (%s bytes)",
            len(request.markdown),
            output_format.value,
            len(result.content),
        )
        return result

    async def convert_docx(self, request: ConversionRequest) -> ExportResult:
        return await self.convert(OutputFormat.DOCX, request)

    async def convert_pdf(self, request: ConversionRequest) -> ExportResult:
        return await self.convert(OutputFormat.PDF, request)

    async def _log(
        self,
        run_id: str,
        output_format: OutputFormat,
        request: ConversionRequest,
        timings: StageTimings,
        *,
        status: str,
        error_code: str | None = None,
        size_bytes: int = 0,
    ) -> None:
        await run_sync(
            self._run_logger.append,
            ConversionLogEntry(
                run_id=run_id,
                output_format=output_format.value,
                status=status,
                orientation=request.orientation.value if output_format is OutputFormat.PDF else None,
                error_code=error_code,
                timings=timings,
                markdown_chars=len(request.markdown),
                size_bytes=size_bytes,
            ),
        )


__all__ = ["ConversionService"]
