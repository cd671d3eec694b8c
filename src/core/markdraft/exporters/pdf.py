"""Headless Chromium PDF export.

Every request launches its own browser, prints once and closes it. The browser
lives inside :func:`launch_engine`, an async context manager, so it is released
on every exit path including failures raised while loading or printing.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from playwright.async_api import Browser, async_playwright

from ..config import PDFConfig
from ..errors import classify_engine_failure
from ..models import ConversionRequest, ExportResult, Orientation, OutputFormat, StyledDocument
from ...constraint import PDF_FILENAME_TEMPLATE

logger = logging.getLogger(__name__)

EngineFactory = Callable[[PDFConfig], AbstractAsyncContextManager[Any]]


class PdfState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ENGINE_LAUNCHING = "engine_launching"
    PAGE_LOADING = "page_loading"
    CONTENT_LOADED = "content_loaded"
    RENDERING = "rendering"
    RENDERED = "rendered"
    ENGINE_CLOSED = "engine_closed"


@dataclass(slots=True)
class PdfJob:
    orientation: Orientation
    state: PdfState = PdfState.UNINITIALIZED
    history: list[PdfState] = field(default_factory=list)
    error: BaseException | None = None

    def advance(self, state: PdfState) -> None:
        self.state = state
        self.history.append(state)

    def fail(self, exc: BaseException) -> None:
        self.error = exc
        self.advance(PdfState.ENGINE_CLOSED)

    @property
    def failed(self) -> bool:
        return self.error is not None


TransitionListener = Callable[[PdfJob], None]


@asynccontextmanager
async def launch_engine(config: PDFConfig) -> AsyncIterator[Browser]:
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=True, args=list(config.launch_args))
        logger.debug("Rendering engine launched")
        try:
            yield browser
        finally:
            await browser.close()
            logger.debug("Rendering engine closed")


def pdf_filename(orientation: Orientation) -> str:
    return PDF_FILENAME_TEMPLATE.format(orientation=orientation.value)


class PdfExporter:
    output_format = OutputFormat.PDF

    def __init__(
        self,
        config: PDFConfig | None = None,
        *,
        engine_factory: EngineFactory | None = None,
        listener: TransitionListener | None = None,
    ) -> None:
        self._config = config or PDFConfig()
        self._engine_factory = engine_factory or launch_engine
        self._listener = listener

    def print_options(self, orientation: Orientation) -> dict[str, Any]:
        return {
            "print_background": True,
            "margin": self._config.margins,
            "landscape": orientation is Orientation.LANDSCAPE,
            "prefer_css_page_size": False,
        }

    async def export(self, document: StyledDocument, request: ConversionRequest) -> ExportResult:
        job = PdfJob(orientation=request.orientation)
        try:
            content = await self._print(document.complete_html, job)
        except Exception as exc:
            failed_in = job.state
            job.fail(exc)
            self._notify(job)
            logger.exception("PDF conversion failed during %s", failed_in.value)
            raise classify_engine_failure(exc) from exc
        return ExportResult(
            content=content,
            filename=pdf_filename(request.orientation),
            mime_type=self.output_format.mime_type,
        )

    async def _print(self, html: str, job: PdfJob) -> bytes:
        self._transition(job, PdfState.ENGINE_LAUNCHING)
        async with self._engine_factory(self._config) as engine:
            self._transition(job, PdfState.PAGE_LOADING)
            page = await engine.new_page()
            await page.set_content(html, wait_until=self._config.wait_until)
            self._transition(job, PdfState.CONTENT_LOADED)
            self._transition(job, PdfState.RENDERING)
            content = await page.pdf(**self.print_options(job.orientation))
            self._transition(job, PdfState.RENDERED)
        self._transition(job, PdfState.ENGINE_CLOSED)
        return content

    def _transition(self, job: PdfJob, state: PdfState) -> None:
        job.advance(state)
        self._notify(job)

    def _notify(self, job: PdfJob) -> None:
        if self._listener is not None:
            self._listener(job)


__all__ = [
    "EngineFactory",
    "PdfExporter",
    "PdfJob",
    "PdfState",
    "launch_engine",
    "pdf_filename",
]
