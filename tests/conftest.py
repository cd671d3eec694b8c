from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from core.markdraft.config import AppConfig, RuntimeConfig
from core.markdraft.core import ConversionService
from core.markdraft.exporters import PdfExporter


class FakePage:
    def __init__(self, engine: "FakeEngineFactory") -> None:
        self._engine = engine

    async def set_content(self, html: str, wait_until: str) -> None:
        self._engine.loaded.append((html, wait_until))
        if self._engine.fail_on == "load":
            raise RuntimeError(self._engine.error_message)

    async def pdf(self, **options: object) -> bytes:
        self._engine.print_calls.append(options)
        if self._engine.fail_on == "print":
            raise RuntimeError(self._engine.error_message)
        return b"%PDF-1.7\n% fake document\n%%EOF\n"


class FakeBrowser:
    def __init__(self, engine: "FakeEngineFactory") -> None:
        self._engine = engine

    async def new_page(self) -> FakePage:
        return FakePage(self._engine)


class FakeEngineFactory:
    """Stands in for ``launch_engine`` and counts engine instances still open."""

    def __init__(self, fail_on: str | None = None, error_message: str = "boom") -> None:
        self.fail_on = fail_on
        self.error_message = error_message
        self.launches = 0
        self.open = 0
        self.loaded: list[tuple[str, str]] = []
        self.print_calls: list[dict[str, object]] = []

    @asynccontextmanager
    async def __call__(self, config):  # type: ignore[no-untyped-def]
        self.launches += 1
        if self.fail_on == "launch":
            raise RuntimeError(self.error_message)
        self.open += 1
        try:
            yield FakeBrowser(self)
        finally:
            self.open -= 1


@pytest.fixture
def engine() -> FakeEngineFactory:
    return FakeEngineFactory()


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(runtime=RuntimeConfig(log_file=tmp_path / "logs" / "conversions.jsonl"))


@pytest.fixture
def service(config: AppConfig, engine: FakeEngineFactory) -> ConversionService:
    return ConversionService(config, pdf_exporter=PdfExporter(config.pdf, engine_factory=engine))


@pytest.fixture
def client(config: AppConfig, service: ConversionService) -> TestClient:
    return TestClient(create_app(config, service))


@pytest.fixture
def make_client(config: AppConfig):
    """Build a client around a service with custom collaborators."""

    def _make(
        engine: FakeEngineFactory | None = None,
        *,
        raise_server_exceptions: bool = True,
        **collaborators: object,
    ) -> TestClient:
        if "pdf_exporter" not in collaborators:
            collaborators["pdf_exporter"] = PdfExporter(
                config.pdf, engine_factory=engine or FakeEngineFactory()
            )
        service = ConversionService(config, **collaborators)  # type: ignore[arg-type]
        return TestClient(create_app(config, service), raise_server_exceptions=raise_server_exceptions)

    return _make


@pytest.fixture
def failing_engine():
    def _make(fail_on: str, message: str = "boom") -> FakeEngineFactory:
        return FakeEngineFactory(fail_on=fail_on, error_message=message)

    return _make
