from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from core.markdraft.config import AppConfig, apply_settings, load_config
from core.markdraft.core import ConversionService
from core.settings import Settings, get_settings

from .errors import register_exception_handlers
from .routers import convert, health, pages

STATIC_DIR = Path(__file__).with_name("static")


def create_app(config: AppConfig | None = None, service: ConversionService | None = None) -> FastAPI:
    config = config or _prepare_config(get_settings())
    service = service or ConversionService(config)

    app = FastAPI(title="MarkDraft", version="0.1.0")
    app.state.config = config
    app.state.service = service
    app.state.static_dir = config.runtime.static_dir or STATIC_DIR

    register_exception_handlers(app)
    app.include_router(health.router)
    app.include_router(pages.router)
    app.include_router(convert.router)
    app.mount("/static", StaticFiles(directory=app.state.static_dir), name="static")
    return app


def _prepare_config(settings: Settings) -> AppConfig:
    return apply_settings(load_config(settings.config_path), settings)


__all__ = ["create_app"]
