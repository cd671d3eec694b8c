from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

from ..constraint import DEFAULT_CONFIG_PATH, DEFAULT_MAX_BODY_MB, DEFAULT_PORT, DOCX_FILENAME
from ..settings import Settings

DEFAULT_LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--font-render-hinting=none",
)


@dataclass(slots=True)
class RuntimeConfig:
    max_body_mb: int = DEFAULT_MAX_BODY_MB
    log_file: Path | None = None
    log_level: str = "INFO"
    static_dir: Path | None = None

    @property
    def max_body_bytes(self) -> int:
        return self.max_body_mb * 1024 * 1024


@dataclass(slots=True)
class APIConfig:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT


@dataclass(slots=True)
class PDFConfig:
    margin_top: str = "20mm"
    margin_right: str = "15mm"
    margin_bottom: str = "20mm"
    margin_left: str = "15mm"
    launch_args: tuple[str, ...] = DEFAULT_LAUNCH_ARGS
    wait_until: str = "networkidle"

    @property
    def margins(self) -> dict[str, str]:
        return {
            "top": self.margin_top,
            "right": self.margin_right,
            "bottom": self.margin_bottom,
            "left": self.margin_left,
        }


@dataclass(slots=True)
class DOCXConfig:
    filename: str = DOCX_FILENAME
    cant_split_rows: bool = True


@dataclass(slots=True)
class AppConfig:
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    api: APIConfig = field(default_factory=APIConfig)
    pdf: PDFConfig = field(default_factory=PDFConfig)
    docx: DOCXConfig = field(default_factory=DOCXConfig)


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _optional_path(value: object | None) -> Path | None:
    if not value:
        return None
    return Path(str(value))


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    return RuntimeConfig(
        max_body_mb=int(data.get("max_body_mb", DEFAULT_MAX_BODY_MB)),
        log_file=_optional_path(data.get("log_file")),
        log_level=str(data.get("log_level", "INFO")).upper(),
        static_dir=_optional_path(data.get("static_dir")),
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(host=str(data.get("host", "0.0.0.0")), port=int(data.get("port", DEFAULT_PORT)))


def _tuple_of_strings(value: object | None, default: Iterable[str]) -> tuple[str, ...]:
    if not value:
        return tuple(default)
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(str(item) for item in value)
    raise TypeError(f"Unsupported launch_args configuration: {value!r}")


def _build_pdf(data: Mapping[str, object] | None) -> PDFConfig:
    if not data:
        return PDFConfig()
    return PDFConfig(
        margin_top=str(data.get("margin_top", "20mm")),
        margin_right=str(data.get("margin_right", "15mm")),
        margin_bottom=str(data.get("margin_bottom", "20mm")),
        margin_left=str(data.get("margin_left", "15mm")),
        launch_args=_tuple_of_strings(data.get("launch_args"), DEFAULT_LAUNCH_ARGS),
        wait_until=str(data.get("wait_until", "networkidle")),
    )


def _build_docx(data: Mapping[str, object] | None) -> DOCXConfig:
    if not data:
        return DOCXConfig()
    return DOCXConfig(
        filename=str(data.get("filename", DOCX_FILENAME)),
        cant_split_rows=bool(data.get("cant_split_rows", True)),
    )


def _section(raw: Mapping[str, object], name: str) -> Mapping[str, object] | None:
    value = raw.get(name) if isinstance(raw, Mapping) else None
    return value if isinstance(value, Mapping) else None


def load_config(path: Path | None = None) -> AppConfig:
    path = path or DEFAULT_CONFIG_PATH
    raw = _read_toml(path)
    return AppConfig(
        runtime=_build_runtime(_section(raw, "runtime")),
        api=_build_api(_section(raw, "api")),
        pdf=_build_pdf(_section(raw, "pdf")),
        docx=_build_docx(_section(raw, "docx")),
    )


def apply_settings(config: AppConfig, settings: Settings) -> AppConfig:
    """Overlay environment settings on top of file configuration."""

    if settings.port is not None:
        config.api.port = settings.port
    if settings.log_file is not None:
        config.runtime.log_file = settings.log_file
    if settings.log_level is not None:
        config.runtime.log_level = settings.log_level
    return config


def dump_config(config: AppConfig) -> str:
    payload = {
        "runtime": {
            "max_body_mb": config.runtime.max_body_mb,
            "log_file": str(config.runtime.log_file) if config.runtime.log_file else None,
            "log_level": config.runtime.log_level,
            "static_dir": str(config.runtime.static_dir) if config.runtime.static_dir else None,
        },
        "api": {
            "host": config.api.host,
            "port": config.api.port,
        },
        "pdf": {
            "margins": config.pdf.margins,
            "launch_args": list(config.pdf.launch_args),
            "wait_until": config.pdf.wait_until,
        },
        "docx": {
            "filename": config.docx.filename,
            "cant_split_rows": config.docx.cant_split_rows,
        },
    }
    return json.dumps(payload, indent=2)


__all__ = [
    "APIConfig",
    "AppConfig",
    "DOCXConfig",
    "PDFConfig",
    "RuntimeConfig",
    "apply_settings",
    "dump_config",
    "load_config",
]
