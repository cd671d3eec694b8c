from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ...settings import get_settings
from ..config import AppConfig, apply_settings, dump_config, load_config
from ..core import ConversionService
from ..errors import ConversionError
from ..logging import configure_logging
from ..models import ConversionRequest, OutputFormat
from ..utils import atomic_write_bytes

console = Console()

app = typer.Typer(help="Markdown to Word and PDF export toolkit")


def _load_config(path: Path | None) -> AppConfig:
    settings = get_settings()
    return apply_settings(load_config(path or settings.config_path), settings)


def _read_markdown(file: Path) -> str:
    if not file.is_file():
        console.print(f"[red]Not a file[/red]: {file}")
        raise typer.Exit(1)
    return file.read_text(encoding="utf-8")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", min=1, max=65535, help="Port to listen on"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    import uvicorn

    from api.app import create_app

    cfg = _load_config(config)
    configure_logging(cfg.runtime.log_level)
    bind_host = host or cfg.api.host
    bind_port = port or cfg.api.port
    console.print(f"MarkDraft server running at http://localhost:{bind_port}")
    uvicorn.run(create_app(cfg), host=bind_host, port=bind_port, log_level=cfg.runtime.log_level.lower())


@app.command()
def convert(
    file: Path,
    to: OutputFormat = typer.Option(OutputFormat.DOCX, "--to", help="Output format"),
    orientation: str = typer.Option("portrait", "--orientation", help="PDF page orientation"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Destination file"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    service = ConversionService(cfg)
    markdown = _read_markdown(file)
    try:
        request = ConversionRequest.build(markdown, orientation)
        result = asyncio.run(service.convert(to, request))
    except ConversionError as exc:
        console.print(f"[red]Conversion failed[/red]: {exc.code} - {exc.message}")
        raise typer.Exit(1) from exc
    destination = output or file.with_name(result.filename)
    atomic_write_bytes(destination, result.content)
    console.print(f"[green]Success[/green]: wrote {len(result.content)} bytes to {destination}")


@app.command()
def render(
    file: Path,
    profile: OutputFormat = typer.Option(OutputFormat.PDF, "--profile", help="Styling profile to apply"),
    fragment: bool = typer.Option(False, "--fragment", help="Print the bare HTML fragment"),
) -> None:
    service = ConversionService(_load_config(None))
    markdown = _read_markdown(file)
    try:
        request = ConversionRequest.build(markdown)
    except ConversionError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1) from exc
    if fragment:
        typer.echo(service.renderer.render(request.markdown).html_fragment)
        return
    typer.echo(service.prepare(request, profile).complete_html)


@app.command()
def profiles() -> None:
    service = ConversionService(_load_config(None))
    table = Table(title="Template profiles")
    table.add_column("Profile", no_wrap=True)
    table.add_column("Version", no_wrap=True)
    table.add_column("Source", overflow="fold")
    for name, profile in sorted(service.composer.profiles.items()):
        table.add_row(name, str(profile.version), str(profile.path))
    console.print(table)


@app.command()
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    typer.echo(dump_config(_load_config(config)))


if __name__ == "__main__":
    app()
