import json
from pathlib import Path

from core.markdraft.config import AppConfig, apply_settings, dump_config, load_config
from core.settings import Settings, _read_settings


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.toml")
    assert config.api.port == 3000
    assert config.runtime.max_body_mb == 10
    assert config.runtime.log_file is None
    assert "--no-sandbox" in config.pdf.launch_args
    assert config.docx.filename == "MarkDraft_converted.docx"


def test_load_config_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                "[runtime]",
                "max_body_mb = 2",
                'log_file = "logs/out.jsonl"',
                'log_level = "debug"',
                "[api]",
                "port = 8080",
                "[pdf]",
                'margin_left = "10mm"',
                'launch_args = ["--no-sandbox"]',
                "[docx]",
                "cant_split_rows = false",
            ]
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.runtime.max_body_bytes == 2 * 1024 * 1024
    assert config.runtime.log_file == Path("logs/out.jsonl")
    assert config.runtime.log_level == "DEBUG"
    assert config.api.port == 8080
    assert config.pdf.margins["left"] == "10mm"
    assert config.pdf.margins["top"] == "20mm"
    assert config.pdf.launch_args == ("--no-sandbox",)
    assert config.docx.cant_split_rows is False


def test_settings_override_config(tmp_path: Path) -> None:
    settings = Settings(port=4100, log_file=tmp_path / "x.jsonl", log_level="WARNING")
    config = apply_settings(AppConfig(), settings)
    assert config.api.port == 4100
    assert config.runtime.log_file == tmp_path / "x.jsonl"
    assert config.runtime.log_level == "WARNING"


def test_read_settings_from_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PORT", "5123")
    monkeypatch.setenv("MARKDRAFT_CONFIG_PATH", str(tmp_path / "c.toml"))
    settings = _read_settings()
    assert settings.port == 5123
    assert settings.config_path == tmp_path / "c.toml"


def test_invalid_port_is_ignored(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    assert _read_settings().port is None
    monkeypatch.setenv("PORT", "70000")
    assert _read_settings().port is None


def test_dump_config_is_json() -> None:
    payload = json.loads(dump_config(AppConfig()))
    assert payload["api"]["port"] == 3000
    assert payload["pdf"]["margins"]["bottom"] == "20mm"
    assert payload["runtime"]["log_file"] is None
