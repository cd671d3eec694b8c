from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger."""

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)


@dataclass(slots=True)
class StageTimings:
    render_ms: float = 0.0
    compose_ms: float = 0.0
    export_ms: float = 0.0


@dataclass(slots=True)
class ConversionLogEntry:
    run_id: str
    output_format: str
    status: str
    orientation: str | None
    error_code: str | None
    timings: StageTimings
    markdown_chars: int
    size_bytes: int

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["timings"] = asdict(self.timings)
        return payload


class ConversionLogger:
    """Appends one JSON line per conversion; a ``None`` path disables the ledger."""

    def __init__(self, log_file: Path | None) -> None:
        self._log_file = log_file
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._log_file is not None

    def append(self, entry: ConversionLogEntry) -> None:
        if self._log_file is None:
            return
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._lock:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            with self._log_file.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")


__all__ = [
    "ConversionLogEntry",
    "ConversionLogger",
    "StageTimings",
    "configure_logging",
]
