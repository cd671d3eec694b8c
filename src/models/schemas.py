from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ConvertPayload(BaseModel):
    """JSON body accepted by the conversion endpoints."""

    model_config = ConfigDict(extra="ignore")

    markdown: str | None = None
    orientation: Any = None


class ErrorBody(BaseModel):
    error: str
