from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter(tags=["pages"])


@router.get("/", summary="Client page", include_in_schema=False)
def index(request: Request) -> FileResponse:
    static_dir: Path = request.app.state.static_dir
    page = static_dir / "index.html"
    if not page.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(page, media_type="text/html")


__all__ = ["router"]
