from __future__ import annotations

import pydantic
from fastapi import APIRouter, Depends, Request, Response

from api.dependencies import get_config, get_service
from core.markdraft.config import AppConfig
from core.markdraft.core import ConversionService
from core.markdraft.errors import INVALID_BODY_MESSAGE, PayloadTooLargeError, ValidationError
from core.markdraft.models import ConversionRequest, ExportResult
from models.schemas import ConvertPayload, ErrorBody

router = APIRouter(prefix="/convert", tags=["conversion"])

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorBody, "description": "Missing Markdown or malformed body"},
    413: {"model": ErrorBody, "description": "Request body exceeds the configured limit"},
    500: {"model": ErrorBody, "description": "Document generation failed"},
}


@router.post("/docx", summary="Convert Markdown to a Word document", responses=_ERROR_RESPONSES)
async def convert_docx(
    request: Request,
    service: ConversionService = Depends(get_service),
    config: AppConfig = Depends(get_config),
) -> Response:
    payload = await _read_payload(request, config)
    conversion = ConversionRequest.build(payload.markdown)
    result = await service.convert_docx(conversion)
    return _attachment(result)


@router.post("/pdf", summary="Convert Markdown to a PDF document", responses=_ERROR_RESPONSES)
async def convert_pdf(
    request: Request,
    service: ConversionService = Depends(get_service),
    config: AppConfig = Depends(get_config),
) -> Response:
    payload = await _read_payload(request, config)
    conversion = ConversionRequest.build(payload.markdown, payload.orientation)
    result = await service.convert_pdf(conversion)
    return _attachment(result)


async def _read_payload(request: Request, config: AppConfig) -> ConvertPayload:
    body = await request.body()
    _enforce_size_limit(body, config)
    if not body.strip():
        return ConvertPayload()
    try:
        return ConvertPayload.model_validate_json(body)
    except pydantic.ValidationError as exc:
        raise ValidationError("INVALID_BODY", INVALID_BODY_MESSAGE) from exc


def _enforce_size_limit(payload: bytes, config: AppConfig) -> None:
    if len(payload) > config.runtime.max_body_bytes:
        raise PayloadTooLargeError()


def _attachment(result: ExportResult) -> Response:
    return Response(
        content=result.content,
        media_type=result.mime_type,
        headers={"Content-Disposition": result.content_disposition},
    )


__all__ = ["router"]
