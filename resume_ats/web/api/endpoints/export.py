"""Résumé export endpoint (DOCX / PDF download)."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter
from fastapi.responses import Response

from ...errors import APIError, to_api_error
from ....domain.exporters import render_document
from ....domain.schemas import ExportRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["export"])


def export_filename(extension: str) -> str:
    return f"resume-{int(time.time() * 1000)}.{extension}"


@router.post("")
async def export(request: ExportRequest) -> Response:
    if request.format not in ("docx", "pdf"):
        raise APIError(400, "INVALID_FORMAT", "Invalid format. Use 'docx' or 'pdf'")

    try:
        exported = render_document(request.rewriteJson, request.format)
    except Exception as exc:
        raise to_api_error(exc, "export resume") from exc

    logger.info("Exported resume: format=%s bytes=%d", request.format, len(exported.content))
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(exported.extension)}"',
        },
    )
