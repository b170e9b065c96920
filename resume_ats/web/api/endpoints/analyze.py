"""Résumé analysis endpoint."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..deps import get_llm_client
from ..upload import read_upload_with_limit
from ...errors import to_api_error
from ....domain.analyzer import analyze_resume, resolve_resume_text
from ....domain.schemas import AnalyzeResult
from ....llm import LLMClient

router = APIRouter(prefix="/analyze", tags=["analyze"])


@router.post("", response_model=AnalyzeResult)
async def analyze(
    resumeFile: Optional[UploadFile] = File(default=None),
    resumeText: Optional[str] = Form(default=None),
    jobDescription: Optional[str] = Form(default=None),
    client: LLMClient = Depends(get_llm_client),
) -> AnalyzeResult:
    try:
        file_content = None
        filename = ""
        content_type = None
        if resumeFile is not None:
            file_content = await read_upload_with_limit(resumeFile)
            filename = resumeFile.filename or ""
            content_type = resumeFile.content_type

        parsed = resolve_resume_text(
            file_content=file_content,
            filename=filename,
            content_type=content_type,
            resume_text=resumeText,
        )
        return await analyze_resume(client, parsed.text, jobDescription)
    except Exception as exc:
        raise to_api_error(exc, "analyze resume") from exc
