"""Résumé rewrite endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import get_llm_client
from ...errors import to_api_error
from ....domain.analyzer import rewrite_resume
from ....domain.schemas import RewriteRequest, RewriteResponse
from ....llm import LLMClient

router = APIRouter(prefix="/rewrite", tags=["rewrite"])


@router.post("", response_model=RewriteResponse)
async def rewrite(
    request: RewriteRequest,
    client: LLMClient = Depends(get_llm_client),
) -> RewriteResponse:
    try:
        return await rewrite_resume(
            client,
            request.resumeText,
            job_description=request.jobDescription,
            analysis=request.analysis,
        )
    except Exception as exc:
        raise to_api_error(exc, "rewrite resume") from exc
