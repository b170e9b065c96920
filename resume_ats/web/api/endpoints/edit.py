"""Structured résumé edit endpoint."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...errors import to_api_error
from ....domain.resume_edits import ResumeEdit, apply_edits
from ....domain.resume_writer import document_to_markdown
from ....domain.schemas import ResumeDocument

router = APIRouter(prefix="/edit", tags=["edit"])


class EditRequest(BaseModel):
    document: ResumeDocument
    edits: List[ResumeEdit] = Field(default_factory=list)


class EditResponse(BaseModel):
    document: ResumeDocument
    markdown: str


@router.post("", response_model=EditResponse)
async def edit(request: EditRequest) -> EditResponse:
    try:
        document = apply_edits(request.document, request.edits)
    except Exception as exc:
        raise to_api_error(exc, "edit resume") from exc
    return EditResponse(document=document, markdown=document_to_markdown(document))
