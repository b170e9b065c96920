"""Binary exporters for structured résumés."""

from __future__ import annotations

from dataclasses import dataclass

from ..schemas import ExportFormat, ResumeDocument
from .docx_renderer import render_docx
from .pdf_renderer import render_pdf

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class ExportedFile:
    content: bytes
    media_type: str
    extension: str


def render_document(resume: ResumeDocument, fmt: ExportFormat) -> ExportedFile:
    """Render *resume* as ``"docx"`` or ``"pdf"``; the output depends only on the input."""
    if fmt == "docx":
        return ExportedFile(render_docx(resume), DOCX_MEDIA_TYPE, "docx")
    if fmt == "pdf":
        return ExportedFile(render_pdf(resume), PDF_MEDIA_TYPE, "pdf")
    raise ValueError("Invalid format. Use 'docx' or 'pdf'")


__all__ = [
    "DOCX_MEDIA_TYPE",
    "ExportedFile",
    "PDF_MEDIA_TYPE",
    "render_docx",
    "render_document",
    "render_pdf",
]
