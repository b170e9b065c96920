"""Text extraction for uploaded résumé files and job description checks."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import List, Optional

from .errors import FileParseError, FileTooLargeError, InputValidationError, UnsupportedFileTypeError
from .schemas import MAX_JOB_DESCRIPTION_CHARS, MIN_JOB_DESCRIPTION_CHARS

logger = logging.getLogger(__name__)

MAX_RESUME_BYTES = 4 * 1024 * 1024

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

FILE_TOO_LARGE_MESSAGE = "File size must be less than 4MB."
UNSUPPORTED_TYPE_MESSAGE = "Unsupported file type. Please upload a PDF or DOCX file."
PARSE_FAILED_MESSAGE = (
    "Failed to parse the file. Please try uploading a different file or paste the text instead."
)

_GENERIC_MIME_TYPES = {"", "application/octet-stream"}
_EXTENSION_MIME = {".pdf": PDF_MIME, ".docx": DOCX_MIME}


@dataclass
class ParsedResume:
    text: str
    file_name: str
    file_type: str


def resolve_content_type(content_type: Optional[str], filename: str = "") -> str:
    """Return the declared MIME type, or one inferred from *filename* when the declaration is generic."""
    declared = (content_type or "").split(";", 1)[0].strip().lower()
    if declared in _GENERIC_MIME_TYPES:
        return _EXTENSION_MIME.get(PurePath(filename or "").suffix.lower(), declared)
    return declared


def parse_resume_file(content: bytes, filename: str = "", content_type: Optional[str] = None) -> ParsedResume:
    """Extract plain text from an uploaded PDF or DOCX.

    Size and type problems raise :class:`FileTooLargeError` /
    :class:`UnsupportedFileTypeError` with their own messages; anything that
    goes wrong inside the extractors is reported as :class:`FileParseError`.
    """
    if len(content) > MAX_RESUME_BYTES:
        raise FileTooLargeError(FILE_TOO_LARGE_MESSAGE)

    file_type = resolve_content_type(content_type, filename)
    if file_type == PDF_MIME:
        extractor = extract_pdf_text
    elif file_type == DOCX_MIME:
        extractor = extract_docx_text
    else:
        raise UnsupportedFileTypeError(UNSUPPORTED_TYPE_MESSAGE)

    try:
        text = extractor(content)
    except Exception as exc:
        logger.error("File parsing error: file=%s type=%s error=%s", filename, file_type, exc)
        raise FileParseError(PARSE_FAILED_MESSAGE) from exc

    return ParsedResume(text=text.strip(), file_name=filename, file_type=file_type)


def extract_pdf_text(content: bytes) -> str:
    """Extract page text from PDF bytes using PyMuPDF."""
    import pymupdf

    with pymupdf.open(stream=content, filetype="pdf") as doc:
        return "\n".join(page.get_text() for page in doc)


def extract_docx_text(content: bytes) -> str:
    """Extract paragraph and table text from DOCX bytes using python-docx."""
    from docx import Document

    doc = Document(io.BytesIO(content))
    text_parts: List[str] = [para.text for para in doc.paragraphs if para.text.strip()]

    for table in doc.tables:
        for row in table.rows:
            row_text = "\t".join(cell.text.strip() for cell in row.cells if cell.text.strip())
            if row_text:
                text_parts.append(row_text)

    return "\n".join(text_parts)


def validate_job_description(job_description: Optional[str]) -> str:
    """Return the job description to use ("" when absent) or raise InputValidationError."""
    if not job_description or not job_description.strip():
        return ""

    if len(job_description) < MIN_JOB_DESCRIPTION_CHARS:
        raise InputValidationError(
            f"Job description is too short. Please provide at least {MIN_JOB_DESCRIPTION_CHARS} characters."
        )

    if len(job_description) > MAX_JOB_DESCRIPTION_CHARS:
        raise InputValidationError(
            f"Job description is too long. Please keep it under {MAX_JOB_DESCRIPTION_CHARS} characters."
        )

    return job_description
