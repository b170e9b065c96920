"""Resume ATS Domain - résumé handling independent of the web layer.

Everything here operates on bytes, strings and pydantic models. The only
outward dependency is the ``generate_json`` callable passed to the analyze
and rewrite handlers.
"""

from .analyzer import analyze_resume, resolve_resume_text, rewrite_resume
from .errors import (
    FileParseError,
    FileTooLargeError,
    InputValidationError,
    ResumeEditError,
    UnsupportedCharactersError,
    UnsupportedFileTypeError,
)
from .exporters import ExportedFile, render_document, render_docx, render_pdf
from .file_parser import MAX_RESUME_BYTES, ParsedResume, parse_resume_file, validate_job_description
from .resume_edits import ResumeEdit, apply_edits
from .resume_writer import document_to_markdown
from .schemas import (
    AnalyzeResponse,
    AnalyzeResult,
    ExportRequest,
    ResumeDocument,
    RewriteRequest,
    RewriteResponse,
)

__all__ = [
    # Handlers
    "analyze_resume",
    "rewrite_resume",
    "resolve_resume_text",
    # Parsing
    "MAX_RESUME_BYTES",
    "ParsedResume",
    "parse_resume_file",
    "validate_job_description",
    # Export
    "ExportedFile",
    "render_document",
    "render_docx",
    "render_pdf",
    "document_to_markdown",
    # Edits
    "ResumeEdit",
    "apply_edits",
    # Schemas
    "AnalyzeResponse",
    "AnalyzeResult",
    "ExportRequest",
    "ResumeDocument",
    "RewriteRequest",
    "RewriteResponse",
    # Errors
    "InputValidationError",
    "FileTooLargeError",
    "UnsupportedFileTypeError",
    "FileParseError",
    "ResumeEditError",
    "UnsupportedCharactersError",
]
