"""Analyze and rewrite handlers: validate input, build prompts, delegate to the LLM client."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel

from .errors import InputValidationError
from .file_parser import ParsedResume, parse_resume_file, validate_job_description
from .prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    REWRITE_SYSTEM_PROMPT,
    build_analysis_prompt,
    build_rewrite_prompt,
)
from .schemas import MIN_RESUME_CHARS, AnalyzeResponse, AnalyzeResult, RewriteResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonGenerator(Protocol):
    """What the handlers need from :class:`resume_ats.llm.LLMClient`."""

    async def generate_json(
        self,
        schema: Type[ModelT],
        system_prompt: str,
        user_prompt: str,
    ) -> ModelT: ...


def resolve_resume_text(
    file_content: Optional[bytes] = None,
    filename: str = "",
    content_type: Optional[str] = None,
    resume_text: Optional[str] = None,
) -> ParsedResume:
    """Pick the résumé source for an analysis: an uploaded file wins over pasted text."""
    if file_content is None and not resume_text:
        raise InputValidationError("Resume file or text is required")

    if file_content is not None:
        parsed = parse_resume_file(file_content, filename=filename, content_type=content_type)
        if len(parsed.text) < MIN_RESUME_CHARS:
            raise InputValidationError("Resume text is too short or could not be parsed")
        return parsed

    if len(resume_text) < MIN_RESUME_CHARS:
        raise InputValidationError("Resume text is too short")
    return ParsedResume(text=resume_text, file_name="text-resume.txt", file_type="text/plain")


async def analyze_resume(
    client: JsonGenerator,
    resume_text: str,
    job_description: Optional[str] = None,
) -> AnalyzeResult:
    """Score a résumé for ATS friendliness, optionally against a job description."""
    if not resume_text or len(resume_text) < MIN_RESUME_CHARS:
        raise InputValidationError("Resume text is too short")
    job_description = validate_job_description(job_description)

    logger.info(
        "Analyzing resume: resume_chars=%d job_description_chars=%d",
        len(resume_text), len(job_description),
    )
    analysis = await client.generate_json(
        AnalyzeResponse,
        ANALYSIS_SYSTEM_PROMPT,
        build_analysis_prompt(resume_text, job_description),
    )
    return AnalyzeResult(
        **analysis.model_dump(),
        original_resume_text=resume_text,
        job_description=job_description,
    )


async def rewrite_resume(
    client: JsonGenerator,
    resume_text: str,
    job_description: Optional[str] = None,
    analysis: Optional[Mapping[str, Any]] = None,
) -> RewriteResponse:
    """Rewrite a résumé into Markdown plus a structured document."""
    if not resume_text or len(resume_text) < MIN_RESUME_CHARS:
        raise InputValidationError(
            f"Resume text is required and must be at least {MIN_RESUME_CHARS} characters"
        )

    logger.info(
        "Rewriting resume: resume_chars=%d with_job_description=%s with_analysis=%s",
        len(resume_text), bool(job_description), bool(analysis),
    )
    return await client.generate_json(
        RewriteResponse,
        REWRITE_SYSTEM_PROMPT,
        build_rewrite_prompt(resume_text, job_description or "", analysis),
    )
