"""Request and response models for analysis, rewrite and export."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

MIN_RESUME_CHARS = 200
MIN_JOB_DESCRIPTION_CHARS = 50
MAX_JOB_DESCRIPTION_CHARS = 5000

ExportFormat = Literal["docx", "pdf"]


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


class KeywordMatch(BaseModel):
    matched: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _make_disjoint(self) -> "KeywordMatch":
        # A keyword reported as both matched and missing counts as matched.
        self.matched = _dedupe(self.matched)
        matched_keys = {_keyword_key(k) for k in self.matched}
        self.missing = [k for k in _dedupe(self.missing) if _keyword_key(k) not in matched_keys]
        return self


class BulletSuggestion(BaseModel):
    original: str
    improved: str
    rationale: Optional[str] = None


class InferredStructure(BaseModel):
    sectionsPresent: List[str] = Field(default_factory=list)
    sectionsMissing: List[str] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    """Shape the LLM must return for an analysis request."""

    ats_score: float = Field(ge=0, le=100)
    keyword_match: KeywordMatch = Field(default_factory=KeywordMatch)
    bullet_suggestions: List[BulletSuggestion] = Field(default_factory=list)
    missing_sections: List[str] = Field(default_factory=list)
    formatting_tips: List[str] = Field(default_factory=list)
    inferred_structure: InferredStructure = Field(default_factory=InferredStructure)


class AnalyzeResult(AnalyzeResponse):
    """Analysis plus the inputs, so the client can send them back for a rewrite."""

    original_resume_text: str
    job_description: str = ""


# ---------------------------------------------------------------------------
# Structured résumé
# ---------------------------------------------------------------------------


class ResumeHeader(BaseModel):
    name: str
    title: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None
    links: List[str] = Field(default_factory=list)


class SkillGroup(BaseModel):
    group: str
    items: List[str] = Field(default_factory=list)


class ExperienceEntry(BaseModel):
    company: str
    role: str
    start: str = ""
    end: str = ""
    bullets: List[str] = Field(default_factory=list)
    tech: List[str] = Field(default_factory=list)


class ProjectEntry(BaseModel):
    name: str
    description: str = ""
    bullets: List[str] = Field(default_factory=list)
    tech: List[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    school: str
    degree: str
    year: Optional[str] = None
    cgpa: Optional[str] = None


class ResumeDocument(BaseModel):
    """Structured résumé used by the editor and the DOCX/PDF exporters."""

    header: ResumeHeader
    summary: str = ""
    skills: List[SkillGroup] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _nulls_to_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("summary", "skills", "experience", "projects", "education", "certifications"):
                if data.get(key) is None:
                    data.pop(key, None)
        return data


class RewriteResponse(BaseModel):
    """Shape the LLM must return for a rewrite request (``{markdown, json}``)."""

    model_config = ConfigDict(populate_by_name=True)

    markdown: str
    structured: ResumeDocument = Field(alias="json")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class RewriteRequest(BaseModel):
    resumeText: str = ""
    jobDescription: Optional[str] = None
    analysis: Optional[Dict[str, Any]] = None


class ExportRequest(BaseModel):
    rewriteJson: ResumeDocument
    # Validated by render_document().
    format: str


def _keyword_key(keyword: str) -> str:
    return keyword.strip().lower()


def _dedupe(keywords: List[str]) -> List[str]:
    seen = set()
    result = []
    for keyword in keywords:
        key = _keyword_key(keyword)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(keyword.strip())
    return result
