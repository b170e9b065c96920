"""Typed per-section edits for a structured résumé.

Each edit names its section through the ``op`` tag and carries only the
fields that make sense for it, so a request cannot address a field that the
section does not have. :func:`apply_edits` never mutates its input.
"""

from __future__ import annotations

from typing import Annotated, Callable, Dict, List, Literal, Optional, Sequence, Type, Union

from pydantic import BaseModel, Field

from .errors import ResumeEditError
from .schemas import EducationEntry, ExperienceEntry, ProjectEntry, ResumeDocument, SkillGroup

EntrySection = Literal["skills", "experience", "projects", "education", "certifications"]
BulletSection = Literal["experience", "projects"]


class SetHeaderField(BaseModel):
    op: Literal["set_header_field"] = "set_header_field"
    field: Literal["name", "title", "location", "phone", "email", "linkedin", "portfolio"]
    value: str


class SetSummary(BaseModel):
    op: Literal["set_summary"] = "set_summary"
    value: str


class SetSkillGroup(BaseModel):
    op: Literal["set_skill_group"] = "set_skill_group"
    index: int
    group: Optional[str] = None
    items: Optional[List[str]] = None


class SetExperienceField(BaseModel):
    op: Literal["set_experience_field"] = "set_experience_field"
    index: int
    field: Literal["company", "role", "start", "end"]
    value: str


class SetProjectField(BaseModel):
    op: Literal["set_project_field"] = "set_project_field"
    index: int
    field: Literal["name", "description"]
    value: str


class SetEducationField(BaseModel):
    op: Literal["set_education_field"] = "set_education_field"
    index: int
    field: Literal["school", "degree", "year", "cgpa"]
    value: str


class SetCertification(BaseModel):
    op: Literal["set_certification"] = "set_certification"
    index: int
    value: str


class SetBullet(BaseModel):
    op: Literal["set_bullet"] = "set_bullet"
    section: BulletSection
    index: int
    bullet_index: int
    value: str


class AddBullet(BaseModel):
    op: Literal["add_bullet"] = "add_bullet"
    section: BulletSection
    index: int
    value: str = ""


class RemoveBullet(BaseModel):
    op: Literal["remove_bullet"] = "remove_bullet"
    section: BulletSection
    index: int
    bullet_index: int


class AddEntry(BaseModel):
    op: Literal["add_entry"] = "add_entry"
    section: EntrySection


class RemoveEntry(BaseModel):
    op: Literal["remove_entry"] = "remove_entry"
    section: EntrySection
    index: int


ResumeEdit = Annotated[
    Union[
        SetHeaderField,
        SetSummary,
        SetSkillGroup,
        SetExperienceField,
        SetProjectField,
        SetEducationField,
        SetCertification,
        SetBullet,
        AddBullet,
        RemoveBullet,
        AddEntry,
        RemoveEntry,
    ],
    Field(discriminator="op"),
]


def apply_edits(resume: ResumeDocument, edits: Sequence[ResumeEdit]) -> ResumeDocument:
    """Return a copy of *resume* with *edits* applied in order.

    Raises:
        ResumeEditError: an edit points at an entry or bullet that does not exist
    """
    updated = resume.model_copy(deep=True)
    for position, edit in enumerate(edits):
        handler = _HANDLERS[type(edit)]
        try:
            handler(updated, edit)
        except IndexError as exc:
            raise ResumeEditError(f"Edit #{position} ({edit.op}) is out of range: {exc}") from exc
    return updated


def _entry(items: list, index: int, label: str):
    if index < 0 or index >= len(items):
        raise IndexError(f"{label} index {index} (have {len(items)})")
    return items[index]


def _set_header_field(resume: ResumeDocument, edit: SetHeaderField) -> None:
    setattr(resume.header, edit.field, edit.value)


def _set_summary(resume: ResumeDocument, edit: SetSummary) -> None:
    resume.summary = edit.value


def _set_skill_group(resume: ResumeDocument, edit: SetSkillGroup) -> None:
    group = _entry(resume.skills, edit.index, "skills")
    if edit.group is not None:
        group.group = edit.group
    if edit.items is not None:
        group.items = list(edit.items)


def _set_experience_field(resume: ResumeDocument, edit: SetExperienceField) -> None:
    setattr(_entry(resume.experience, edit.index, "experience"), edit.field, edit.value)


def _set_project_field(resume: ResumeDocument, edit: SetProjectField) -> None:
    setattr(_entry(resume.projects, edit.index, "projects"), edit.field, edit.value)


def _set_education_field(resume: ResumeDocument, edit: SetEducationField) -> None:
    setattr(_entry(resume.education, edit.index, "education"), edit.field, edit.value)


def _set_certification(resume: ResumeDocument, edit: SetCertification) -> None:
    _entry(resume.certifications, edit.index, "certifications")
    resume.certifications[edit.index] = edit.value


def _bullets(resume: ResumeDocument, section: str, index: int) -> List[str]:
    return _entry(getattr(resume, section), index, section).bullets


def _set_bullet(resume: ResumeDocument, edit: SetBullet) -> None:
    bullets = _bullets(resume, edit.section, edit.index)
    _entry(bullets, edit.bullet_index, "bullet")
    bullets[edit.bullet_index] = edit.value


def _add_bullet(resume: ResumeDocument, edit: AddBullet) -> None:
    _bullets(resume, edit.section, edit.index).append(edit.value)


def _remove_bullet(resume: ResumeDocument, edit: RemoveBullet) -> None:
    bullets = _bullets(resume, edit.section, edit.index)
    _entry(bullets, edit.bullet_index, "bullet")
    del bullets[edit.bullet_index]


_BLANK_ENTRIES: Dict[str, Callable[[], object]] = {
    "skills": lambda: SkillGroup(group=""),
    "experience": lambda: ExperienceEntry(company="", role=""),
    "projects": lambda: ProjectEntry(name=""),
    "education": lambda: EducationEntry(school="", degree=""),
    "certifications": lambda: "",
}


def _add_entry(resume: ResumeDocument, edit: AddEntry) -> None:
    getattr(resume, edit.section).append(_BLANK_ENTRIES[edit.section]())


def _remove_entry(resume: ResumeDocument, edit: RemoveEntry) -> None:
    items = getattr(resume, edit.section)
    _entry(items, edit.index, edit.section)
    del items[edit.index]


_HANDLERS: Dict[Type[BaseModel], Callable[[ResumeDocument, BaseModel], None]] = {
    SetHeaderField: _set_header_field,
    SetSummary: _set_summary,
    SetSkillGroup: _set_skill_group,
    SetExperienceField: _set_experience_field,
    SetProjectField: _set_project_field,
    SetEducationField: _set_education_field,
    SetCertification: _set_certification,
    SetBullet: _set_bullet,
    AddBullet: _add_bullet,
    RemoveBullet: _remove_bullet,
    AddEntry: _add_entry,
    RemoveEntry: _remove_entry,
}
