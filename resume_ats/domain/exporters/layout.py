"""Logical section layout shared by the DOCX, PDF and Markdown writers.

Every writer walks the same :class:`Section` list, so what appears in one
output format appears in all of them. Empty sections are never produced.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..schemas import EducationEntry, ExperienceEntry, ProjectEntry, ResumeDocument, ResumeHeader

BULLET = "•"

# C0 controls other than tab, newline and carriage return cannot be stored in XML.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def clean_text(value: Optional[str]) -> str:
    """Trim *value* and replace control characters that DOCX cannot hold with spaces."""
    if not value:
        return ""
    return _CONTROL_CHARS.sub(" ", value).strip()


class BlockKind(Enum):
    ENTRY = "entry"  # bold entry title, e.g. "Engineer at Acme"
    META = "meta"  # dates, year / CGPA
    TEXT = "text"  # paragraph
    BULLET = "bullet"
    LABELED = "labeled"  # "Label: text" with a bold label


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    text: str
    label: str = ""

    @property
    def plain(self) -> str:
        if self.kind is BlockKind.LABELED and self.label:
            return f"{self.label}: {self.text}".rstrip()
        if self.kind is BlockKind.BULLET:
            return f"{BULLET} {self.text}"
        return self.text


@dataclass(frozen=True)
class Section:
    heading: str
    blocks: List[Block] = field(default_factory=list)
    # Indexes into ``blocks`` where a new entry starts (used for spacing).
    entry_starts: tuple = ()


@dataclass(frozen=True)
class HeaderLayout:
    name: str
    title: str = ""
    location: str = ""
    contact_line: str = ""


def header_layout(header: ResumeHeader) -> HeaderLayout:
    contacts = [
        text
        for text in map(clean_text, (header.phone, header.email, header.linkedin, header.portfolio, *header.links))
        if text
    ]
    return HeaderLayout(
        name=clean_text(header.name),
        title=clean_text(header.title),
        location=clean_text(header.location),
        contact_line=" | ".join(contacts),
    )


def build_sections(doc: ResumeDocument) -> List[Section]:
    """Return the non-empty sections of *doc* in output order."""
    sections: List[Section] = []

    summary = clean_text(doc.summary)
    if summary:
        sections.append(Section("SUMMARY", [Block(BlockKind.TEXT, summary)]))

    skill_blocks = [
        Block(BlockKind.LABELED, ", ".join(_clean(group.items)), label=clean_text(group.group))
        for group in doc.skills
        if clean_text(group.group) or _clean(group.items)
    ]
    if skill_blocks:
        sections.append(Section("SKILLS", skill_blocks))

    _append_entries(sections, "EXPERIENCE", [_experience_blocks(e) for e in doc.experience])
    _append_entries(sections, "PROJECTS", [_project_blocks(p) for p in doc.projects])
    _append_entries(sections, "EDUCATION", [_education_blocks(e) for e in doc.education])

    certifications = _clean(doc.certifications)
    if certifications:
        sections.append(Section("CERTIFICATIONS", [Block(BlockKind.BULLET, c) for c in certifications]))

    return sections


def _append_entries(sections: List[Section], heading: str, entries: List[List[Block]]) -> None:
    blocks: List[Block] = []
    starts = []
    for entry in entries:
        if not entry:
            continue
        starts.append(len(blocks))
        blocks.extend(entry)
    if blocks:
        sections.append(Section(heading, blocks, tuple(starts)))


def _experience_blocks(entry: ExperienceEntry) -> List[Block]:
    role, company = clean_text(entry.role), clean_text(entry.company)
    title = " at ".join(part for part in (role, company) if part)
    dates = " - ".join(part for part in (clean_text(entry.start), clean_text(entry.end)) if part)

    blocks: List[Block] = []
    if title:
        blocks.append(Block(BlockKind.ENTRY, title))
    if dates:
        blocks.append(Block(BlockKind.META, dates))
    blocks.extend(Block(BlockKind.BULLET, b) for b in _clean(entry.bullets))
    tech = _clean(entry.tech)
    if tech:
        blocks.append(Block(BlockKind.LABELED, ", ".join(tech), label="Tech"))
    return blocks


def _project_blocks(entry: ProjectEntry) -> List[Block]:
    blocks: List[Block] = []
    name, description = clean_text(entry.name), clean_text(entry.description)
    if name:
        blocks.append(Block(BlockKind.ENTRY, name))
    if description:
        blocks.append(Block(BlockKind.TEXT, description))
    blocks.extend(Block(BlockKind.BULLET, b) for b in _clean(entry.bullets))
    tech = _clean(entry.tech)
    if tech:
        blocks.append(Block(BlockKind.LABELED, ", ".join(tech), label="Tech"))
    return blocks


def _education_blocks(entry: EducationEntry) -> List[Block]:
    degree, school = clean_text(entry.degree), clean_text(entry.school)
    title = " - ".join(part for part in (degree, school) if part)
    year, cgpa = clean_text(entry.year), clean_text(entry.cgpa)
    details = [year] if year else []
    if cgpa:
        details.append(f"CGPA: {cgpa}")

    blocks: List[Block] = []
    if title:
        blocks.append(Block(BlockKind.ENTRY, title))
    if details:
        blocks.append(Block(BlockKind.META, " | ".join(details)))
    return blocks


def _clean(values: List[str]) -> List[str]:
    return [text for text in map(clean_text, values) if text]
