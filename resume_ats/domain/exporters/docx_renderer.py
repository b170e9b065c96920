"""Render a ResumeDocument as DOCX with python-docx."""

from __future__ import annotations

import io
import zipfile
from datetime import datetime

from docx import Document
from docx.shared import Pt

from ..schemas import ResumeDocument
from .layout import Block, BlockKind, build_sections, header_layout

#: Pinned so identical documents produce identical bytes.
FIXED_TIMESTAMP = datetime(2000, 1, 1, 0, 0, 0)
_ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)

NAME_SIZE = Pt(16)
TITLE_SIZE = Pt(12)
HEADING_SIZE = Pt(12)
BODY_SIZE = Pt(10)
META_SIZE = Pt(9)


def render_docx(resume: ResumeDocument) -> bytes:
    doc = Document()
    header = header_layout(resume.header)
    _pin_core_properties(doc, header.name)

    heading = doc.add_heading(level=1)
    _add_run(heading, header.name, NAME_SIZE, bold=True)
    if header.title:
        _add_run(doc.add_paragraph(), header.title, TITLE_SIZE)
    if header.location:
        _add_run(doc.add_paragraph(), header.location, BODY_SIZE)
    if header.contact_line:
        _add_run(doc.add_paragraph(), header.contact_line, BODY_SIZE)

    for section in build_sections(resume):
        section_heading = doc.add_heading(level=2)
        _add_run(section_heading, section.heading, HEADING_SIZE, bold=True)
        for block in section.blocks:
            _add_block(doc, block)

    buffer = io.BytesIO()
    doc.save(buffer)
    return _normalize_zip(buffer.getvalue())


def _add_block(doc, block: Block) -> None:
    paragraph = doc.add_paragraph()
    if block.kind is BlockKind.ENTRY:
        _add_run(paragraph, block.text, BODY_SIZE, bold=True)
    elif block.kind is BlockKind.META:
        _add_run(paragraph, block.text, META_SIZE, italic=True)
    elif block.kind is BlockKind.LABELED and block.label:
        _add_run(paragraph, f"{block.label}: ", BODY_SIZE, bold=True)
        _add_run(paragraph, block.text, BODY_SIZE)
    else:
        _add_run(paragraph, block.plain, BODY_SIZE)


def _add_run(paragraph, text: str, size, bold: bool = False, italic: bool = False):
    run = paragraph.add_run(text)
    run.bold = bold
    run.italic = italic
    run.font.size = size
    return run


def _pin_core_properties(doc, title: str) -> None:
    props = doc.core_properties
    props.title = title
    props.created = FIXED_TIMESTAMP
    props.modified = FIXED_TIMESTAMP
    props.last_modified_by = ""
    props.revision = 1


def _normalize_zip(data: bytes) -> bytes:
    """Rewrite the package with fixed member timestamps (python-docx stamps the save time)."""
    source = zipfile.ZipFile(io.BytesIO(data))
    output = io.BytesIO()
    with zipfile.ZipFile(output, "w", compression=zipfile.ZIP_DEFLATED) as target:
        for info in source.infolist():
            member = zipfile.ZipInfo(info.filename, date_time=_ZIP_DATE_TIME)
            member.compress_type = zipfile.ZIP_DEFLATED
            member.external_attr = info.external_attr
            target.writestr(member, source.read(info.filename))
    source.close()
    return output.getvalue()
