"""Pure conversion of structured résumés to Markdown.

All functions accept and return values -- no file I/O.
"""

from __future__ import annotations

from typing import List

from .exporters.layout import BlockKind, build_sections, header_layout
from .schemas import ResumeDocument

# ---------------------------------------------------------------------------
# ResumeDocument → Markdown
# ---------------------------------------------------------------------------


def document_to_markdown(resume: ResumeDocument) -> str:
    """Render *resume* as Markdown with the same sections as the DOCX/PDF exports."""
    header = header_layout(resume.header)
    lines: List[str] = [f"# {header.name}"]
    for text in (header.title, header.location, header.contact_line):
        if text:
            lines.append(text)

    for section in build_sections(resume):
        lines.extend(["", f"## {section.heading.title()}", ""])
        for index, block in enumerate(section.blocks):
            if index and index in section.entry_starts:
                lines.append("")
            if block.kind is BlockKind.ENTRY:
                lines.append(f"### {block.text}")
            elif block.kind is BlockKind.META:
                lines.append(f"*{block.text}*")
            elif block.kind is BlockKind.BULLET:
                lines.append(f"- {block.text}")
            elif block.kind is BlockKind.LABELED and block.label:
                lines.append(f"**{block.label}:** {block.text}")
            else:
                lines.append(block.text)

    return "\n".join(lines).rstrip() + "\n"

