"""Render a ResumeDocument as PDF with the reportlab canvas.

Layout is manual: a :class:`PageCursor` tracks the vertical position and
starts a new page whenever the next block would cross the bottom margin.
Text is always wrapped before the space check, so the check uses the real
number of lines.

Text is set in DejaVu Sans, embedded from the ``fonts`` directory next to
this module, so names outside Latin-1 keep their glyphs. There is no
oblique face; dates and other meta lines are the regular face drawn with a
skew.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from reportlab.lib.pagesizes import LETTER
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from ..errors import UnsupportedCharactersError
from ..schemas import ResumeDocument
from .layout import Block, BlockKind, Section, build_sections, header_layout

FONT_DIR = Path(__file__).with_name("fonts")

FONT_REGULAR = "DejaVuSans"
FONT_BOLD = "DejaVuSans-Bold"
OBLIQUE_SKEW_DEGREES = 12

_FONT_FILES = {
    FONT_REGULAR: "DejaVuSans.ttf",
    FONT_BOLD: "DejaVuSans-Bold.ttf",
}

SZ_NAME = 24
SZ_TITLE = 16
SZ_LOCATION = 14
SZ_SECTION = 16
SZ_ENTRY = 14
SZ_BODY = 12

MARGIN = 50
TOP_MARGIN = 50
BOTTOM_MARGIN = 50
LINE_HEIGHT = 20
ENTRY_LINE_HEIGHT = 15
SECTION_SPACING = 30
ENTRY_SPACING = 10

# One drawn piece of a line: (text, font). Pieces are laid out left to right.
Segment = Tuple[str, str]


def register_fonts() -> None:
    """Register the embedded TrueType faces with reportlab (idempotent)."""
    registered = set(pdfmetrics.getRegisteredFontNames())
    for name, filename in _FONT_FILES.items():
        if name not in registered:
            pdfmetrics.registerFont(TTFont(name, str(FONT_DIR / filename)))


register_fonts()


def missing_glyphs(text: str, font: str) -> List[str]:
    """Return the characters of *text* that *font* cannot draw, in first-seen order."""
    char_to_glyph = pdfmetrics.getFont(font).face.charToGlyph
    missing: List[str] = []
    for char in text:
        # Whitespace never reaches the canvas; wrap_text splits on it.
        if char.isspace() or ord(char) in char_to_glyph or char in missing:
            continue
        missing.append(char)
    return missing


def wrap_text(
    text: str,
    font: str,
    size: float,
    max_width: float,
    first_line_width: Optional[float] = None,
) -> List[str]:
    """Greedily pack words into lines no wider than *max_width* points.

    *first_line_width* narrows the first line (used when a bold label is
    drawn in front of it). When the first word does not fit there, the first
    line is left empty and the text starts on the next one. Words wider than
    a whole line are split by character.
    """
    widths = [max_width if first_line_width is None else first_line_width]
    lines: List[str] = []
    current = ""

    def limit() -> float:
        return widths[0] if not lines else max_width

    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if stringWidth(candidate, font, size) <= limit():
            current = candidate
            continue
        if current or limit() < max_width:
            lines.append(current)
            current = ""
        # The word alone may still be too wide for a line.
        while stringWidth(word, font, size) > limit():
            cut = _fit_prefix(word, font, size, limit())
            lines.append(word[:cut])
            word = word[cut:]
        current = word

    if current:
        lines.append(current)
    return lines


def _fit_prefix(word: str, font: str, size: float, width: float) -> int:
    cut = 1
    while cut < len(word) and stringWidth(word[: cut + 1], font, size) <= width:
        cut += 1
    return cut


@dataclass
class PageCursor:
    """Vertical write position on the current page."""

    pdf: canvas.Canvas
    page_height: float
    y: float = 0.0

    def __post_init__(self) -> None:
        self.y = self.page_height - TOP_MARGIN

    def new_page(self) -> None:
        self.pdf.showPage()
        self.y = self.page_height - TOP_MARGIN

    def ensure_space(self, height: float) -> None:
        """Start a new page unless *height* points fit above the bottom margin."""
        at_top = self.y >= self.page_height - TOP_MARGIN
        if self.y - height < BOTTOM_MARGIN and not at_top:
            self.new_page()

    def draw(self, text: str, font: str, size: float, x: float = MARGIN, oblique: bool = False) -> None:
        if not oblique:
            self.pdf.setFont(font, size)
            self.pdf.drawString(x, self.y, text)
            return
        self.pdf.saveState()
        self.pdf.translate(x, self.y)
        self.pdf.skew(0, OBLIQUE_SKEW_DEGREES)
        self.pdf.setFont(font, size)
        self.pdf.drawString(0, 0, text)
        self.pdf.restoreState()

    def advance(self, amount: float) -> None:
        self.y -= amount


class PdfRenderer:
    def __init__(self, resume: ResumeDocument) -> None:
        self.resume = resume
        self.header = header_layout(resume.header)
        self.sections = build_sections(resume)
        self.buffer = io.BytesIO()
        page_width, page_height = LETTER
        self.text_width = page_width - 2 * MARGIN
        # invariant=1 drops the creation date and random document ID.
        self.pdf = canvas.Canvas(self.buffer, pagesize=LETTER, invariant=1)
        self.pdf.setTitle(self.header.name)
        self.cursor = PageCursor(self.pdf, page_height)

    def render(self) -> bytes:
        self._check_glyphs()
        self._draw_header()
        for section in self.sections:
            self.cursor.advance(SECTION_SPACING)
            self._draw_section(section)
        self.pdf.save()
        return self.buffer.getvalue()

    def _check_glyphs(self) -> None:
        """Raise before drawing anything if some text has no glyph in its font."""
        missing: List[str] = []
        for text, font in self._drawn_text():
            missing.extend(c for c in missing_glyphs(text, font) if c not in missing)
        if missing:
            shown = " ".join(f"{c!r} (U+{ord(c):04X})" for c in missing[:10])
            raise UnsupportedCharactersError(
                f"PDF export cannot render these characters: {shown}. "
                "Export as DOCX instead or replace them."
            )

    def _drawn_text(self) -> Iterator[Tuple[str, str]]:
        header = self.header
        yield header.name, FONT_BOLD
        for text in (header.title, header.location, header.contact_line):
            yield text, FONT_REGULAR
        for section in self.sections:
            yield section.heading, FONT_BOLD
            for block in section.blocks:
                font, _ = self._font(block)
                if block.kind is BlockKind.LABELED and block.label:
                    yield block.label, FONT_BOLD
                    yield block.text, font
                else:
                    yield block.plain, font

    def _draw_header(self) -> None:
        header = self.header
        self._draw_lines(wrap_text(header.name, FONT_BOLD, SZ_NAME, self.text_width), FONT_BOLD, SZ_NAME, 30)
        for text, size in ((header.title, SZ_TITLE), (header.location, SZ_LOCATION), (header.contact_line, SZ_BODY)):
            if text:
                self._draw_lines(wrap_text(text, FONT_REGULAR, size, self.text_width), FONT_REGULAR, size, LINE_HEIGHT)

    def _draw_section(self, section: Section) -> None:
        first_block_lines = self._block_lines(section.blocks[0])
        # Keep the heading together with the first line of its content.
        self.cursor.ensure_space(LINE_HEIGHT + self._line_height(section.blocks[0]))
        self.cursor.draw(section.heading, FONT_BOLD, SZ_SECTION)
        self.cursor.advance(LINE_HEIGHT)

        for index, block in enumerate(section.blocks):
            if index and index in section.entry_starts:
                self.cursor.advance(ENTRY_SPACING)
            lines = first_block_lines if index == 0 else self._block_lines(block)
            self._draw_block(block, lines)

    def _block_lines(self, block: Block) -> List[List[Segment]]:
        font, size = self._font(block)
        if not (block.kind is BlockKind.LABELED and block.label):
            return [[(line, font)] for line in wrap_text(block.plain, font, size, self.text_width)]

        # A label wider than the page wraps onto lines of its own.
        label_lines = wrap_text(f"{block.label}:", FONT_BOLD, size, self.text_width)
        indent = stringWidth(f"{label_lines[-1]} ", FONT_BOLD, size)
        text_lines = wrap_text(block.text, font, size, self.text_width, self.text_width - indent)

        lines: List[List[Segment]] = [[(line, FONT_BOLD)] for line in label_lines]
        if text_lines and text_lines[0]:
            lines[-1].append((text_lines[0], font))
        lines.extend([(line, font)] for line in text_lines[1:])
        return lines

    def _draw_block(self, block: Block, lines: List[List[Segment]]) -> None:
        _, size = self._font(block)
        line_height = self._line_height(block)
        oblique = block.kind is BlockKind.META
        self.cursor.ensure_space(line_height * len(lines))
        for segments in lines:
            # Only triggers when the block is taller than a whole page.
            self.cursor.ensure_space(line_height)
            x = MARGIN
            for text, font in segments:
                self.cursor.draw(text, font, size, x=x, oblique=oblique)
                x += stringWidth(f"{text} ", font, size)
            self.cursor.advance(line_height)

    def _draw_lines(self, lines: List[str], font: str, size: float, line_height: float) -> None:
        self.cursor.ensure_space(line_height * len(lines))
        for line in lines:
            self.cursor.ensure_space(line_height)
            self.cursor.draw(line, font, size)
            self.cursor.advance(line_height)

    @staticmethod
    def _font(block: Block):
        if block.kind is BlockKind.ENTRY:
            return FONT_BOLD, SZ_ENTRY
        if block.kind is BlockKind.META:
            return FONT_REGULAR, SZ_BODY
        return FONT_REGULAR, SZ_BODY

    @staticmethod
    def _line_height(block: Block) -> float:
        if block.kind in (BlockKind.ENTRY, BlockKind.META):
            return ENTRY_LINE_HEIGHT
        return LINE_HEIGHT


def render_pdf(resume: ResumeDocument) -> bytes:
    return PdfRenderer(resume).render()
