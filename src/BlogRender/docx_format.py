from __future__ import annotations

import re

from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Cm, Pt, RGBColor

A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297

FONT_NAME = "Calibri"
CODE_FONT_NAME = "Consolas"
FONT_SIZE_PT = 11
CODE_FONT_SIZE_PT = 10
LINE_SPACING = 1.15
PARAGRAPH_SPACE_AFTER_PT = 8

HEADING_SIZES_PT = {1: 24, 2: 20, 3: 16, 4: 14, 5: 12, 6: 11}
QUOTE_INDENT_CM = 1.0
LINK_COLOR = RGBColor(0x1A, 0x5F, 0xB4)
MUTED_COLOR = RGBColor(0x59, 0x59, 0x59)

MARGIN_CM = 2.5

# characters XML 1.0 cannot carry; python-docx refuses them
XML_INVALID_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_safe(text: str) -> str:
    return XML_INVALID_RE.sub("", text)


def apply_page_layout(doc) -> None:
    """A4 page with even margins."""
    section = doc.sections[0]
    section.page_height = Cm(A4_HEIGHT_MM / 10)
    section.page_width = Cm(A4_WIDTH_MM / 10)
    section.left_margin = Cm(MARGIN_CM)
    section.right_margin = Cm(MARGIN_CM)
    section.top_margin = Cm(MARGIN_CM)
    section.bottom_margin = Cm(MARGIN_CM)


def set_run_font(run, bold: bool = False, italic: bool = False, code: bool = False, size_pt: int | None = None) -> None:
    run.font.name = CODE_FONT_NAME if code else FONT_NAME
    run.font.size = Pt(size_pt or (CODE_FONT_SIZE_PT if code else FONT_SIZE_PT))
    run.bold = bold
    run.italic = italic


def apply_body_paragraph_format(paragraph) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(0)
    paragraph.paragraph_format.space_after = Pt(PARAGRAPH_SPACE_AFTER_PT)
    paragraph.paragraph_format.line_spacing = LINE_SPACING


def apply_heading_format(paragraph, level: int) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(HEADING_SIZES_PT.get(level, FONT_SIZE_PT) // 2)
    paragraph.paragraph_format.space_after = Pt(PARAGRAPH_SPACE_AFTER_PT // 2)
    paragraph.paragraph_format.keep_with_next = True
    for run in paragraph.runs:
        set_run_font(run, bold=True, size_pt=HEADING_SIZES_PT.get(level, FONT_SIZE_PT))


def apply_quote_format(paragraph) -> None:
    apply_body_paragraph_format(paragraph)
    paragraph.paragraph_format.left_indent = Cm(QUOTE_INDENT_CM)


def apply_code_format(paragraph) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(0)
    paragraph.paragraph_format.space_after = Pt(PARAGRAPH_SPACE_AFTER_PT)
    paragraph.paragraph_format.line_spacing = 1.0
    paragraph.paragraph_format.left_indent = Cm(0.5)


def apply_caption_format(paragraph) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(0)
    paragraph.paragraph_format.space_after = Pt(2)
    for run in paragraph.runs:
        set_run_font(run, italic=True, size_pt=CODE_FONT_SIZE_PT)
        run.font.color.rgb = MUTED_COLOR
