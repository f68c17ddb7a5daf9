from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import Iterable

from docx import Document as DocxDocument
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from . import docx_format
from .blog_catalog import format_date
from .model import (
    Block,
    CodeBlock,
    Document,
    Heading,
    InlineSegment,
    ListBlock,
    Paragraph,
    Quote,
    Separator,
    TableBlock,
)


def render_document(doc: Document, output_path: str | Path) -> None:
    output_path = Path(output_path)
    docx = DocxDocument()
    docx_format.apply_page_layout(docx)

    if doc.metadata:
        _render_title_block(docx, doc.metadata)

    for block in doc.blocks:
        _dispatch_block(docx, block)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    docx.save(output_path)
    logging.debug("Rendered %d blocks to %s", len(doc.blocks), output_path)


def _dispatch_block(docx: DocxDocument, block: Block) -> None:
    if isinstance(block, Heading):
        _render_heading(docx, block)
    elif isinstance(block, Paragraph):
        _render_paragraph(docx, block.segments)
    elif isinstance(block, ListBlock):
        _render_list(docx, block)
    elif isinstance(block, CodeBlock):
        _render_code_block(docx, block)
    elif isinstance(block, Quote):
        _render_quote(docx, block)
    elif isinstance(block, TableBlock):
        _render_table_block(docx, block)
    elif isinstance(block, Separator):
        _render_horizontal_rule(docx)
    else:
        logging.warning("Skipping unsupported block %s", type(block).__name__)


def _render_title_block(docx: DocxDocument, metadata: dict) -> None:
    title = metadata.get("title")
    if title:
        docx.add_paragraph(docx_format.xml_safe(str(title)), style="Title")

    details = []
    date = metadata.get("date")
    if isinstance(date, datetime.date):
        details.append(format_date(date))
    elif date:
        details.append(str(date))
    if metadata.get("read_time"):
        details.append(str(metadata["read_time"]))
    if metadata.get("tags"):
        details.append(", ".join(metadata["tags"]))
    if details:
        paragraph = docx.add_paragraph(docx_format.xml_safe(" · ".join(details)))
        docx_format.apply_caption_format(paragraph)

    excerpt = metadata.get("excerpt")
    if excerpt:
        paragraph = docx.add_paragraph()
        _add_segments(paragraph, [InlineSegment(str(excerpt), is_italic=True)])
        docx_format.apply_body_paragraph_format(paragraph)


def _render_heading(docx: DocxDocument, heading: Heading) -> None:
    paragraph = docx.add_paragraph(docx_format.xml_safe(heading.content))
    docx_format.apply_heading_format(paragraph, heading.level)


def _render_paragraph(docx: DocxDocument, segments: Iterable[InlineSegment]) -> None:
    paragraph = docx.add_paragraph()
    _add_segments(paragraph, segments)
    docx_format.apply_body_paragraph_format(paragraph)


def _render_quote(docx: DocxDocument, block: Quote) -> None:
    paragraph = docx.add_paragraph()
    # quotes are italic throughout; bold segments keep their weight
    _add_segments(paragraph, block.segments, italic=True)
    docx_format.apply_quote_format(paragraph)


def _render_list(docx: DocxDocument, block: ListBlock) -> None:
    for item in block.items:
        paragraph = docx.add_paragraph(style="List Bullet")
        _add_segments(paragraph, item)
        docx_format.apply_body_paragraph_format(paragraph)
        paragraph.paragraph_format.space_after = 0


def _render_code_block(docx: DocxDocument, block: CodeBlock) -> None:
    caption = docx.add_paragraph(docx_format.xml_safe(block.language))
    docx_format.apply_caption_format(caption)

    paragraph = docx.add_paragraph()
    lines = block.content.split("\n")
    for idx, line in enumerate(lines):
        run = paragraph.add_run(docx_format.xml_safe(line))
        docx_format.set_run_font(run, code=True)
        if idx < len(lines) - 1:
            run.add_break()
    docx_format.apply_code_format(paragraph)


def _render_horizontal_rule(docx: DocxDocument) -> None:
    paragraph = docx.add_paragraph()
    run = paragraph.add_run("—" * 12)
    docx_format.set_run_font(run)
    run.font.color.rgb = docx_format.MUTED_COLOR
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER


def _render_table_block(docx: DocxDocument, block: TableBlock) -> None:
    col_count = max(len(block.headers), 1)
    table = docx.add_table(rows=1 + len(block.rows), cols=col_count)
    table.style = "Table Grid"
    table.alignment = WD_TABLE_ALIGNMENT.LEFT

    for c_idx, cell_segments in enumerate(block.headers):
        _fill_cell(table.cell(0, c_idx), cell_segments, bold=True)
    for r_idx, row in enumerate(block.rows, start=1):
        for c_idx, cell_segments in enumerate(row):
            _fill_cell(table.cell(r_idx, c_idx), cell_segments)

    spacer = docx.add_paragraph("")
    docx_format.apply_body_paragraph_format(spacer)


def _fill_cell(cell, segments: Iterable[InlineSegment], bold: bool = False) -> None:
    paragraph = cell.paragraphs[0]
    _add_segments(paragraph, segments, bold=bold)
    paragraph.paragraph_format.space_after = 0


def _add_segments(paragraph, segments: Iterable[InlineSegment], bold: bool = False, italic: bool = False) -> None:
    for segment in segments:
        is_bold = bold or segment.is_bold
        is_italic = italic or segment.is_italic
        if segment.is_link and segment.href:
            _add_hyperlink(paragraph, segment.text, segment.href, bold=is_bold, italic=is_italic)
        else:
            run = paragraph.add_run(docx_format.xml_safe(segment.text))
            docx_format.set_run_font(run, bold=is_bold, italic=is_italic)


def _add_hyperlink(paragraph, text: str, url: str, bold: bool = False, italic: bool = False) -> None:
    """Append an external Word hyperlink wrapping a single styled run."""
    r_id = paragraph.part.relate_to(docx_format.xml_safe(url), RT.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)

    run = paragraph.add_run(docx_format.xml_safe(text))
    docx_format.set_run_font(run, bold=bold, italic=italic)
    run.font.underline = True
    run.font.color.rgb = docx_format.LINK_COLOR
    # move the run's element from the paragraph into the hyperlink
    hyperlink.append(run._r)
    paragraph._p.append(hyperlink)
