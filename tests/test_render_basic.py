import datetime
from pathlib import Path

from docx import Document as DocxReader

from BlogRender.markdown_parser import parse_markdown
from BlogRender.model import Document, Heading, InlineSegment, Paragraph, Separator
from BlogRender.renderer_docx import render_document


def _render(tmp_path: Path, doc: Document):
    output_file = tmp_path / "post.docx"
    render_document(doc, output_file)
    assert output_file.exists()
    assert output_file.stat().st_size > 0
    return DocxReader(output_file)


def test_render_creates_docx(tmp_path: Path):
    doc = Document(
        blocks=[
            Heading(level=1, content="Introduction"),
            Paragraph(segments=[InlineSegment("Example paragraph.")]),
            Separator(),
        ]
    )
    reader = _render(tmp_path, doc)
    texts = [p.text for p in reader.paragraphs]
    assert "Introduction" in texts
    assert "Example paragraph." in texts


def test_render_creates_missing_parent_dirs(tmp_path: Path):
    output_file = tmp_path / "nested" / "out" / "post.docx"
    render_document(Document(blocks=[Heading(level=2, content="Hi")]), output_file)
    assert output_file.exists()


def test_inline_flags_become_run_formatting(tmp_path: Path):
    doc = parse_markdown("Plain **strong** and *soft* text")
    reader = _render(tmp_path, doc)
    runs = {run.text: run for run in reader.paragraphs[0].runs}
    assert runs["strong"].bold
    assert runs["soft"].italic
    assert not runs["Plain "].bold


def test_links_become_hyperlinks(tmp_path: Path):
    doc = parse_markdown("Read **the [guide](https://example.com/guide) first**")
    reader = _render(tmp_path, doc)
    paragraph = reader.paragraphs[0]
    assert paragraph.text == "Read the guide first"
    assert [link.address for link in paragraph.hyperlinks] == ["https://example.com/guide"]
    assert paragraph.hyperlinks[0].runs[0].bold


def test_link_without_href_is_plain_text(tmp_path: Path):
    doc = Document(blocks=[Paragraph(segments=[InlineSegment("dangling", is_link=True)])])
    reader = _render(tmp_path, doc)
    paragraph = reader.paragraphs[0]
    assert paragraph.text == "dangling"
    assert paragraph.hyperlinks == []


def test_list_quote_code_and_table(tmp_path: Path):
    source = "\n".join(
        [
            "- first",
            "- second",
            "",
            "> quoted **line**",
            "",
            "```python",
            "x = 1",
            "y = 2",
            "```",
            "",
            "| Tool | Use |",
            "|------|-----|",
            "| v0 | UI |",
        ]
    )
    reader = _render(tmp_path, parse_markdown(source))

    bullets = [p for p in reader.paragraphs if p.style.name == "List Bullet"]
    assert [p.text for p in bullets] == ["first", "second"]

    quote = next(p for p in reader.paragraphs if p.text == "quoted line")
    assert all(run.italic for run in quote.runs)

    assert any(p.text == "python" for p in reader.paragraphs)
    assert any(p.text == "x = 1\ny = 2" for p in reader.paragraphs)

    assert len(reader.tables) == 1
    table = reader.tables[0]
    assert [cell.text for cell in table.rows[0].cells] == ["Tool", "Use"]
    assert [cell.text for cell in table.rows[1].cells] == ["v0", "UI"]
    assert table.rows[0].cells[0].paragraphs[0].runs[0].bold


def test_metadata_renders_title_block(tmp_path: Path):
    doc = parse_markdown(
        "Body",
        metadata={
            "title": "How to ship",
            "date": datetime.date(2025, 8, 14),
            "read_time": "10 min read",
            "tags": ["AI", "Productivity"],
            "excerpt": "A practical guide.",
        },
    )
    reader = _render(tmp_path, doc)
    assert reader.paragraphs[0].text == "How to ship"
    assert reader.paragraphs[0].style.name == "Title"
    assert reader.paragraphs[1].text == "August 14, 2025 · 10 min read · AI, Productivity"
    assert reader.paragraphs[2].text == "A practical guide."
    assert reader.paragraphs[3].text == "Body"


def test_control_characters_are_dropped(tmp_path: Path):
    doc = parse_markdown("# Tab\x0bbed\npage\x0cbreak **bo\x01ld**\n```\na\x00b\n```")
    reader = _render(tmp_path, doc)
    texts = [p.text for p in reader.paragraphs]
    assert "Tabbed" in texts
    assert "pagebreak bold" in texts
    assert "ab" in texts
