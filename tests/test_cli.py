import logging
import textwrap
from pathlib import Path

import pytest
import yaml
from docx import Document as DocxReader

from BlogRender import cli


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    root = tmp_path / "blog"
    root.mkdir()
    (root / "ship-faster.md").write_text(
        textwrap.dedent(
            """
            ## Why speed matters

            Ship **small** changes, read [the notes](https://example.com).

            - plan
            - build
            """
        ),
        encoding="utf-8",
    )
    (root / "posts.yaml").write_text(
        textwrap.dedent(
            """
            posts:
              - title: "Ship Faster"
                date: 2025-08-14
                read_time: "10 min read"
                slug: ship-faster
                published: true
              - title: "Old Draft"
                date: 2024-01-01
                slug: old-draft
            """
        ),
        encoding="utf-8",
    )
    return root


def test_render_writes_docx_with_title(content_dir: Path, tmp_path: Path):
    output = tmp_path / "out.docx"
    code = cli.main(["render", "ship-faster", "--content-dir", str(content_dir), "-o", str(output)])
    assert code == 0
    reader = DocxReader(output)
    texts = [p.text for p in reader.paragraphs]
    assert texts[0] == "Ship Faster"
    assert "Why speed matters" in texts
    assert "Ship small changes, read the notes." in texts


def test_render_default_output_next_to_source(content_dir: Path):
    assert cli.main(["render", "ship-faster", "--content-dir", str(content_dir)]) == 0
    assert (content_dir / "ship-faster.docx").exists()


def test_render_missing_post(content_dir: Path, caplog):
    with caplog.at_level(logging.ERROR):
        code = cli.main(["render", "nope", "--content-dir", str(content_dir)])
    assert code == 1
    assert "Post not found" in caplog.text


def test_inspect_prints_yaml(content_dir: Path, capsys):
    assert cli.main(["inspect", "ship-faster", "--content-dir", str(content_dir)]) == 0
    elements = yaml.safe_load(capsys.readouterr().out)
    assert [element["type"] for element in elements] == ["heading", "paragraph", "list"]
    assert elements[0] == {"type": "heading", "level": 2, "content": "Why speed matters"}
    assert elements[1]["segments"][1] == {"text": "small", "isBold": True}
    assert elements[1]["segments"][3] == {"text": "the notes", "isLink": True, "href": "https://example.com"}
    assert elements[2]["items"] == [[{"text": "plan"}], [{"text": "build"}]]


def test_list_hides_drafts(content_dir: Path, capsys):
    assert cli.main(["list", "--content-dir", str(content_dir)]) == 0
    out = capsys.readouterr().out
    assert "August 14, 2025  ship-faster  Ship Faster" in out
    assert "old-draft" not in out


def test_list_with_drafts(content_dir: Path, capsys):
    assert cli.main(["list", "--content-dir", str(content_dir), "--drafts"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].endswith("Ship Faster")
    assert out[1] == "January 1, 2024  old-draft  Old Draft (draft)"


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.main([])
