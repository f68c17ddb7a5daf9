from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, List


@dataclass(frozen=True)
class InlineSegment:
    """A run of text sharing the same formatting flags.

    Bold and italic are never set together on one segment. ``href`` is
    optional on the type; renderers treat ``is_link`` without ``href`` as
    plain text.
    """

    text: str
    is_bold: bool = False
    is_italic: bool = False
    is_link: bool = False
    href: str | None = None


@dataclass
class Block:
    """Base class for block-level nodes."""

    type: ClassVar[str] = "block"


@dataclass
class Document:
    blocks: List[Block]
    metadata: dict[str, Any] | None = None


@dataclass
class Heading(Block):
    type: ClassVar[str] = "heading"

    level: int
    content: str


@dataclass
class Paragraph(Block):
    type: ClassVar[str] = "paragraph"

    segments: List[InlineSegment]


@dataclass
class CodeBlock(Block):
    type: ClassVar[str] = "codeBlock"

    language: str
    content: str


@dataclass
class ListBlock(Block):
    """Unordered list, one segment sequence per item."""

    type: ClassVar[str] = "list"

    items: List[List[InlineSegment]]


@dataclass
class Quote(Block):
    type: ClassVar[str] = "quote"

    segments: List[InlineSegment]


@dataclass
class TableBlock(Block):
    type: ClassVar[str] = "table"

    headers: List[List[InlineSegment]]
    rows: List[List[List[InlineSegment]]] = field(default_factory=list)


@dataclass
class Separator(Block):
    """Horizontal rule / thematic break."""

    type: ClassVar[str] = "separator"


def segment_to_dict(segment: InlineSegment) -> dict[str, Any]:
    """Export a segment in the renderer contract shape, omitting unset flags."""
    data: dict[str, Any] = {"text": segment.text}
    if segment.is_bold:
        data["isBold"] = True
    if segment.is_italic:
        data["isItalic"] = True
    if segment.is_link:
        data["isLink"] = True
    if segment.href is not None:
        data["href"] = segment.href
    return data


def _segments_to_list(segments: List[InlineSegment]) -> list[dict[str, Any]]:
    return [segment_to_dict(segment) for segment in segments]


def block_to_dict(block: Block) -> dict[str, Any]:
    data: dict[str, Any] = {"type": block.type}
    if isinstance(block, Heading):
        data.update(level=block.level, content=block.content)
    elif isinstance(block, (Paragraph, Quote)):
        data["segments"] = _segments_to_list(block.segments)
    elif isinstance(block, CodeBlock):
        data.update(language=block.language, content=block.content)
    elif isinstance(block, ListBlock):
        data["items"] = [_segments_to_list(item) for item in block.items]
    elif isinstance(block, TableBlock):
        data["headers"] = [_segments_to_list(cell) for cell in block.headers]
        data["rows"] = [[_segments_to_list(cell) for cell in row] for row in block.rows]
    return data
