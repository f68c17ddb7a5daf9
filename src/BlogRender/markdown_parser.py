from __future__ import annotations

import copy
import re
from typing import Any, List, Sequence

from .cache import DictParseCache, hash_content
from .inline_parser import tokenize
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

DEFAULT_CODE_LANGUAGE = "javascript"
FENCE = "```"

HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
LIST_ITEM_RE = re.compile(r"^[-*+]\s+(.+)$")
LIST_START_RE = re.compile(r"^[-*+]\s+")
QUOTE_RE = re.compile(r"^\s*>\s")
QUOTE_MARKER_RE = re.compile(r"^\s*>\s?")
TABLE_SEPARATOR_RE = re.compile(r"^[\s|:-]+$")


def parse_markdown(
    text: str,
    metadata: dict[str, Any] | None = None,
    cache: DictParseCache | None = None,
) -> Document:
    if cache is None:
        return Document(blocks=process_markdown(text), metadata=metadata)

    key = hash_content(text)
    blocks = cache.get(key)
    if blocks is None:
        blocks = tuple(process_markdown(text))
        cache.put(key, blocks)
    # callers get their own copy; cached blocks are never handed out
    return Document(blocks=copy.deepcopy(list(blocks)), metadata=metadata)


def process_markdown(text: str) -> List[Block]:
    """Scan ``text`` line by line into block elements, in source order.

    Every non-blank line ends up in exactly one block; blank lines are either
    absorbed by a list, quote or table or skipped. Never raises.
    """
    lines = text.split("\n")
    blocks: List[Block] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        heading = HEADING_RE.match(line)
        if heading:
            blocks.append(Heading(level=len(heading.group(1)), content=heading.group(2).strip()))
            i += 1
        elif line.startswith(FENCE):
            block, i = _consume_code_block(lines, i)
            blocks.append(block)
        elif LIST_ITEM_RE.match(line):
            block, i = _consume_list(lines, i)
            blocks.append(block)
        elif QUOTE_RE.match(line):
            block, i = _consume_quote(lines, i)
            blocks.append(block)
        elif _starts_table(lines, i):
            block, i = _consume_table(lines, i)
            blocks.append(block)
        elif line.strip() == "---":
            blocks.append(Separator())
            i += 1
        elif line.strip():
            blocks.append(Paragraph(segments=tokenize(line.strip())))
            i += 1
        else:
            i += 1
    return blocks


def _consume_code_block(lines: Sequence[str], index: int) -> tuple[CodeBlock, int]:
    language = lines[index].replace(FENCE, "", 1).strip() or DEFAULT_CODE_LANGUAGE
    code_lines: list[str] = []
    i = index + 1
    while i < len(lines) and not lines[i].startswith(FENCE):
        code_lines.append(lines[i])
        i += 1
    # i + 1 skips the closing fence; at EOF it simply overshoots the end
    return CodeBlock(language=language, content="\n".join(code_lines)), i + 1


def _is_blank(line: str) -> bool:
    return line.strip() == ""


def _next_matches(lines: Sequence[str], index: int, pattern: re.Pattern[str]) -> bool:
    return index + 1 < len(lines) and pattern.match(lines[index + 1]) is not None


def _consume_list(lines: Sequence[str], index: int) -> tuple[ListBlock, int]:
    items: list[list[InlineSegment]] = []
    i = index
    while i < len(lines):
        line = lines[i]
        item = LIST_ITEM_RE.match(line)
        if item:
            items.append(tokenize(item.group(1)))
        elif not (_is_blank(line) and _next_matches(lines, i, LIST_START_RE)):
            break
        i += 1
    return ListBlock(items=items), i


def _consume_quote(lines: Sequence[str], index: int) -> tuple[Quote, int]:
    quote_lines: list[str] = []
    i = index
    while i < len(lines):
        line = lines[i]
        if QUOTE_RE.match(line):
            quote_lines.append(QUOTE_MARKER_RE.sub("", line, count=1))
        elif _is_blank(line) and _next_matches(lines, i, QUOTE_RE):
            quote_lines.append("")
        else:
            break
        i += 1
    return Quote(segments=tokenize(" ".join(quote_lines).strip())), i


def _starts_table(lines: Sequence[str], index: int) -> bool:
    if "|" not in lines[index] or index + 1 >= len(lines):
        return False
    separator = lines[index + 1]
    return "|" in separator and TABLE_SEPARATOR_RE.match(separator) is not None


def _split_cells(line: str) -> list[list[InlineSegment]]:
    cells = [cell.strip() for cell in line.split("|")]
    return [tokenize(cell) for cell in cells if cell]


def _consume_table(lines: Sequence[str], index: int) -> tuple[TableBlock, int]:
    headers = _split_cells(lines[index])
    rows: list[list[list[InlineSegment]]] = []
    i = index + 2  # skip header and separator rows
    while i < len(lines):
        line = lines[i]
        if "|" in line:
            cells = _split_cells(line)
            if len(cells) != len(headers):
                break
            rows.append(cells)
        elif not (_is_blank(line) and i + 1 < len(lines) and "|" in lines[i + 1]):
            break
        i += 1
    return TableBlock(headers=headers, rows=rows), i
