from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import List, Sequence

from .model import InlineSegment

LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
FORMAT_RE = re.compile(r"\[(?P<label>[^\]]+)\]\((?P<href>[^)]+)\)|\*\*(?P<bold>.+?)\*\*|\*(?P<italic>.+?)\*")


@dataclass(frozen=True)
class _LinkSpan:
    start: int
    end: int
    text: str
    href: str


def tokenize(text: str) -> List[InlineSegment]:
    """Split ``text`` into plain, bold, italic and link segments.

    Links may sit inside bold or italic spans; they keep their own text and
    href and inherit the enclosing flag. Empty input gives a single empty
    segment.
    """
    links = _find_links(text)
    segments: List[InlineSegment] = []
    cursor = 0

    for match in FORMAT_RE.finditer(text):
        if match.start() > cursor:
            segments.append(InlineSegment(text[cursor : match.start()]))

        if match.group("label") and match.group("href"):
            segments.append(InlineSegment(match.group("label"), is_link=True, href=match.group("href")))
        elif match.group("bold"):
            inner = _split_around_links(match.group("bold"), links, match.start() + 2)
            segments.extend(replace(segment, is_bold=True) for segment in inner)
        elif match.group("italic"):
            inner = _split_around_links(match.group("italic"), links, match.start() + 1)
            segments.extend(replace(segment, is_italic=True) for segment in inner)

        cursor = match.end()

    if cursor < len(text):
        segments.append(InlineSegment(text[cursor:]))

    if not segments:
        segments.append(InlineSegment(text))
    return segments


def _find_links(text: str) -> list[_LinkSpan]:
    return [
        _LinkSpan(start=match.start(), end=match.end(), text=match.group(1), href=match.group(2))
        for match in LINK_RE.finditer(text)
    ]


def _split_around_links(content: str, links: Sequence[_LinkSpan], offset: int) -> List[InlineSegment]:
    # offset is where ``content`` starts in the original string
    inner_links = [link for link in links if link.start >= offset and link.end <= offset + len(content)]
    if not inner_links:
        return [InlineSegment(content)]

    segments: List[InlineSegment] = []
    cursor = 0
    for link in inner_links:
        start = link.start - offset
        if start > cursor:
            segments.append(InlineSegment(content[cursor:start]))
        segments.append(InlineSegment(link.text, is_link=True, href=link.href))
        cursor = link.end - offset

    if cursor < len(content):
        segments.append(InlineSegment(content[cursor:]))
    return segments
