"""Content-addressed cache for parsed posts.

Maps the SHA-256 of the markdown source to the block sequence produced for
it, so re-rendering an unchanged post skips the scan. The parser itself stays
stateless; the cache is opt-in via ``parse_markdown(..., cache=...)``.
"""

from __future__ import annotations

import hashlib
import threading
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .model import Block


def hash_content(source: str) -> str:
    return hashlib.sha256(source.encode("utf-8")).hexdigest()


class DictParseCache:
    """In-memory cache guarded by a lock, safe to share between threads."""

    def __init__(self) -> None:
        self._data: dict[str, Tuple[Block, ...]] = {}
        self._lock = threading.Lock()

    def get(self, content_hash: str) -> Tuple[Block, ...] | None:
        with self._lock:
            return self._data.get(content_hash)

    def put(self, content_hash: str, blocks: Tuple[Block, ...]) -> None:
        with self._lock:
            self._data[content_hash] = blocks

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
