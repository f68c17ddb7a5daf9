from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

DEFAULT_CONTENT_ROOT = Path("content") / "blog"


class SourceReadError(OSError):
    """A post source exists but could not be read."""


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str]) -> Path:
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / f"{input_path.stem}.docx"
        return out_path
    return input_path.with_suffix(".docx")


def source_path(identifier: str, content_root: Path = DEFAULT_CONTENT_ROOT) -> Path:
    return Path(content_root) / f"{identifier}.md"


def read_source(identifier: str, content_root: Path = DEFAULT_CONTENT_ROOT) -> str | None:
    """Return the markdown body for ``identifier`` or None when there is none.

    Only a missing file counts as "not found"; any other I/O failure raises
    SourceReadError.
    """
    path = source_path(identifier, content_root)
    if not path.exists():
        logging.debug("No source for %s at %s", identifier, path)
        return None
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Error reading markdown file {identifier}: {exc}") from exc
    logging.debug("Read %d chars from %s", len(content), path)
    return content.strip()
