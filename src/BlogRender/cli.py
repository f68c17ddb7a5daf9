from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from . import markdown_parser, renderer_docx
from .blog_catalog import CATALOG_FILENAME, find_post, format_date, load_catalog
from .model import block_to_dict
from .utils import DEFAULT_CONTENT_ROOT, configure_logging, read_source, resolve_output_path, source_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blogrender",
        description="Parse blog posts written in a small Markdown dialect and export them.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a post to DOCX")
    render.add_argument("slug", type=str, help="Post identifier (file name without .md)")
    render.add_argument("-o", "--output", type=str, help="Output DOCX path")
    _add_content_options(render)

    inspect_cmd = subparsers.add_parser("inspect", help="Print the parsed elements of a post as YAML")
    inspect_cmd.add_argument("slug", type=str, help="Post identifier (file name without .md)")
    _add_content_options(inspect_cmd, drafts=False)

    listing = subparsers.add_parser("list", help="List catalogued posts, newest first")
    _add_content_options(listing)
    return parser


def _add_content_options(parser: argparse.ArgumentParser, drafts: bool = True) -> None:
    parser.add_argument(
        "--content-dir",
        type=str,
        default=str(DEFAULT_CONTENT_ROOT),
        help="Directory holding <slug>.md files and posts.yaml",
    )
    if drafts:
        parser.add_argument("--drafts", action="store_true", help="Include unpublished posts")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    content_root = Path(args.content_dir).expanduser()

    if args.command == "list":
        return _list_posts(content_root, include_drafts=args.drafts)
    if args.command == "inspect":
        return _inspect_post(content_root, args.slug)
    return _render_post(content_root, args.slug, args.output, include_drafts=args.drafts)


def _render_post(content_root: Path, slug: str, output: str | None, include_drafts: bool) -> int:
    logging.info("Reading %s", slug)
    markdown_text = read_source(slug, content_root)
    if markdown_text is None:
        logging.error("Post not found: %s", source_path(slug, content_root))
        return 1
    logging.debug("Markdown length: %d chars", len(markdown_text))

    post = find_post(load_catalog(content_root / CATALOG_FILENAME, include_drafts=include_drafts), slug)
    metadata = post.as_metadata() if post else None
    if post is None:
        logging.info("No catalog entry for %s, rendering without title block", slug)

    logging.info("Parsing markdown...")
    document = markdown_parser.parse_markdown(markdown_text, metadata=metadata)

    output_path = resolve_output_path(source_path(slug, content_root), output)
    logging.info("Rendering DOCX to %s", output_path)
    renderer_docx.render_document(document, output_path=output_path)

    logging.info("Done. Saved to %s", output_path)
    return 0


def _inspect_post(content_root: Path, slug: str) -> int:
    markdown_text = read_source(slug, content_root)
    if markdown_text is None:
        logging.error("Post not found: %s", source_path(slug, content_root))
        return 1
    blocks = markdown_parser.process_markdown(markdown_text)
    yaml.safe_dump(
        [block_to_dict(block) for block in blocks],
        sys.stdout,
        allow_unicode=True,
        sort_keys=False,
    )
    return 0


def _list_posts(content_root: Path, include_drafts: bool) -> int:
    posts = load_catalog(content_root / CATALOG_FILENAME, include_drafts=include_drafts)
    if not posts:
        logging.info("No posts in %s", content_root / CATALOG_FILENAME)
    for post in posts:
        marker = "" if post.published else " (draft)"
        print(f"{format_date(post.date)}  {post.slug}  {post.title}{marker}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
