from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List

import yaml

CATALOG_FILENAME = "posts.yaml"


class CatalogError(ValueError):
    """The post catalog is malformed."""


@dataclass
class BlogPost:
    id: str
    title: str
    excerpt: str
    date: datetime.date
    read_time: str
    slug: str
    tags: List[str] = field(default_factory=list)
    published: bool = False

    def as_metadata(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "excerpt": self.excerpt,
            "date": self.date,
            "read_time": self.read_time,
            "tags": list(self.tags),
            "slug": self.slug,
        }


def parse_catalog(text: str, include_drafts: bool = False) -> list[BlogPost]:
    """Parse the YAML post catalog, newest post first.

    Unpublished posts are dropped unless ``include_drafts`` is set.
    """
    data = yaml.safe_load(text) or []
    if isinstance(data, dict):
        data = data.get("posts") or []
    if not isinstance(data, list):
        raise CatalogError("Catalog root must be a list of posts or a mapping with a 'posts' list.")

    posts: list[BlogPost] = []
    seen: set[str] = set()
    for index, entry in enumerate(data):
        post = _build_post(entry, index)
        if post.slug in seen:
            raise CatalogError(f"Duplicate slug in catalog: {post.slug}")
        seen.add(post.slug)
        posts.append(post)

    if not include_drafts:
        posts = [post for post in posts if post.published]
    return sort_by_date(posts)


def load_catalog(path: Path, include_drafts: bool = False) -> list[BlogPost]:
    if not path.exists():
        return []
    return parse_catalog(path.read_text(encoding="utf-8"), include_drafts=include_drafts)


def sort_by_date(posts: Iterable[BlogPost]) -> list[BlogPost]:
    return sorted(posts, key=lambda post: post.date, reverse=True)


def find_post(posts: Iterable[BlogPost], slug: str) -> BlogPost | None:
    for post in posts:
        if post.slug == slug:
            return post
    return None


def format_date(value: datetime.date) -> str:
    """Human readable date, e.g. ``January 15, 2024``."""
    return f"{value:%B} {value.day}, {value.year}"


def _build_post(entry: Any, index: int) -> BlogPost:
    if not isinstance(entry, dict):
        raise CatalogError(f"Catalog entry #{index} must be a mapping.")
    for key in ("slug", "title", "date"):
        if not entry.get(key):
            raise CatalogError(f"Catalog entry #{index} is missing '{key}'.")

    slug = str(entry["slug"])
    return BlogPost(
        id=str(entry.get("id") or slug),
        title=str(entry["title"]),
        excerpt=str(entry.get("excerpt") or ""),
        date=_parse_date(entry["date"], slug),
        read_time=str(entry.get("read_time") or entry.get("readTime") or ""),
        slug=slug,
        tags=_normalize_list(entry.get("tags")),
        published=_parse_published(entry.get("published", False), slug),
    )


def _parse_date(value: Any, slug: str) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value))
    except ValueError as exc:
        raise CatalogError(f"Invalid date for post {slug}: {value!r}") from exc


def _parse_published(value: Any, slug: str) -> bool:
    if not isinstance(value, bool):
        raise CatalogError(f"'published' for post {slug} must be true or false, got {value!r}")
    return value


def _normalize_list(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]
