"""Content loading for Folio.

This module discovers post source files and splits each one into its front
matter mapping and opaque body. It also defines the Document type produced by
validation.

Key classes:
- RawDocument: A source file split into metadata and body, not yet validated.
- Document: A validated, normalized post.
- FileContentLoader: Discovers source files under the posts directory.
- DocumentLoader: Lazily yields RawDocuments for every source file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from .config import SiteConfig
from .errors import MalformedDocumentError, MissingIdentifierError
from .extractors import extract_frontmatter
from .utils import is_source_file, slugify, slugify_term, split_dated_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawDocument:
    """A source file split into front matter and body.

    Attributes:
        path: Path to the source file.
        identifier: YYYY-MM-DD-slug derived from the filename.
        slug: URL-friendly slug from the filename remainder.
        filename_date: Date encoded in the filename.
        metadata: Parsed front matter mapping.
        body: Everything after the front matter block.
    """

    path: Path
    identifier: str
    slug: str
    filename_date: date
    metadata: dict[str, Any]
    body: str


@dataclass(frozen=True)
class Document:
    """A validated post.

    Attributes:
        identifier: Unique YYYY-MM-DD-slug key.
        slug: URL-friendly slug.
        publish_date: Calendar date of publication.
        title: Non-empty title.
        categories: Set of category names.
        tags: Tag names in first-occurrence order, without duplicates.
        comments_enabled: Whether the renderer should show comments.
        layout: Layout name handed to the renderer.
        url: Permalink for the post page.
        body: Opaque formatted text.
        source_path: Path to the source file.
        metadata: Remaining front matter keys, untouched.
    """

    identifier: str
    slug: str
    publish_date: date
    title: str
    categories: frozenset[str]
    tags: tuple[str, ...]
    comments_enabled: bool
    layout: str
    url: str
    body: str
    source_path: Path
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible summary without the body."""
        return {
            "identifier": self.identifier,
            "title": self.title,
            "date": self.publish_date.isoformat(),
            "url": self.url,
            "layout": self.layout,
            "tags": list(self.tags),
            "categories": sorted(self.categories),
            "comments": self.comments_enabled,
            "source": str(self.source_path),
        }


def parse_identifier(path: Path) -> tuple[str, str, date]:
    """Derive identifier, slug and date from a YYYY-MM-DD-slug filename.

    Args:
        path: Path to the source file.

    Returns:
        Tuple of (identifier, slug, date).

    Raises:
        MissingIdentifierError: The stem has no valid date prefix or no slug.
    """
    filename_date, rest = split_dated_name(path.stem)
    if filename_date is None:
        raise MissingIdentifierError(
            path, "filename must start with a valid YYYY-MM-DD- date prefix"
        )
    slug = slugify(rest or "")
    if not slug:
        raise MissingIdentifierError(path, "filename has no slug after the date prefix")
    return f"{filename_date.isoformat()}-{slug}", slug, filename_date


class UrlDeriver:
    """Derives URLs for posts and listing pages from the site config."""

    def __init__(self, config: SiteConfig):
        self.config = config

    def post(self, slug: str, publish_date: date) -> str:
        path = self.config.permalink.format(
            year=f"{publish_date.year:04d}",
            month=f"{publish_date.month:02d}",
            day=f"{publish_date.day:02d}",
            slug=slug,
        )
        return _normalize_url(path)

    def tag(self, tag: str) -> str:
        return _normalize_url(f"{self.config.tag_dir}/{slugify_term(tag) or 'untitled'}")

    def category(self, category: str) -> str:
        slug = slugify_term(category) or "untitled"
        return _normalize_url(f"{self.config.category_dir}/{slug}")

    def archive(self) -> str:
        return _normalize_url(self.config.archive_path)

    def index(self, page_number: int) -> str:
        if page_number <= 1:
            return "/"
        return f"/page/{page_number}/"


def _normalize_url(path: str) -> str:
    segments = [p for p in path.split("/") if p]
    if not segments:
        return "/"
    last = segments[-1]
    # Permalinks such as /{slug}.html keep their file suffix
    if "." in last:
        return "/" + "/".join(segments)
    return "/" + "/".join(segments) + "/"


class FileContentLoader:
    """Discovers post source files.

    Attributes:
        posts_dir: Directory containing post sources.
        extensions: Accepted file suffixes.
    """

    def __init__(self, posts_dir: Path, extensions: tuple[str, ...] = (".md", ".markdown")):
        self.posts_dir = posts_dir
        self.extensions = extensions

    def iter_files(self) -> list[Path]:
        """List all source files, sorted by path.

        Raises:
            FileNotFoundError: The posts directory does not exist.
        """
        if not self.posts_dir.is_dir():
            raise FileNotFoundError(f"Expected posts directory at {self.posts_dir}")
        files = [
            path
            for path in self.posts_dir.rglob("*")
            if path.is_file() and is_source_file(path, self.extensions)
        ]
        files.sort()
        logger.debug("Discovered %d source files in %s", len(files), self.posts_dir)
        return files


class DocumentLoader:
    """Yields RawDocuments for every source file.

    Iteration is lazy and restartable: every call to iter_raw() rescans the
    posts directory, so no state survives between builds.
    """

    def __init__(self, config: SiteConfig, content_loader: FileContentLoader | None = None):
        self.config = config
        self._content_loader = content_loader or FileContentLoader(
            config.posts_path, config.extensions
        )

    def iter_files(self) -> list[Path]:
        return self._content_loader.iter_files()

    def iter_raw(self) -> Iterator[RawDocument]:
        for path in self.iter_files():
            yield self.load(path)

    def load(self, path: Path) -> RawDocument:
        """Read and split one source file.

        Raises:
            MissingIdentifierError: Filename lacks a date and slug.
            MalformedDocumentError: File is not UTF-8, or the front matter
                block is missing or invalid.
        """
        identifier, slug, filename_date = parse_identifier(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocumentError(path, f"not valid UTF-8: {exc}") from exc
        metadata, body = extract_frontmatter(text, path)
        return RawDocument(
            path=path,
            identifier=identifier,
            slug=slug,
            filename_date=filename_date,
            metadata=metadata,
            body=body,
        )
