"""Metadata validation and normalization for Folio.

A RawDocument's front matter is a loose mapping of string keys to YAML values.
Each field the core cares about is checked on its own and normalized; every
other key is carried through untouched for the renderer.

Field rules:
- title: required non-blank text.
- date: optional; overrides the filename date when present.
- tags: sequence, duplicates dropped in first-occurrence order.
- categories: set.
- comments: boolean, defaults to true.
- layout: text, defaults to the configured layout.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

from .config import SiteConfig
from .content import Document, RawDocument, UrlDeriver
from .errors import ValidationError
from .utils import parse_date, unique

CORE_FIELDS = frozenset({"title", "date", "tags", "categories", "comments", "layout"})


class MetadataValidator:
    """Turns RawDocuments into Documents.

    Validation is pure: the same RawDocument always yields an equal Document
    or raises the same ValidationError.
    """

    def __init__(self, config: SiteConfig):
        self.config = config
        self.url_deriver = UrlDeriver(config)

    def validate(self, raw: RawDocument) -> Document:
        """Validate and normalize one document.

        Raises:
            ValidationError: A field is missing or has the wrong type. The
                error's ``field`` names the front matter key.
        """
        meta = raw.metadata
        path = raw.path
        title = self._title(meta, path)
        publish_date = self._date(meta, path, raw.filename_date)
        tags = unique(self._terms(meta, "tags", path))
        categories = frozenset(self._terms(meta, "categories", path))
        comments = self._comments(meta, path)
        layout = self._layout(meta, path)
        return Document(
            identifier=raw.identifier,
            slug=raw.slug,
            publish_date=publish_date,
            title=title,
            categories=categories,
            tags=tags,
            comments_enabled=comments,
            layout=layout,
            url=self.url_deriver.post(raw.slug, publish_date),
            body=raw.body,
            source_path=path,
            metadata={k: v for k, v in meta.items() if k not in CORE_FIELDS},
        )

    def _title(self, meta: dict[str, Any], path: Path) -> str:
        value = meta.get("title")
        if value is None:
            raise ValidationError(path, "title", "required field is missing")
        # YAML reads `title: 1984` as an int
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            raise ValidationError(path, "title", f"expected text, got {type(value).__name__}")
        title = value.strip()
        if not title:
            raise ValidationError(path, "title", "must not be empty")
        return title

    def _date(self, meta: dict[str, Any], path: Path, fallback: date) -> date:
        if meta.get("date") is None:
            return fallback
        parsed = parse_date(meta["date"])
        if parsed is None:
            raise ValidationError(path, "date", f"cannot parse {meta['date']!r} as a date")
        return parsed

    def _terms(self, meta: dict[str, Any], key: str, path: Path) -> list[str]:
        value = meta.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            items: Iterable[Any] = value.split()
        elif isinstance(value, list):
            items = value
        else:
            raise ValidationError(
                path, key, f"expected text or a list, got {type(value).__name__}"
            )
        terms = []
        for item in items:
            if item is None:
                continue
            if isinstance(item, (list, dict)):
                raise ValidationError(path, key, f"nested {type(item).__name__} is not allowed")
            term = str(item).strip()
            if term:
                terms.append(term)
        return terms

    def _comments(self, meta: dict[str, Any], path: Path) -> bool:
        if "comments" not in meta:
            return True
        value = meta["comments"]
        if not isinstance(value, bool):
            raise ValidationError(path, "comments", f"expected true or false, got {value!r}")
        return value

    def _layout(self, meta: dict[str, Any], path: Path) -> str:
        value = meta.get("layout")
        if value is None:
            return self.config.default_layout
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(path, "layout", f"expected a layout name, got {value!r}")
        return value.strip()
