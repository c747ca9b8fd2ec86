"""Utility functions for Folio.

Key functions:
    slugify: Convert text to a URL slug.
    slugify_term: Convert a tag or category to a URL slug.
    split_dated_name: Split a YYYY-MM-DD-slug filename stem into date and slug.
    parse_date: Coerce a front matter date value to a calendar date.
    unique: Drop duplicates keeping first-occurrence order.
    is_source_file: Check whether a path is a post source file.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path

DATE_PREFIX_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:-(.*))?$")
DATE_VALUE_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:[T\s].*)?$")


def slugify(text: str) -> str:
    """Convert text to a lower-case, hyphen-separated slug.

    Args:
        text: Arbitrary text such as a filename remainder, title or tag.

    Returns:
        URL-friendly slug, empty when text has no alphanumerics.

    Examples:
        >>> slugify("Refactoring a Fat Controller!")
        'refactoring-a-fat-controller'
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", text)
    return cleaned.strip("-").lower()


def slugify_term(term: str) -> str:
    """Slug for a tag or category listing URL.

    Unlike slugify, letters outside ASCII are kept so that tags written in
    other scripts get distinct URLs.

    Examples:
        >>> slugify_term("Design Patterns")
        'design-patterns'

        >>> slugify_term("日本語")
        '日本語'
    """
    cleaned = re.sub(r"[\W_]+", "-", term)
    return cleaned.strip("-").lower()


def split_dated_name(stem: str) -> tuple[date | None, str | None]:
    """Split a filename stem of the form YYYY-MM-DD-slug.

    Args:
        stem: Filename without extension.

    Returns:
        Tuple of (date, remainder). Either side is None when missing or invalid.

    Examples:
        >>> split_dated_name("2015-09-05-fat-controller")
        (datetime.date(2015, 9, 5), 'fat-controller')

        >>> split_dated_name("about")
        (None, None)
    """
    match = DATE_PREFIX_RE.match(stem)
    if not match:
        return None, None
    year, month, day, rest = match.groups()
    try:
        parsed = date(int(year), int(month), int(day))
    except ValueError:
        return None, rest
    return parsed, rest


def parse_date(value: object) -> date | None:
    """Coerce a front matter date value to a calendar date.

    PyYAML already turns unquoted ISO dates into date/datetime objects; quoted
    strings such as "2015-08-24 21:21:18 +0800" are parsed by their prefix.

    Returns:
        The calendar date, or None when the value cannot be interpreted.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = DATE_VALUE_RE.match(value)
        if not match:
            return None
        try:
            return date(*(int(part) for part in match.groups()))
        except ValueError:
            return None
    return None


def unique(items: Iterable[str]) -> tuple[str, ...]:
    """Return items without duplicates, keeping first-occurrence order.

    Examples:
        >>> unique(["php", "laravel", "php"])
        ('php', 'laravel')
    """
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return tuple(seen)


def is_source_file(path: Path, extensions: Iterable[str]) -> bool:
    """Check if a path is a post source file.

    Hidden files (editor swap files, .DS_Store) are never sources.

    Args:
        path: Path to check.
        extensions: Accepted suffixes, compared case-insensitively.

    Returns:
        True if the file should be loaded as a post.
    """
    if path.name.startswith("."):
        return False
    suffix = path.suffix.lower()
    return any(suffix == ext.lower() for ext in extensions)
