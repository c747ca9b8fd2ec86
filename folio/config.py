"""Site configuration for Folio.

Configuration is read once per build from folio.yaml at the project root and
passed explicitly through the pipeline. Nothing here is module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

CONFIG_FILENAME = "folio.yaml"
STRING_FIELDS = (
    "posts_dir",
    "permalink",
    "tag_dir",
    "category_dir",
    "archive_path",
    "default_layout",
)


@dataclass(frozen=True)
class SiteConfig:
    """Settings for one build.

    Attributes:
        project_root: Directory holding folio.yaml and the sources.
        posts_dir: Post source directory, relative to project_root.
        extensions: File suffixes treated as post sources.
        permalink: URL pattern for posts; accepts {year}, {month}, {day}, {slug}.
        tag_dir: URL prefix for tag listing pages.
        category_dir: URL prefix for category listing pages.
        archive_path: URL of the archive page.
        paginate: Posts per index page.
        default_layout: Layout used when a post names none.
        workers: Number of threads for load and validation.
    """

    project_root: Path = Path(".")
    posts_dir: str = "source/_posts"
    extensions: tuple[str, ...] = (".md", ".markdown")
    permalink: str = "/blog/{year}/{month}/{day}/{slug}/"
    tag_dir: str = "blog/tags"
    category_dir: str = "blog/categories"
    archive_path: str = "blog/archives"
    paginate: int = 10
    default_layout: str = "post"
    workers: int = 1

    @property
    def posts_path(self) -> Path:
        return self.project_root / self.posts_dir

    def validate(self) -> SiteConfig:
        """Check value types and ranges, returning self so calls can be chained."""
        for name in ("paginate", "workers"):
            value = getattr(self, name)
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        for name in STRING_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{name} must be a non-empty string, got {value!r}")
        if "{slug}" not in self.permalink:
            raise ConfigError(f"permalink must contain {{slug}}, got {self.permalink!r}")
        try:
            self.permalink.format(year="2000", month="01", day="01", slug="x")
        except (KeyError, IndexError, ValueError) as exc:
            raise ConfigError(f"permalink has an unknown placeholder: {exc}") from exc
        if not self.extensions:
            raise ConfigError("extensions must list at least one suffix")
        return self


def load_config(project_root: Path, **overrides: Any) -> SiteConfig:
    """Load site configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.
        **overrides: Values that win over the file, e.g. from CLI options.
            None values are ignored.

    Returns:
        Validated SiteConfig with defaults applied.
    """
    config_path = project_root / CONFIG_FILENAME
    values: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"{config_path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"{config_path}: expected a mapping at the top level")
        values.update(loaded)
    values.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(SiteConfig)} - {"project_root"}
    kwargs = {k: v for k, v in values.items() if k in known}
    if "extensions" in kwargs:
        exts = kwargs["extensions"]
        if isinstance(exts, str):
            exts = [exts]
        if not isinstance(exts, list) or not all(isinstance(e, str) and e for e in exts):
            raise ConfigError(f"extensions must be a list of suffixes, got {exts!r}")
        kwargs["extensions"] = tuple(e if e.startswith(".") else f".{e}" for e in exts)
    # URL prefixes are joined with "/" later
    for key in ("tag_dir", "category_dir", "archive_path"):
        if isinstance(kwargs.get(key), str):
            kwargs[key] = kwargs[key].strip("/")
    return SiteConfig(project_root=project_root, **kwargs).validate()
