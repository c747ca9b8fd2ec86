"""Command-line interface for Folio.

This module defines the CLI commands using Click framework.

Commands:
- check: Load and validate every post, report a summary.
- plan: Print the rendering plan as JSON.
- new: Create a new dated post interactively.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .config import load_config
from .errors import ContentError, FolioError
from .utils import is_source_file, slugify, split_dated_name


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline details to stderr")
def cli(verbose: bool):
    """Folio static blog content pipeline."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--workers", type=int, required=False, help="Worker threads (overrides folio.yaml)")
def check(workers: int | None):
    """Validate every post and report a summary."""
    project_root = Path.cwd()
    result = _run_build(project_root, workers)
    collection = result.collection
    click.echo(
        f"Validated {len(collection)} posts "
        f"({len(collection.by_tag)} tags, {len(collection.by_category)} categories)"
    )


@cli.command()
@click.option("--workers", type=int, required=False, help="Worker threads (overrides folio.yaml)")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation")
def plan(workers: int | None, indent: int):
    """Print the rendering plan as JSON."""
    project_root = Path.cwd()
    result = _run_build(project_root, workers)
    payload = {
        "documents": [doc.to_dict() for doc in result.collection],
        "targets": result.plan.to_list(),
    }
    click.echo(json.dumps(payload, indent=indent or None))


@cli.command()
def new():
    """Create a new post interactively."""
    project_root = Path.cwd()
    try:
        config = load_config(project_root)
    except FolioError as exc:
        raise click.ClickException(str(exc)) from None
    posts_dir = config.posts_path
    if not posts_dir.is_dir():
        raise click.ClickException(
            f"No {config.posts_dir}/ directory found. Run this command from a Folio project root."
        )

    title = questionary.text(
        "Title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()
    title = title.strip()

    slug = slugify(title)
    if not slug:
        raise click.ClickException("Title must contain at least one letter or digit")

    tags = questionary.text(
        "Tags (space separated):",
        style=_questionary_style(),
    ).ask()
    if tags is None:
        raise click.Abort()

    categories = questionary.text(
        "Categories (space separated):",
        style=_questionary_style(),
    ).ask()
    if categories is None:
        raise click.Abort()

    comments = questionary.confirm(
        "Enable comments?",
        default=True,
        style=_questionary_style(),
    ).ask()
    if comments is None:
        raise click.Abort()

    # Same slug under another date would make two posts with one title URL
    conflicting = _find_slug(posts_dir, slug, config.extensions)
    if conflicting is not None:
        raise click.ClickException(
            f"A post with slug '{slug}' already exists: {conflicting.name}"
        )

    now = datetime.now()
    target_path = posts_dir / f"{now.strftime('%Y-%m-%d')}-{slug}.md"
    frontmatter = {
        "layout": config.default_layout,
        "title": title,
        "date": now.strftime("%Y-%m-%d %H:%M"),
        "comments": comments,
        "categories": categories.split(),
        "tags": tags.split(),
    }
    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    target_path.write_text(f"---\n{header}---\n\n", encoding="utf-8")
    click.echo(f"Created {target_path.relative_to(project_root)}")


def _run_build(project_root: Path, workers: int | None):
    from .build import build_site

    try:
        return build_site(project_root, workers=workers)
    except ContentError as exc:
        _report_failure(project_root, exc.source_path, exc.message)
    except (FileNotFoundError, FolioError) as exc:
        _report_failure(project_root, None, str(exc))


def _report_failure(project_root: Path, source_path: Path | None, message: str):
    """Print a build failure report and exit with status 1."""
    click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
    if source_path is not None:
        try:
            shown = source_path.relative_to(project_root)
        except ValueError:
            shown = source_path
        click.echo(click.style(f"  File: {shown}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {message}", fg="white"), err=True)
    raise SystemExit(1)


def _find_slug(posts_dir: Path, slug: str, extensions: tuple[str, ...]) -> Path | None:
    """Return an existing post whose filename slug matches, if any."""
    for path in sorted(posts_dir.rglob("*")):
        if not path.is_file() or not is_source_file(path, extensions):
            continue
        _, rest = split_dated_name(path.stem)
        if slugify(rest if rest is not None else path.stem) == slug:
            return path
    return None


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
