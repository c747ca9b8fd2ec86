from pathlib import Path

import pytest


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "source" / "_posts").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def posts(project: Path) -> Path:
    return project / "source" / "_posts"


@pytest.fixture
def write_post(posts: Path):
    """Return a helper that writes a post with the given front matter."""

    def write(name: str, frontmatter: str, body: str = "Body text.\n") -> Path:
        path = posts / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"---\n{frontmatter}---\n{body}", encoding="utf-8")
        return path

    return write
