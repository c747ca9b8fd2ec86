from datetime import date
from pathlib import Path

import pytest

from folio.assembler import RenderPlan, RenderTarget, SiteAssembler
from folio.config import SiteConfig
from folio.content import Document
from folio.errors import (
    ConfigError,
    DuplicateIdentifierError,
    DuplicateUrlError,
    ValidationError,
)


def make_doc(identifier, when, tags=(), categories=(), source=None, url=None):
    return Document(
        identifier=identifier,
        slug=identifier[11:],
        publish_date=when,
        title=identifier[11:].title(),
        categories=frozenset(categories),
        tags=tuple(tags),
        comments_enabled=True,
        layout="post",
        url=url or f"/blog/{identifier[11:]}/",
        body="",
        source_path=Path(source or f"{identifier}.md"),
    )


@pytest.fixture
def assembler(tmp_path):
    return SiteAssembler(SiteConfig(project_root=tmp_path, paginate=2))


def test_assemble_rejects_duplicate_identifiers(assembler):
    docs = [
        make_doc("2015-08-24-hello", date(2015, 8, 24), source="2015-08-24-Hello.md"),
        make_doc("2015-08-24-hello", date(2015, 8, 24), source="2015-08-24-hello.markdown"),
    ]
    with pytest.raises(DuplicateIdentifierError) as exc:
        assembler.assemble(docs)
    assert exc.value.identifier == "2015-08-24-hello"
    assert exc.value.first_path == Path("2015-08-24-Hello.md")
    assert exc.value.source_path == Path("2015-08-24-hello.markdown")
    assert "2015-08-24-Hello.md" in str(exc.value)


def test_plan_orders_targets(assembler):
    docs = [
        make_doc("2015-08-24-intro", date(2015, 8, 24), tags=["meta"], categories=["Misc"]),
        make_doc("2015-09-05-fat-controller", date(2015, 9, 5), tags=["php", "meta"]),
        make_doc("2015-10-01-third", date(2015, 10, 1)),
    ]
    collection = assembler.assemble(docs)
    plan = assembler.plan(collection)

    assert [t.kind for t in plan] == [
        "index",
        "index",
        "post",
        "post",
        "post",
        "tag",
        "tag",
        "category",
        "archive",
    ]

    first, second = plan.of_kind("index")
    assert first.url == "/"
    assert first.document_ids == ("2015-10-01-third", "2015-09-05-fat-controller")
    assert (first.page_number, first.total_pages) == (1, 2)
    assert second.url == "/page/2/"
    assert second.document_ids == ("2015-08-24-intro",)

    assert [t.url for t in plan.of_kind("post")] == [
        "/blog/third/",
        "/blog/fat-controller/",
        "/blog/intro/",
    ]

    meta = plan.of_kind("tag")[0]
    assert meta.title == "meta"
    assert meta.url == "/blog/tags/meta/"
    assert meta.document_ids == ("2015-09-05-fat-controller", "2015-08-24-intro")

    (misc,) = plan.of_kind("category")
    assert misc.url == "/blog/categories/misc/"
    assert misc.title == "Misc"

    (archive,) = plan.of_kind("archive")
    assert archive.url == "/blog/archives/"
    assert archive.document_ids == collection.chronological


def test_plan_for_empty_site_has_front_page(assembler):
    plan = assembler.plan(assembler.assemble([]))
    assert [t.kind for t in plan] == ["index", "archive"]
    assert plan[0].url == "/"
    assert plan[0].document_ids == ()


def test_plan_serializes_to_plain_data(assembler):
    plan = assembler.plan(
        assembler.assemble([make_doc("2015-08-24-intro", date(2015, 8, 24), tags=["meta"])])
    )
    data = plan.to_list()
    assert data[0] == {
        "kind": "index",
        "url": "/",
        "title": "Blog",
        "documents": ["2015-08-24-intro"],
        "page": 1,
        "pages": 1,
    }
    assert data[1] == {
        "kind": "post",
        "url": "/blog/intro/",
        "title": "Intro",
        "documents": ["2015-08-24-intro"],
    }


def test_render_plan_is_a_sequence():
    target = RenderTarget("archive", "/archives/", "Archives", ())
    plan = RenderPlan([target])
    assert len(plan) == 1
    assert plan[0] is target
    assert list(plan) == [target]


def test_assemble_rejects_shared_permalink(assembler):
    # Front matter moved the August post onto the September permalink
    docs = [
        make_doc("2015-08-24-foo", date(2015, 9, 1), url="/blog/2015/09/01/foo/"),
        make_doc("2015-09-01-foo", date(2015, 9, 1), url="/blog/2015/09/01/foo/"),
    ]
    with pytest.raises(DuplicateUrlError) as exc:
        assembler.assemble(docs)
    assert exc.value.url == "/blog/2015/09/01/foo/"
    assert exc.value.first_path == Path("2015-08-24-foo.md")
    assert exc.value.source_path == Path("2015-09-01-foo.md")


@pytest.mark.parametrize("first, second", [("PHP", "php"), ("C#", "C++"), ("+++", "???")])
def test_assemble_rejects_tags_sharing_a_listing_url(assembler, first, second):
    docs = [
        make_doc("2015-08-24-a", date(2015, 8, 24), tags=[first]),
        make_doc("2015-09-05-b", date(2015, 9, 5), tags=[second]),
    ]
    with pytest.raises(ValidationError) as exc:
        assembler.assemble(docs)
    assert exc.value.field == "tags"
    assert exc.value.source_path == Path("2015-09-05-b.md")
    assert "2015-08-24-a.md" in exc.value.message


def test_assemble_rejects_categories_sharing_a_listing_url(assembler):
    docs = [
        make_doc("2015-08-24-a", date(2015, 8, 24), categories=["Web Dev"]),
        make_doc("2015-09-05-b", date(2015, 9, 5), categories=["web-dev"]),
    ]
    with pytest.raises(ValidationError) as exc:
        assembler.assemble(docs)
    assert exc.value.field == "categories"


def test_non_ascii_tags_get_distinct_urls(assembler):
    docs = [make_doc("2015-08-24-a", date(2015, 8, 24), tags=["日本語", "中文", "Café"])]
    plan = assembler.plan(assembler.assemble(docs))
    urls = [t.url for t in plan.of_kind("tag")]
    assert sorted(urls) == sorted(
        ["/blog/tags/日本語/", "/blog/tags/中文/", "/blog/tags/café/"]
    )
    assert len({t.url for t in plan}) == len(plan)


def test_plan_rejects_permalink_overlapping_tag_pages(tmp_path):
    config = SiteConfig(project_root=tmp_path, permalink="/blog/tags/{slug}/")
    assembler = SiteAssembler(config)
    docs = [
        make_doc("2015-08-24-php", date(2015, 8, 24), url="/blog/tags/php/"),
        make_doc("2015-09-05-other", date(2015, 9, 5), tags=["php"]),
    ]
    collection = assembler.assemble(docs)
    with pytest.raises(DuplicateUrlError) as exc:
        assembler.plan(collection)
    assert exc.value.url == "/blog/tags/php/"
    assert exc.value.first_path == Path("2015-08-24-php.md")
    assert exc.value.source_path == Path("2015-09-05-other.md")


def test_plan_rejects_archive_on_front_page(tmp_path):
    assembler = SiteAssembler(SiteConfig(project_root=tmp_path, archive_path=""))
    with pytest.raises(ConfigError, match="share the URL /"):
        assembler.plan(assembler.assemble([]))
