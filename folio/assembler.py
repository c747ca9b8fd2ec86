"""Site assembly for Folio.

The assembler takes validated Documents, rejects duplicate identifiers, builds
the SiteCollection and derives the rendering plan: the list of pages an
external renderer has to produce.

Key classes:
- RenderTarget: One page to render (URL, kind, documents it lists).
- RenderPlan: Ordered, deterministic sequence of RenderTargets.
- SiteAssembler: Builds a SiteCollection and its RenderPlan.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .collections import SiteCollection
from .config import SiteConfig
from .content import Document, UrlDeriver
from .errors import ConfigError, DuplicateIdentifierError, DuplicateUrlError, ValidationError

logger = logging.getLogger(__name__)

INDEX = "index"
POST = "post"
TAG = "tag"
CATEGORY = "category"
ARCHIVE = "archive"


@dataclass(frozen=True)
class RenderTarget:
    """A page the renderer must produce.

    Attributes:
        kind: One of index, post, tag, category, archive.
        url: Output URL path.
        title: Heading for the page (post title, tag name, ...).
        document_ids: Documents rendered on the page, in display order.
        page_number: 1-based page number for paginated index pages.
        total_pages: Number of index pages overall (index pages only).
    """

    kind: str
    url: str
    title: str
    document_ids: tuple[str, ...]
    page_number: int = 1
    total_pages: int = 1

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": self.kind,
            "url": self.url,
            "title": self.title,
            "documents": list(self.document_ids),
        }
        if self.kind == INDEX:
            data["page"] = self.page_number
            data["pages"] = self.total_pages
        return data


class RenderPlan(Sequence[RenderTarget]):
    """Ordered list of RenderTargets for one build."""

    def __init__(self, targets: Iterable[RenderTarget]):
        self._targets = tuple(targets)

    def __iter__(self) -> Iterator[RenderTarget]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __getitem__(self, item):
        return self._targets[item]

    def of_kind(self, kind: str) -> list[RenderTarget]:
        return [t for t in self._targets if t.kind == kind]

    def to_list(self) -> list[dict[str, Any]]:
        return [t.to_dict() for t in self._targets]

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"RenderPlan({len(self._targets)} targets)"


class SiteAssembler:
    """Builds the SiteCollection and RenderPlan from validated Documents."""

    def __init__(self, config: SiteConfig):
        self.config = config
        self.url_deriver = UrlDeriver(config)

    def assemble(self, documents: Iterable[Document]) -> SiteCollection:
        """Build the collection.

        Raises:
            DuplicateIdentifierError: Two documents share an identifier.
            DuplicateUrlError: Two documents share a permalink.
            ValidationError: Two distinct tags or categories share a listing URL.
        """
        seen: dict[str, Path] = {}
        docs = list(documents)
        for doc in docs:
            if doc.identifier in seen:
                raise DuplicateIdentifierError(doc.identifier, seen[doc.identifier], doc.source_path)
            seen[doc.identifier] = doc.source_path
        collection = SiteCollection(docs)
        self._check_permalinks(collection)
        self._check_terms(collection, "tags", collection.by_tag, self.url_deriver.tag)
        self._check_terms(
            collection, "categories", collection.by_category, self.url_deriver.category
        )
        logger.debug(
            "Assembled %d documents, %d tags, %d categories",
            len(collection),
            len(collection.by_tag),
            len(collection.by_category),
        )
        return collection

    def plan(self, collection: SiteCollection) -> RenderPlan:
        """Derive the pages to render.

        Order: index pages, posts (newest first), tags, categories, archive.

        Raises:
            DuplicateUrlError: Two pages of different kinds share a URL, e.g.
                a permalink pattern that overlaps the tag directory.
        """
        targets: list[RenderTarget] = []
        targets.extend(self._index_targets(collection.chronological))
        for doc in collection:
            targets.append(RenderTarget(POST, doc.url, doc.title, (doc.identifier,)))
        for tag, ids in collection.by_tag.items():
            targets.append(RenderTarget(TAG, self.url_deriver.tag(tag), tag, ids))
        for category, ids in collection.by_category.items():
            targets.append(
                RenderTarget(CATEGORY, self.url_deriver.category(category), category, ids)
            )
        targets.append(
            RenderTarget(ARCHIVE, self.url_deriver.archive(), "Archives", collection.chronological)
        )
        self._check_targets(collection, targets)
        return RenderPlan(targets)

    def _check_permalinks(self, collection: SiteCollection) -> None:
        # Front matter dates can move two same-slug posts onto one permalink
        seen: dict[str, Path] = {}
        for doc in collection:
            if doc.url in seen:
                raise DuplicateUrlError(doc.url, seen[doc.url], doc.source_path)
            seen[doc.url] = doc.source_path

    def _check_terms(
        self,
        collection: SiteCollection,
        field: str,
        index: Mapping[str, tuple[str, ...]],
        url_for: Callable[[str], str],
    ) -> None:
        seen: dict[str, str] = {}
        for term, ids in index.items():
            url = url_for(term)
            if url in seen:
                other = seen[url]
                first_path = collection.resolve(index[other][:1])[0].source_path
                raise ValidationError(
                    collection.resolve(ids[:1])[0].source_path,
                    field,
                    f"'{term}' and '{other}' (used in {first_path}) share the listing URL {url}",
                )
            seen[url] = term

    def _check_targets(self, collection: SiteCollection, targets: list[RenderTarget]) -> None:
        seen: dict[str, RenderTarget] = {}
        for target in targets:
            first = seen.get(target.url)
            if first is None:
                seen[target.url] = target
                continue
            if not first.document_ids or not target.document_ids:
                raise ConfigError(
                    f"{first.kind} page '{first.title}' and {target.kind} page "
                    f"'{target.title}' share the URL {target.url}"
                )
            raise DuplicateUrlError(
                target.url,
                collection.resolve(first.document_ids[:1])[0].source_path,
                collection.resolve(target.document_ids[:1])[0].source_path,
            )

    def _index_targets(self, identifiers: tuple[str, ...]) -> list[RenderTarget]:
        size = self.config.paginate
        # An empty blog still gets a front page
        chunks = [identifiers[i : i + size] for i in range(0, len(identifiers), size)] or [()]
        total = len(chunks)
        return [
            RenderTarget(
                INDEX,
                self.url_deriver.index(number),
                "Blog" if number == 1 else f"Blog - page {number}",
                chunk,
                page_number=number,
                total_pages=total,
            )
            for number, chunk in enumerate(chunks, start=1)
        ]
