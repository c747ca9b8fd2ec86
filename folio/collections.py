"""Document collections and derived indexes for Folio.

A SiteCollection owns every Document of one build. Its indexes are computed
once at construction and exposed read-only; a new build makes a new collection.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

from .content import Document


def chronological_key(doc: Document) -> tuple[int, str]:
    """Sort key for newest-first order, ties broken by identifier ascending."""
    return (-doc.publish_date.toordinal(), doc.identifier)


class TermIndex(Mapping[str, tuple[str, ...]]):
    """Read-only mapping of tag or category to document identifiers.

    Keys iterate in sorted order; each value follows chronological order.
    """

    def __init__(self, mapping: dict[str, list[str]]):
        self._mapping = MappingProxyType(
            {key: tuple(mapping[key]) for key in sorted(mapping)}
        )

    def __getitem__(self, key: str) -> tuple[str, ...]:
        return self._mapping[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"TermIndex({len(self._mapping)} terms)"


class SiteCollection(Sequence[Document]):
    """All Documents of one build, in chronological order.

    Attributes:
        by_tag: Tag name to identifiers.
        by_category: Category name to identifiers.
    """

    def __init__(self, documents: Iterable[Document]):
        self._documents = tuple(sorted(documents, key=chronological_key))
        self._by_id = {doc.identifier: doc for doc in self._documents}
        tags: dict[str, list[str]] = {}
        categories: dict[str, list[str]] = {}
        for doc in self._documents:
            for tag in doc.tags:
                tags.setdefault(tag, []).append(doc.identifier)
            for category in doc.categories:
                categories.setdefault(category, []).append(doc.identifier)
        self.by_tag = TermIndex(tags)
        self.by_category = TermIndex(categories)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, item):
        return self._documents[item]

    @property
    def chronological(self) -> tuple[str, ...]:
        """Identifiers, newest first."""
        return tuple(doc.identifier for doc in self._documents)

    def get(self, identifier: str) -> Document | None:
        return self._by_id.get(identifier)

    def resolve(self, identifiers: Iterable[str]) -> list[Document]:
        return [self._by_id[i] for i in identifiers]

    def latest(self, count: int = 5) -> list[Document]:
        return list(self._documents[:count])

    def with_tag(self, tag: str) -> list[Document]:
        return self.resolve(self.by_tag.get(tag, ()))

    def in_category(self, category: str) -> list[Document]:
        return self.resolve(self.by_category.get(category, ()))

    def archive(self) -> dict[int, tuple[str, ...]]:
        """Group identifiers by publication year, newest year first."""
        years: dict[int, list[str]] = {}
        for doc in self._documents:
            years.setdefault(doc.publish_date.year, []).append(doc.identifier)
        return {year: tuple(ids) for year, ids in years.items()}

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"SiteCollection({len(self._documents)} documents)"
