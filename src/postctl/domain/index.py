"""CorpusIndex — the aggregate, queryable view over all documents.

INVARIANT: ``by_date`` and ``by_category`` are pure functions of the
document collection. They are computed once, when the index is built, and
there is no way to mutate them independently. Adding documents yields a
new index (:meth:`CorpusIndex.with_documents`).

Ordering: descending by effective date, ties broken by path ascending.
Documents without any date sort after every dated document.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from operator import attrgetter
from types import MappingProxyType
from typing import NamedTuple

from postctl.domain.document import Document
from postctl.domain.errors import CorpusError
from postctl.domain.values import naive_utc


class LoadFailure(NamedTuple):
    """A ``(path, error)`` pair recorded instead of raised during loading."""

    path: str
    error: CorpusError


@dataclass(frozen=True)
class Page:
    """One page of :meth:`CorpusIndex.paginate`."""

    number: int
    per_page: int
    total_pages: int
    total_documents: int
    documents: tuple[Document, ...]

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def _date_key(document: Document) -> tuple[bool, datetime]:
    moment = document.date
    if moment is None:
        return False, datetime.min
    return True, naive_utc(moment)


def sort_by_date(documents: Iterable[Document]) -> tuple[Document, ...]:
    """Order *documents* newest first, ties by path ascending."""
    ordered = sorted(documents, key=attrgetter("path"))
    # Stable sort: reverse=True keeps the path order within equal dates.
    ordered.sort(key=_date_key, reverse=True)
    return tuple(ordered)


class CorpusIndex:
    """Immutable index of documents keyed by path.

    Construct it with the loaded documents and any recorded failures. A
    later document with an already-seen path replaces the earlier one.
    """

    def __init__(
        self,
        documents: Iterable[Document] = (),
        failures: Iterable[LoadFailure] = (),
    ) -> None:
        collected: dict[str, Document] = {}
        for document in documents:
            collected[document.path] = document
        self._documents = collected
        self._failures = tuple(failures)

        self._by_date = sort_by_date(collected.values())
        by_category: dict[str, list[str]] = {}
        for document in collected.values():
            for category in document.categories:
                by_category.setdefault(category, []).append(document.path)
        self._by_category = {name: tuple(paths) for name, paths in by_category.items()}

    # --- Collection ----------------------------------------------------

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._by_date)

    def __contains__(self, path: object) -> bool:
        return path in self._documents

    def __repr__(self) -> str:
        return f"CorpusIndex(documents={len(self)}, failures={len(self._failures)})"

    @property
    def documents(self) -> Mapping[str, Document]:
        """Read-only mapping of path to document, in load order."""
        return MappingProxyType(self._documents)

    @property
    def failures(self) -> tuple[LoadFailure, ...]:
        return self._failures

    def get(self, path: str) -> Document | None:
        return self._documents.get(path)

    def with_documents(
        self,
        documents: Iterable[Document],
        failures: Iterable[LoadFailure] = (),
    ) -> CorpusIndex:
        """Return a new index holding these documents on top of this one."""
        return CorpusIndex(
            [*self._documents.values(), *documents],
            [*self._failures, *failures],
        )

    # --- Derived views -------------------------------------------------

    @property
    def by_date(self) -> tuple[Document, ...]:
        return self._by_date

    @property
    def by_category(self) -> Mapping[str, tuple[str, ...]]:
        """Category to document paths, in load order within a category."""
        return MappingProxyType(self._by_category)

    def all_documents_sorted(self) -> tuple[Document, ...]:
        return self._by_date

    def documents_by_category(self, category: str) -> tuple[Document, ...]:
        """Documents filed under *category*, newest first.

        An unknown category yields an empty tuple.
        """
        paths = self._by_category.get(category, ())
        return sort_by_date(self._documents[path] for path in paths)

    def categories(self) -> dict[str, int]:
        """Category name to document count, most used first, then by name."""
        counts = {name: len(paths) for name, paths in self._by_category.items()}
        return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))

    def by_year(self) -> dict[int, tuple[Document, ...]]:
        """Dated documents grouped by year, newest year first.

        The year is the one written in the date, not its UTC equivalent;
        within a year documents keep :attr:`by_date` order.
        """
        years: dict[int, list[Document]] = {}
        for document in self._by_date:
            moment = document.date
            if moment is None:
                continue
            years.setdefault(moment.year, []).append(document)
        return {year: tuple(years[year]) for year in sorted(years, reverse=True)}

    def paginate(
        self,
        page: int = 1,
        per_page: int = 10,
        *,
        category: str | None = None,
    ) -> Page:
        """Slice :meth:`all_documents_sorted` into 1-based pages.

        With *category*, pages run over :meth:`documents_by_category`
        instead. A page past the last one is empty rather than an error.

        Raises:
            ValueError: If *page* or *per_page* is less than 1.
        """
        if per_page < 1:
            msg = f"per_page must be at least 1, got {per_page}"
            raise ValueError(msg)
        if page < 1:
            msg = f"page must be at least 1, got {page}"
            raise ValueError(msg)

        ordered = self._by_date if category is None else self.documents_by_category(category)
        total = len(ordered)
        start = (page - 1) * per_page
        return Page(
            number=page,
            per_page=per_page,
            total_pages=max(1, math.ceil(total / per_page)),
            total_documents=total,
            documents=ordered[start : start + per_page],
        )
