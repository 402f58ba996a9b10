"""CorpusService — build and query the post index.

Five read-only surfaces, each loading the corpus fresh from disk:
- build: load everything, report counts and per-file failures
- list_posts: newest-first listing, optionally one category or one page
- categories: category names with document counts
- archive: documents grouped by year
- show: a single document with its metadata, URL, excerpt, and body

The loaded :class:`CorpusIndex` is passed between steps as a value; no
service keeps a cache across calls.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Any, NamedTuple

from postctl.domain.document import Document
from postctl.domain.errors import CorpusError, SiteConfigError
from postctl.domain.index import CorpusIndex, LoadFailure
from postctl.infrastructure.loader import MalformedPolicy, load_directory
from postctl.infrastructure.site_config import SiteConfig, find_site_config, load_site_config
from postctl.services.base import BaseService
from postctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class _Loaded(NamedTuple):
    index: CorpusIndex
    site: SiteConfig
    warnings: list[str]


def _iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


def _failure_dict(failure: LoadFailure) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "path": failure.path,
        "code": failure.error.code,
        "message": failure.error.message,
    }
    line = getattr(failure.error, "line", None)
    if line is not None:
        entry["line"] = line
    return entry


class CorpusService(BaseService):
    """Loads a post directory and answers questions about it."""

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def site_config(self, input_dir: Path) -> SiteConfig:
        """Find and load the site ``_config.yml`` above *input_dir*.

        Raises:
            SiteConfigError: If a config file exists but is invalid.
        """
        section = self.settings.site
        if not section.use_site_config:
            return SiteConfig()
        return load_site_config(find_site_config(input_dir, section.config_file))

    def load_index(
        self,
        input_dir: Path,
        *,
        site: SiteConfig | None = None,
        on_malformed: MalformedPolicy | str | None = None,
        workers: int | None = None,
    ) -> CorpusIndex:
        """Load every post under *input_dir*.

        ``[corpus] exclude`` globs are relative to *input_dir*; the site
        config's ``exclude`` globs are relative to the site root.

        Raises:
            UnreadableFileError: If *input_dir* is not a readable directory.
            EmptyInputError: If *input_dir* holds no posts.
        """
        corpus = self.settings.corpus
        site = site or SiteConfig()
        return load_directory(
            input_dir,
            extensions=corpus.extensions,
            exclude=corpus.exclude,
            site_root=site.root,
            site_exclude=site.exclude,
            on_malformed=on_malformed or corpus.on_malformed,
            workers=workers or corpus.workers,
        )

    def _load(
        self,
        op: str,
        input_dir: Path,
        **kwargs: Any,
    ) -> _Loaded | ServiceResult:
        """Load the site config and the index for one operation.

        A bad site config is reported as a warning and replaced by
        defaults; only an unusable *input_dir* fails the operation.
        """
        warnings: list[str] = []
        try:
            site = self.site_config(input_dir)
        except SiteConfigError as exc:
            logger.info("Ignoring site config: %s", exc)
            warnings.append(f"{exc} (using defaults)")
            site = SiteConfig()

        try:
            index = self.load_index(input_dir, site=site, **kwargs)
        except CorpusError as exc:
            return self._fail(op, exc, input_dir=str(input_dir))
        warnings.extend(str(failure.error) for failure in index.failures)
        return _Loaded(index, site, warnings)

    @staticmethod
    def _summary(document: Document, site: SiteConfig) -> dict[str, Any]:
        return {
            "path": document.path,
            "title": document.title,
            "date": _iso(document.date),
            "layout": document.layout,
            "categories": document.categories,
            "comments": document.comments,
            "slug": document.slug,
            "url": site.baseurl.rstrip("/") + document.url(site.permalink),
        }

    # ------------------------------------------------------------------
    # build
    # ------------------------------------------------------------------

    def build(
        self,
        input_dir: Path,
        *,
        on_malformed: MalformedPolicy | str | None = None,
        workers: int | None = None,
    ) -> ServiceResult:
        """Load the corpus and report what was indexed and what failed."""
        started = time.perf_counter()
        loaded = self._load("build", input_dir, on_malformed=on_malformed, workers=workers)
        if isinstance(loaded, ServiceResult):
            return loaded
        index, site, warnings = loaded

        dated = [doc.date for doc in index.all_documents_sorted() if doc.date is not None]
        return ServiceResult(
            ok=True,
            op="build",
            data={
                "input_dir": str(input_dir),
                "site_title": site.title,
                "count": len(index),
                "category_count": len(index.by_category),
                "failure_count": len(index.failures),
                "newest": _iso(dated[0]) if dated else None,
                "oldest": _iso(dated[-1]) if dated else None,
                "failures": [_failure_dict(f) for f in index.failures],
            },
            warnings=warnings,
            meta={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
        )

    # ------------------------------------------------------------------
    # list_posts
    # ------------------------------------------------------------------

    def list_posts(
        self,
        input_dir: Path,
        *,
        category: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> ServiceResult:
        """List posts newest first.

        Args:
            input_dir: The post directory.
            category: Only posts filed under this category.
            page: 1-based page number; None lists everything.
            per_page: Page size; defaults to the site's pagination size.
        """
        loaded = self._load("posts", input_dir)
        if isinstance(loaded, ServiceResult):
            return loaded
        index, site, warnings = loaded

        data: dict[str, Any] = {"category": category}
        if page is None and per_page is None:
            if category is None:
                documents = index.all_documents_sorted()
            else:
                documents = index.documents_by_category(category)
        else:
            try:
                chunk = index.paginate(
                    1 if page is None else page,
                    site.per_page if per_page is None else per_page,
                    category=category,
                )
            except ValueError as exc:
                return ServiceResult.failure("posts", "INVALID_PAGE", str(exc))
            documents = chunk.documents
            data.update(
                page=chunk.number,
                per_page=chunk.per_page,
                total_pages=chunk.total_pages,
                total=chunk.total_documents,
            )

        items = [self._summary(doc, site) for doc in documents]
        data.update(items=items, count=len(items))
        return ServiceResult(ok=True, op="posts", data=data, warnings=warnings)

    # ------------------------------------------------------------------
    # categories
    # ------------------------------------------------------------------

    def categories(self, input_dir: Path) -> ServiceResult:
        """Every category with its document count, most used first."""
        loaded = self._load("categories", input_dir)
        if isinstance(loaded, ServiceResult):
            return loaded
        index, _site, warnings = loaded

        items = [{"category": name, "count": count} for name, count in index.categories().items()]
        return ServiceResult(
            ok=True,
            op="categories",
            data={"items": items, "count": len(items)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # archive
    # ------------------------------------------------------------------

    def archive(self, input_dir: Path) -> ServiceResult:
        """Dated posts grouped by year, newest year first."""
        loaded = self._load("archive", input_dir)
        if isinstance(loaded, ServiceResult):
            return loaded
        index, site, warnings = loaded

        years = [
            {
                "year": year,
                "count": len(documents),
                "items": [self._summary(doc, site) for doc in documents],
            }
            for year, documents in index.by_year().items()
        ]
        return ServiceResult(
            ok=True,
            op="archive",
            data={"years": years, "count": sum(y["count"] for y in years)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # show
    # ------------------------------------------------------------------

    def show(self, input_dir: Path, path: str) -> ServiceResult:
        """One document by path (relative to *input_dir*) or by slug."""
        loaded = self._load("show", input_dir)
        if isinstance(loaded, ServiceResult):
            return loaded
        index, site, warnings = loaded

        document = index.get(path)
        if document is None:
            document = next((doc for doc in index if doc.slug == path), None)
        if document is None:
            return ServiceResult.failure(
                "show", "NOT_FOUND", f"No post with path or slug {path!r}", path=path
            )

        data = self._summary(document, site)
        data.update(
            front_matter={
                key: _iso(value) if isinstance(value, datetime) else value
                for key, value in document.front_matter.items()
            },
            excerpt=document.excerpt,
            body=document.body,
        )
        return ServiceResult(ok=True, op="show", data=data, warnings=warnings)
